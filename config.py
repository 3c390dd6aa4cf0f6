"""
Configuration module for the Resume Chat Relay application.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration class."""

    # API Keys
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")
    API_KEY: str = os.getenv("API_KEY", "")

    # API Configuration
    OPENROUTER_URL: str = os.getenv("OPENROUTER_URL", "https://openrouter.ai/api/v1/chat/completions")
    DEFAULT_MODEL: str = os.getenv("DEFAULT_MODEL", "google/gemini-flash-1.5-8b")
    DEFAULT_TEMPERATURE: float = float(os.getenv("DEFAULT_TEMPERATURE", "0.1"))

    # Candidate profile
    CANDIDATE_NAME: str = os.getenv("CANDIDATE_NAME", "")
    RESUME_SOURCE: str = os.getenv("RESUME_SOURCE", "")

    # Application Settings
    APP_TITLE: str = "Resume Chat Relay"
    MAX_MESSAGES: int = int(os.getenv("MAX_MESSAGES", "30"))
    MAX_CONVERSATIONS: int = int(os.getenv("MAX_CONVERSATIONS", "20"))
    MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "4000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Empty keeps conversations in memory only
    CONVERSATIONS_DIR: str = os.getenv("CONVERSATIONS_DIR", "")

    # Timeouts (in seconds)
    RESUME_FETCH_TIMEOUT: float = float(os.getenv("RESUME_FETCH_TIMEOUT", "15.0"))
    MAX_REDIRECTS: int = 5

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and print warnings for missing settings."""
        if not cls.OPENROUTER_API_KEY:
            print("   WARNING: OPENROUTER_API_KEY not found in .env file")
            print("   Requests must then carry their own 'credential'. Get a key from: https://openrouter.ai/keys")

        if not cls.RESUME_SOURCE:
            print("   WARNING: RESUME_SOURCE not found in .env file")
            print("   The assistant will answer without any resume content.")


Config.validate()
