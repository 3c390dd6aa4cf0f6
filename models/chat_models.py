"""
Data models for chat processing.
Contains upstream call settings and the persisted conversation record.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from config import Config
from models.api_models import ChatRequest, Message


@dataclass(frozen=True)
class ModelConfig:
    """Upstream chat-completion settings for one relay call."""
    model: str = Config.DEFAULT_MODEL
    endpoint: str = Config.OPENROUTER_URL
    credential: str = ""
    temperature: float = Config.DEFAULT_TEMPERATURE

    @classmethod
    def from_request(cls, request: ChatRequest) -> "ModelConfig":
        """
        Build settings from a request, falling back to configured defaults.

        The configured API key is only used for the configured endpoint; a
        custom endpoint must bring its own credential.
        """
        endpoint = request.endpoint or Config.OPENROUTER_URL
        credential = request.credential
        if not credential and endpoint == Config.OPENROUTER_URL:
            credential = Config.OPENROUTER_API_KEY

        return cls(
            model=request.model or Config.DEFAULT_MODEL,
            endpoint=endpoint,
            credential=credential or "",
            temperature=Config.DEFAULT_TEMPERATURE if request.temperature is None else request.temperature
        )

    @property
    def headers(self) -> dict:
        """Request headers for the upstream call."""
        return {
            "Authorization": f"Bearer {self.credential}",
            "Content-Type": "application/json",
        }


@dataclass
class ConversationRecord:
    """
    Durable copy of one conversation.
    Holds the ordered history without the system message.
    """
    conversation_id: str
    created: date = field(default_factory=date.today)
    messages: list[Message] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "conversation_id": self.conversation_id,
            "created": self.created.isoformat(),
            "messages": [message.model_dump() for message in self.messages],
        }

    @classmethod
    def from_dict(cls, data: dict, conversation_id: Optional[str] = None) -> "ConversationRecord":
        """Parse a stored record. Raises on malformed data."""
        return cls(
            conversation_id=conversation_id or data["conversation_id"],
            created=date.fromisoformat(data["created"]),
            messages=[Message.model_validate(item) for item in data["messages"]]
        )
