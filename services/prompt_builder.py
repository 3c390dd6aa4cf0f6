"""
System prompt builder.
Builds the career-assistant prompt once and serves the cached copy afterwards.
"""
import asyncio
from typing import Optional

from services.resume_extractor import ResumeExtractor
from utils.constants import RESUME_ASSISTANT_PROMPT
from utils.logger import app_logger


class SystemPromptBuilder:
    """
    Owns the memoized system prompt for the lifetime of its host.

    The prompt is never invalidated: later calls return the first result
    even if the name or resume source change. Restart to rebuild it.
    """

    def __init__(self, extractor: Optional[ResumeExtractor] = None):
        self._extractor = extractor or ResumeExtractor()
        self._cached: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def is_cached(self) -> bool:
        return self._cached is not None

    @staticmethod
    def build(name: str, resume_text: str) -> str:
        """Fill the prompt template with the candidate name and resume text."""
        return RESUME_ASSISTANT_PROMPT.format(name=name, resume_text=resume_text)

    async def get_system_prompt(self, name: str, resume_source: str) -> str:
        """
        Return the system prompt, computing it on first use.

        Args:
            name: Candidate name embedded in the prompt
            resume_source: URL or path of the resume document

        Returns:
            The cached prompt string
        """
        if self._cached is not None:
            return self._cached

        async with self._lock:
            if self._cached is None:
                resume_text = await self._extractor.extract(resume_source)
                self._cached = self.build(name, resume_text)
                app_logger.info(
                    f"System prompt built for '{name}' ({len(resume_text)} resume chars, "
                    f"{len(self._cached)} prompt chars)"
                )

        return self._cached
