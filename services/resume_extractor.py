"""
Resume text extraction service.
Fetches a resume from a URL or local path and extracts plain text.
Failures never propagate: callers always receive a string.
"""
import asyncio
import io
import re
from pathlib import Path

import httpx
from pypdf import PdfReader

from utils.constants import PDF_MAGIC, Patterns
from utils.exceptions import ExtractionError
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


class ResumeExtractor:
    """Service for turning a resume document into plain text."""

    async def extract(self, source: str) -> str:
        """
        Extract text from a resume document.

        Args:
            source: http(s) URL or local filesystem path to a PDF or text file

        Returns:
            Extracted text, or an empty string if anything goes wrong
        """
        if not source or not source.strip():
            app_logger.warning("No resume source configured, using empty resume text")
            return ""

        try:
            raw = await self._read_source(source.strip())
            text = await asyncio.to_thread(self._extract_text, raw)
        except ExtractionError as e:
            app_logger.warning(f"Failed to extract text from resume '{source}': {e}")
            return ""

        app_logger.info(f"Extracted {len(text)} characters from resume")
        return text

    async def _read_source(self, source: str) -> bytes:
        """Load raw document bytes from a remote URL or local path."""
        if re.match(Patterns.REMOTE_SOURCE, source, re.IGNORECASE):
            return await self._fetch_remote(source)
        return await asyncio.to_thread(self._read_local, source)

    @staticmethod
    async def _fetch_remote(url: str) -> bytes:
        client = HTTPClientManager.get_fetch_client()
        try:
            response = await client.get(url)
        except httpx.TimeoutException as e:
            raise ExtractionError(f"timeout fetching resume: {e}") from e
        except httpx.RequestError as e:
            raise ExtractionError(f"request error fetching resume: {e}") from e

        if not response.is_success:
            raise ExtractionError(f"resume fetch returned HTTP {response.status_code}")

        return response.content

    @staticmethod
    def _read_local(path: str) -> bytes:
        try:
            return Path(path).expanduser().read_bytes()
        except (OSError, ValueError) as e:
            raise ExtractionError(f"cannot read resume file: {e}") from e

    @classmethod
    def _extract_text(cls, raw: bytes) -> str:
        """Extract and normalise text from PDF or plain-text bytes."""
        if raw.lstrip().startswith(PDF_MAGIC):
            text = cls._parse_pdf(raw)
        else:
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ExtractionError(f"resume is neither PDF nor UTF-8 text: {e}") from e

        text = cls._normalise(text)
        if not text:
            raise ExtractionError("resume contains no extractable text")
        return text

    @staticmethod
    def _parse_pdf(raw: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(raw))
            pages = [(page.extract_text() or "").strip() for page in reader.pages]
        except Exception as e:
            raise ExtractionError(f"unreadable PDF: {e}") from e
        return "\n\n".join(page for page in pages if page)

    @staticmethod
    def _normalise(text: str) -> str:
        text = text.replace("\r\n", "\n").replace("\t", " ")
        text = re.sub(Patterns.MULTI_SPACE, " ", text)
        text = re.sub(Patterns.MULTI_NEWLINE, "\n\n", text)
        return text.strip()
