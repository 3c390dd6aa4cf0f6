"""
HTTP client utilities with connection pooling.
Provides reusable httpx clients for the upstream LLM and resume downloads.
"""
import httpx
from config import Config


class HTTPClientManager:
    """Manages shared httpx clients with connection pooling."""

    _llm_client: httpx.AsyncClient | None = None
    _fetch_client: httpx.AsyncClient | None = None

    @classmethod
    def get_llm_client(cls) -> httpx.AsyncClient:
        """
        Get or create a shared httpx client for chat-completion calls.

        Features:
        - Connection pooling (reuses TCP connections to the upstream)
        - Transport default timeout, no retries

        Returns:
            Configured httpx.AsyncClient for upstream calls
        """
        if cls._llm_client is None:
            limits = httpx.Limits(
                max_connections=20,
                max_keepalive_connections=5,
                keepalive_expiry=30.0
            )

            cls._llm_client = httpx.AsyncClient(
                limits=limits,
                http2=True
            )

        return cls._llm_client

    @classmethod
    def get_fetch_client(cls) -> httpx.AsyncClient:
        """
        Get or create a shared httpx client for downloading resume documents.

        Returns:
            Configured httpx.AsyncClient that follows redirects
        """
        if cls._fetch_client is None:
            cls._fetch_client = httpx.AsyncClient(
                timeout=Config.RESUME_FETCH_TIMEOUT,
                follow_redirects=True,
                max_redirects=Config.MAX_REDIRECTS,
                http2=True
            )

        return cls._fetch_client

    @classmethod
    async def close_all(cls) -> None:
        """
        Close all managed clients and clean up connections.
        """
        if cls._llm_client is not None:
            await cls._llm_client.aclose()
            cls._llm_client = None

        if cls._fetch_client is not None:
            await cls._fetch_client.aclose()
            cls._fetch_client = None
