"""
Authentication middleware for API key verification.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from config import Config
from utils.logger import app_logger


class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Checks X-API-Key header against configured API_KEY.
    Disabled when API_KEY is empty, so the widget can call the relay directly.
    """

    EXCLUDED_PATHS = {"/", "/docs", "/openapi.json", "/redoc"}
    API_KEY: str = Config.API_KEY

    async def dispatch(self, request: Request, call_next):
        """
        Process each request and verify API key.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from next handler or error response
        """
        if not self.API_KEY:
            return await call_next(request)

        # CORS preflight never carries custom headers
        if request.method == "OPTIONS" or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        client_host = request.client.host if request.client else "unknown"

        if not api_key:
            app_logger.warning(f"Unauthorized request from {client_host} - Missing API key")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "error": "Missing API key. Include 'X-API-Key' header in your request.",
                    "status": status.HTTP_401_UNAUTHORIZED
                },
                headers={"WWW-Authenticate": "ApiKey"},
            )

        if api_key != self.API_KEY:
            app_logger.warning(f"Forbidden request from {client_host} - Invalid API key")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={
                    "error": "Invalid API key",
                    "status": status.HTTP_403_FORBIDDEN
                },
            )

        return await call_next(request)
