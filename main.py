"""
Resume Chat Relay - FastAPI backend for the floating career-assistant widget.
Relays widget messages to OpenRouter with a resume-derived system prompt.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import APIKeyMiddleware
from config import Config
from routes import chat
from services.chat_relay import build_relay
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager: owns the relay and shared HTTP clients."""
    app.state.relay = build_relay()
    app_logger.info(
        f"Relay ready: model={Config.DEFAULT_MODEL}, max_messages={Config.MAX_MESSAGES}, "
        f"max_conversations={Config.MAX_CONVERSATIONS}"
    )
    yield
    await HTTPClientManager.close_all()


app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)

# Registered before CORS so CORS headers also cover 401/403 responses
app.add_middleware(APIKeyMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with a single user-friendly message."""
    errors = exc.errors()
    app_logger.error(f"Validation error for {request.url}: {errors}")

    message = "Validation error"
    if errors:
        first_error = errors[0]
        error_type = first_error.get('type', '')
        field = first_error.get('loc', [])[-1] if first_error.get('loc') else 'field'

        if error_type == 'string_too_long':
            max_length = first_error.get('ctx', {}).get('max_length', 'unknown')
            current_length = len(first_error.get('input', ''))
            message = f"Field '{field}' exceeds maximum length of {max_length} characters (current: {current_length})"
        elif error_type == 'string_pattern_mismatch':
            message = f"Field '{field}' has an invalid format"
        else:
            message = f"{field}: {first_error.get('msg', 'Validation error')}"

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": message, "status": status.HTTP_422_UNPROCESSABLE_ENTITY},
    )


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"message": "Resume Chat Relay is running"}


app.include_router(chat.router, tags=["chat"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
