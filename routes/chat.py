"""
Route handlers for chat operations.
Handles the /chat endpoint used by the widget.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from config import Config
from models.api_models import ChatRequest, ChatResponse, ErrorResponse
from models.chat_models import ModelConfig
from services.chat_relay import ChatRelay

router = APIRouter()


def get_relay(request: Request) -> ChatRelay:
    """Resolve the application-wide relay created during startup."""
    return request.app.state.relay


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def chat(request: ChatRequest, relay: ChatRelay = Depends(get_relay)):
    """
    Relay one user message to the upstream model.

    Returns {result, conversationId} on success, or {error, status}
    with the matching HTTP status code on failure.
    """
    outcome = await relay.handle_message(
        name=request.name or Config.CANDIDATE_NAME,
        user_text=request.message,
        conversation_id=request.conversation_id,
        model_config=ModelConfig.from_request(request)
    )

    if "error" in outcome:
        return JSONResponse(status_code=outcome["status"], content=outcome)

    return outcome
