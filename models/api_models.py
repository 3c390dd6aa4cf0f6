"""
Pydantic data models for API requests and responses.
"""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from config import Config
from utils.constants import Patterns


class Message(BaseModel):
    """Chat message model. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Chat request sent by the widget."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., max_length=Config.MAX_MESSAGE_LENGTH)
    name: Optional[str] = None
    conversation_id: Optional[str] = Field(None, alias="conversationId", pattern=Patterns.CONVERSATION_ID)
    model: Optional[str] = None
    endpoint: Optional[str] = None
    credential: Optional[str] = Field(None, description="Bearer token for the upstream API")
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)


class ChatResponse(BaseModel):
    """Successful relay result."""
    model_config = ConfigDict(populate_by_name=True)

    result: str
    conversation_id: str = Field(..., alias="conversationId")


class ErrorResponse(BaseModel):
    """Failed relay result."""
    error: str
    status: int
