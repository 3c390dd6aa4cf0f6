"""
Models package exports.
"""
from models.api_models import Message, ChatRequest, ChatResponse, ErrorResponse
from models.chat_models import ModelConfig, ConversationRecord

__all__ = [
    'Message',
    'ChatRequest',
    'ChatResponse',
    'ErrorResponse',
    'ModelConfig',
    'ConversationRecord'
]
