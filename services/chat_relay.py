"""
Chat relay service.
Appends the user turn, prepends the system prompt, calls the upstream
chat-completion endpoint and records the assistant reply.
"""
import asyncio
import uuid
from typing import Callable, Optional

import httpx

from config import Config
from models.api_models import Message
from models.chat_models import ModelConfig
from services.conversation_store import ConversationStore
from services.prompt_builder import SystemPromptBuilder
from utils.constants import Role
from utils.exceptions import (
    ConversationFullError,
    EmptyInputError,
    MissingCredentialError,
    RelayError,
    UpstreamError,
)
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


class ChatRelay:
    """
    Relays widget messages to the upstream LLM.

    Holds the session state (conversation store and prompt builder) by
    reference; one instance lives for the lifetime of the application.
    """

    def __init__(
        self,
        store: ConversationStore,
        prompt_builder: SystemPromptBuilder,
        resume_source: str = "",
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None
    ):
        self.store = store
        self.prompt_builder = prompt_builder
        self.resume_source = resume_source
        self._client_factory = client_factory or HTTPClientManager.get_llm_client
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    async def handle_message(
        self,
        name: str,
        user_text: str,
        conversation_id: Optional[str],
        model_config: ModelConfig
    ) -> dict:
        """
        Process one chat turn.

        Args:
            name: Candidate name used in the system prompt
            user_text: Message typed by the user
            conversation_id: Existing conversation id, or None to start a new one
            model_config: Upstream model, endpoint, credential and temperature

        Returns:
            {"result", "conversationId"} on success, {"error", "status"} on failure
        """
        try:
            if not user_text or not user_text.strip():
                raise EmptyInputError()
            if not model_config.credential:
                raise MissingCredentialError()

            current_id = conversation_id or str(uuid.uuid4())
            lock = self._acquire_lock(current_id)
            try:
                async with lock:
                    result = await self._run_turn(name, user_text, current_id, model_config)
            finally:
                self._release_lock(current_id)

            return {"result": result, "conversationId": current_id}

        except RelayError as e:
            if isinstance(e, UpstreamError):
                app_logger.error(f"Chat relay failed: {e.status} {e}")
            else:
                app_logger.warning(f"Chat relay rejected request: {e.status} {e}")
            return e.to_payload()

    async def _run_turn(self, name: str, user_text: str, conversation_id: str, model_config: ModelConfig) -> str:
        history = self.store.get(conversation_id)
        if len(history) >= self.store.max_messages:
            raise ConversationFullError()

        user_message = Message(role=Role.USER, content=user_text)
        self.store.append(conversation_id, user_message)
        history.append(user_message)

        system_prompt = await self.prompt_builder.get_system_prompt(name, self.resume_source)
        messages = [Message(role=Role.SYSTEM, content=system_prompt), *history]

        app_logger.info(
            f"Calling {model_config.model} for conversation {conversation_id} "
            f"({len(history)} history messages)"
        )
        # The user turn stays stored if this fails; no assistant message is added.
        result = await self.request_completion(messages, model_config)

        try:
            self.store.append(conversation_id, Message(role=Role.ASSISTANT, content=result))
        except ConversationFullError:
            # Only reachable when an earlier failed turn left an odd-length history.
            app_logger.warning(f"Conversation {conversation_id} filled up; reply returned but not stored")
        app_logger.info(f"Conversation {conversation_id}: reply of {len(result)} characters")
        return result

    async def request_completion(self, messages: list[Message], model_config: ModelConfig) -> str:
        """
        Send one chat-completion request and return the reply text.

        Raises:
            UpstreamError: transport failure, non-2xx status or malformed body
        """
        payload = {
            "model": model_config.model,
            "messages": [message.model_dump() for message in messages],
            "temperature": model_config.temperature,
        }

        client = self._client_factory()
        try:
            response = await client.post(model_config.endpoint, json=payload, headers=model_config.headers)
        except httpx.HTTPError as e:
            app_logger.error(f"Upstream request error: {e}")
            raise UpstreamError() from e

        if not response.is_success:
            app_logger.error(f"Upstream returned HTTP {response.status_code}: {response.text[:500]}")
            raise UpstreamError()

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            app_logger.error(f"Malformed upstream response: {e!r} body={response.text[:500]}")
            raise UpstreamError() from e

        if not isinstance(content, str):
            app_logger.error(f"Upstream content is not text: {type(content).__name__}")
            raise UpstreamError()

        return content

    def _acquire_lock(self, conversation_id: str) -> asyncio.Lock:
        """Get the per-conversation lock, registering the caller as a user."""
        lock = self._locks.setdefault(conversation_id, asyncio.Lock())
        self._lock_users[conversation_id] = self._lock_users.get(conversation_id, 0) + 1
        return lock

    def _release_lock(self, conversation_id: str) -> None:
        """Drop the caller's claim; the lock is discarded once nobody holds or awaits it."""
        self._lock_users[conversation_id] -= 1
        if self._lock_users[conversation_id] == 0:
            del self._lock_users[conversation_id]
            del self._locks[conversation_id]

    @property
    def active_locks(self) -> int:
        return len(self._locks)


def build_relay() -> ChatRelay:
    """Create the application's relay with configured session state."""
    store = ConversationStore(
        max_messages=Config.MAX_MESSAGES,
        max_conversations=Config.MAX_CONVERSATIONS,
        persist_dir=Config.CONVERSATIONS_DIR or None
    )
    return ChatRelay(
        store=store,
        prompt_builder=SystemPromptBuilder(),
        resume_source=Config.RESUME_SOURCE
    )
