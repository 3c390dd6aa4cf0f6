"""
Conversation store with bounded history and insertion-order eviction.
Optionally mirrors each conversation to a date-prefixed JSON file.
"""
import json
import re
from pathlib import Path
from typing import Optional

from config import Config
from models.api_models import Message
from models.chat_models import ConversationRecord
from utils.constants import Patterns, RECORD_DATE_FORMAT
from utils.exceptions import ConversationFullError
from utils.logger import app_logger


class ConversationStore:
    """
    Mapping from conversation id to ordered message history.

    Keys keep insertion order; eviction drops the earliest-inserted key,
    regardless of when it was last read or written.
    """

    def __init__(
        self,
        max_messages: int = Config.MAX_MESSAGES,
        max_conversations: int = Config.MAX_CONVERSATIONS,
        persist_dir: Optional[str] = None
    ):
        """
        Initialize the conversation store.

        Args:
            max_messages: Maximum messages per conversation (default 30)
            max_conversations: Conversations tracked before eviction (default 20)
            persist_dir: Directory for JSON records, None keeps history in memory only
        """
        self._max_messages = max_messages
        self._max_conversations = max_conversations
        self._records: dict[str, ConversationRecord] = {}

        self._persist_dir: Optional[Path] = None
        if persist_dir:
            self._persist_dir = Path(persist_dir)
            self._persist_dir.mkdir(parents=True, exist_ok=True)
            app_logger.info(f"Conversation records persisted to: {self._persist_dir}")

    @property
    def max_messages(self) -> int:
        return self._max_messages

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, conversation_id: str) -> bool:
        return conversation_id in self._records

    def conversation_ids(self) -> list[str]:
        """Tracked ids, earliest-inserted first."""
        return list(self._records)

    def get(self, conversation_id: str) -> list[Message]:
        """
        Get a copy of a conversation's history.

        Falls back to the persisted record when there is no in-memory entry.
        Returns an empty list if the conversation is unknown or unreadable.
        """
        record = self._records.get(conversation_id)
        if record is None:
            record = self._load(conversation_id)
        return list(record.messages) if record else []

    def append(self, conversation_id: str, message: Message) -> None:
        """
        Append a message, creating the conversation if needed.

        Raises:
            ConversationFullError: history already holds max_messages entries
        """
        record = self._records.get(conversation_id)
        if record is None:
            record = self._load(conversation_id) or ConversationRecord(conversation_id=conversation_id)

        if len(record.messages) >= self._max_messages:
            raise ConversationFullError()

        if conversation_id not in self._records:
            self._records[conversation_id] = record
            app_logger.debug(f"Tracking conversation {conversation_id} ({len(self._records)} active)")

        record.messages.append(message)
        self._save(record)
        self.evict_if_over_capacity()

    def evict_if_over_capacity(self) -> Optional[str]:
        """
        Drop the earliest-inserted conversation if the ceiling is exceeded.

        Returns:
            The evicted id, or None if nothing was removed
        """
        if len(self._records) <= self._max_conversations:
            return None

        oldest_id = next(iter(self._records))
        del self._records[oldest_id]
        app_logger.info(f"Evicted conversation {oldest_id} ({len(self._records)} active)")
        return oldest_id

    def _record_path(self, conversation_id: str) -> Optional[Path]:
        """Locate an existing record file for a conversation."""
        if self._persist_dir is None or not re.match(Patterns.CONVERSATION_ID, conversation_id):
            return None

        existing = sorted(self._persist_dir.glob(f"????-??-??_{conversation_id}.json"))
        if existing:
            return existing[0]
        return None

    def _new_record_path(self, record: ConversationRecord) -> Path:
        return self._persist_dir / f"{record.created.strftime(RECORD_DATE_FORMAT)}_{record.conversation_id}.json"

    def _load(self, conversation_id: str) -> Optional[ConversationRecord]:
        path = self._record_path(conversation_id)
        if path is None:
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            record = ConversationRecord.from_dict(data, conversation_id=conversation_id)
        except (OSError, ValueError, KeyError, TypeError) as e:
            app_logger.warning(f"Could not load conversation record {path.name}: {e}")
            return None

        app_logger.info(f"Loaded conversation {conversation_id} from disk ({len(record.messages)} messages)")
        return record

    def _save(self, record: ConversationRecord) -> None:
        if self._persist_dir is None or not re.match(Patterns.CONVERSATION_ID, record.conversation_id):
            return

        path = self._record_path(record.conversation_id) or self._new_record_path(record)
        try:
            path.write_text(json.dumps(record.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            app_logger.error(f"Failed to persist conversation {record.conversation_id}: {e}")
