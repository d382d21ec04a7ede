"""
Conversation Store - bounded per-session message histories.
"""

import threading
import uuid
from typing import Dict, List, Tuple
from loguru import logger

from ...models.internal import Message
from ...models.enums import Role


DEFAULT_MAX_TURNS = 20


class ConversationHistory:
    """
    Ordered message history for one session key.

    Every mutation and read happens under the history's own lock, so readers
    never see an append whose trim has not run yet.
    """

    def __init__(self, max_turns: int = DEFAULT_MAX_TURNS):
        if max_turns < 1:
            raise ValueError("max_turns must be at least 1")
        self.max_turns = max_turns
        self._messages: List[Message] = []
        self._lock = threading.Lock()

    def append(self, *messages: Message) -> None:
        with self._lock:
            self._messages.extend(messages)
            overflow = len(self._messages) - self.max_turns
            if overflow > 0:
                del self._messages[:overflow]

    def snapshot(self) -> Tuple[Message, ...]:
        with self._lock:
            return tuple(self._messages)

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)


class ConversationStore:
    """
    Owns every session's conversation history.

    The key map has its own lock, held only while looking up or inserting a
    key, so two callers racing on a brand-new key end up sharing the single
    history that won. Appends and snapshots lock the per-key history only,
    which keeps unrelated sessions from serializing on each other.

    Histories live for the process lifetime; the key space is never evicted.
    """

    def __init__(self, max_turns: int = DEFAULT_MAX_TURNS):
        self.max_turns = max_turns
        self._histories: Dict[str, ConversationHistory] = {}
        self._map_lock = threading.Lock()
        logger.info(f"ConversationStore initialized (max_turns={max_turns})")

    @staticmethod
    def new_session_id() -> str:
        """Generate a fresh session key."""
        return str(uuid.uuid4())

    def get_or_create(self, session_id: str) -> ConversationHistory:
        """Return the history for ``session_id``, creating an empty one on first use."""
        history = self._histories.get(session_id)
        if history is not None:
            return history

        with self._map_lock:
            history = self._histories.get(session_id)
            if history is None:
                history = ConversationHistory(self.max_turns)
                self._histories[session_id] = history
                logger.debug(f"Created conversation history for session {session_id}")
            return history

    def append(self, session_id: str, role: Role, content: str) -> None:
        """Append one message and trim the oldest ones beyond ``max_turns``."""
        self.get_or_create(session_id).append(Message(role=role, content=content))

    def append_turn(self, session_id: str, user_content: str, assistant_content: str) -> None:
        """Append a user message and the assistant reply as one atomic step."""
        self.get_or_create(session_id).append(
            Message(role=Role.USER, content=user_content),
            Message(role=Role.ASSISTANT, content=assistant_content),
        )

    def snapshot(self, session_id: str) -> Tuple[Message, ...]:
        """Read-only copy of the session's messages in chronological order."""
        return self.get_or_create(session_id).snapshot()

    def reset(self, session_id: str) -> None:
        """Clear the session's history."""
        self.get_or_create(session_id).clear()
        logger.info(f"Conversation history cleared for session {session_id}")

    def session_count(self) -> int:
        """Number of session keys seen so far."""
        with self._map_lock:
            return len(self._histories)
