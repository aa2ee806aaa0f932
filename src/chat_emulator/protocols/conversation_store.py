"""Conversation history storage protocol."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from chat_emulator.entities import ChatMessageEntity


@runtime_checkable
class ConversationStore(Protocol):
    """Protocol for bounded conversation history backends."""

    def put(self, conversation_id: str, messages: Sequence[ChatMessageEntity]) -> None:
        """Insert or overwrite a conversation's (truncated) history.

        Args:
            conversation_id: Opaque conversation id
            messages: Normalized message sequence
        """
        ...

    def get(self, conversation_id: str) -> list[ChatMessageEntity] | None:
        """Return the stored history, or None if unknown or evicted."""
        ...

    def sweep(self) -> int:
        """Evict old conversations when the store is over capacity.

        Returns:
            Number of conversations evicted
        """
        ...

    def count(self) -> int:
        """Count conversations currently held."""
        ...
