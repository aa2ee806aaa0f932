"""In-process implementation of ConversationStore."""

import logging
from collections.abc import Sequence

from chat_emulator.config import settings
from chat_emulator.entities import ChatMessageEntity

logger = logging.getLogger(__name__)


class InMemoryConversationRepository:
    """Bounded conversation history keyed by conversation id.

    This class satisfies the ConversationStore protocol through structural
    typing - no explicit inheritance needed.

    Each history is truncated to the most recent ``max_history`` messages.
    When more than ``max_conversations`` are held, ``sweep`` drops the oldest
    ``evict_fraction`` of them by insertion order (lookups do not count as
    use). Overwriting an id keeps its original insertion position.
    """

    def __init__(
        self,
        max_history: int | None = None,
        max_conversations: int | None = None,
        evict_fraction: float | None = None,
    ) -> None:
        """Initialize the conversation repository.

        Args:
            max_history: Messages kept per conversation. Defaults to settings.
            max_conversations: Size above which a sweep evicts. Defaults to settings.
            evict_fraction: Share of conversations evicted per sweep. Defaults to settings.
        """
        if max_history is None:
            max_history = settings.max_history_length
        if max_conversations is None:
            max_conversations = settings.max_conversations
        if evict_fraction is None:
            evict_fraction = settings.conversation_evict_fraction
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        if max_conversations < 1:
            raise ValueError("max_conversations must be at least 1")
        if not 0 <= evict_fraction <= 1:
            raise ValueError("evict_fraction must be between 0 and 1")

        self._max_history = max_history
        self._max_conversations = max_conversations
        self._evict_fraction = evict_fraction
        self._conversations: dict[str, list[ChatMessageEntity]] = {}

    @classmethod
    def create(
        cls,
        max_history: int | None = None,
        max_conversations: int | None = None,
        evict_fraction: float | None = None,
    ) -> "InMemoryConversationRepository":
        """Factory method to create InMemoryConversationRepository with defaults.

        Returns:
            Configured InMemoryConversationRepository
        """
        return cls(
            max_history=max_history,
            max_conversations=max_conversations,
            evict_fraction=evict_fraction,
        )

    def put(self, conversation_id: str, messages: Sequence[ChatMessageEntity]) -> None:
        self._conversations[conversation_id] = list(messages[-self._max_history :])

    def get(self, conversation_id: str) -> list[ChatMessageEntity] | None:
        history = self._conversations.get(conversation_id)
        return list(history) if history is not None else None

    def sweep(self) -> int:
        """Evict the oldest conversations once the store is over capacity.

        Returns:
            Number of conversations evicted
        """
        size = len(self._conversations)
        if size <= self._max_conversations:
            return 0

        evict_count = int(size * self._evict_fraction)
        # dicts iterate in insertion order
        for conversation_id in list(self._conversations)[:evict_count]:
            del self._conversations[conversation_id]

        logger.info("Evicted %d of %d conversations", evict_count, size)
        return evict_count

    def count(self) -> int:
        return len(self._conversations)

    @property
    def max_history(self) -> int:
        """Get the per-conversation message limit."""
        return self._max_history

    @property
    def max_conversations(self) -> int:
        """Get the conversation count that triggers eviction."""
        return self._max_conversations
