"""Completion service for core business logic.

This service orchestrates a completion request by coordinating the
conversation store, the response cache and the completion generator.
"""

import logging
import time
from collections.abc import AsyncIterator, Sequence
from uuid import uuid4

from chat_emulator.entities import ChatMessageEntity, CompletionEntity, PerformanceMetrics
from chat_emulator.protocols import (
    CacheStore,
    CompletionGenerationError,
    CompletionGenerator,
    ConversationStore,
)
from chat_emulator.services.message_normalizer import fingerprint, normalize_messages

logger = logging.getLogger(__name__)


class CompletionService:
    """Core completion orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - ConversationStore: bounded per-request history
    - CacheStore: fingerprint → completion text
    - CompletionGenerator: placeholder text, or a real model backend

    Every request stores exactly one new conversation. Only cache misses
    run the generator and write to the cache, and they write only after
    the generator has produced the whole reply.

    Example:
        ```python
        service = CompletionService.create(
            conversations=InMemoryConversationRepository.create(),
            cache=InMemoryCacheRepository.create(),
            generator=PlaceholderCompletionGenerator.create(),
        )

        result = await service.complete(messages)

        async for fragment in service.stream(messages):
            print(fragment, end="")
        ```
    """

    def __init__(
        self,
        conversations: ConversationStore,
        cache: CacheStore,
        generator: CompletionGenerator,
    ) -> None:
        """Initialize the completion service.

        Args:
            conversations: Conversation history store (required).
            cache: Response cache (required).
            generator: Completion generator backend (required).
        """
        self._conversations = conversations
        self._cache = cache
        self._generator = generator
        self._metrics = PerformanceMetrics()

    @classmethod
    def create(
        cls,
        conversations: ConversationStore,
        cache: CacheStore,
        generator: CompletionGenerator,
    ) -> "CompletionService":
        """Factory method to create CompletionService.

        Returns:
            Configured CompletionService instance
        """
        return cls(conversations=conversations, cache=cache, generator=generator)

    def _open_conversation(
        self, messages: Sequence[ChatMessageEntity]
    ) -> tuple[str, list[ChatMessageEntity]]:
        """Normalize the messages and record them under a fresh conversation id."""
        normalized = normalize_messages(messages)
        conversation_id = uuid4().hex
        self._conversations.put(conversation_id, normalized)
        return conversation_id, normalized

    def _lookup(
        self, conversation_id: str, normalized: list[ChatMessageEntity]
    ) -> tuple[str, str | None]:
        """Fingerprint the messages and query the cache.

        Returns:
            Tuple of (fingerprint, cached text or None)
        """
        start_time = time.time()
        key = fingerprint(normalized)
        cached = self._cache.get(key)
        lookup_time_ms = (time.time() - start_time) * 1000

        if cached is not None:
            self._metrics.record_hit(lookup_time_ms)
            logger.debug("Cache hit for conversation %s (%s)", conversation_id, key[:12])
        else:
            self._metrics.record_miss(lookup_time_ms)
            logger.debug("Cache miss for conversation %s (%s)", conversation_id, key[:12])

        return key, cached

    async def complete(self, messages: Sequence[ChatMessageEntity]) -> CompletionEntity:
        """Answer a request with the whole reply at once.

        Business logic:
        1. Normalize and store the conversation
        2. Look up the fingerprint in the cache
        3. On a hit, return the cached text
        4. On a miss, sweep conversations, generate, cache and return

        Args:
            messages: Messages as sent by the client

        Returns:
            CompletionEntity with the reply text

        Raises:
            CompletionGenerationError: If the generator fails (nothing is cached)
        """
        conversation_id, normalized = self._open_conversation(messages)
        key, cached = self._lookup(conversation_id, normalized)
        if cached is not None:
            return CompletionEntity(conversation_id=conversation_id, content=cached, cached=True)

        self._conversations.sweep()
        try:
            text = await self._generator.generate(normalized)
        except CompletionGenerationError:
            logger.exception(
                "Generator %s failed for conversation %s", self._generator.name, conversation_id
            )
            raise

        self._metrics.record_generation()
        self._cache.set(key, text)
        return CompletionEntity(conversation_id=conversation_id, content=text, cached=False)

    async def stream(self, messages: Sequence[ChatMessageEntity]) -> AsyncIterator[str]:
        """Answer a request as a sequence of text fragments.

        A cache hit is replayed as a single fragment with no pacing. A miss
        forwards the generator's fragments as they are produced and caches
        the joined text once the generator is exhausted. If the consumer
        stops early (client disconnect) nothing is cached.

        Args:
            messages: Messages as sent by the client

        Yields:
            Reply text fragments

        Raises:
            CompletionGenerationError: If the generator fails (nothing is cached)
        """
        conversation_id, normalized = self._open_conversation(messages)
        key, cached = self._lookup(conversation_id, normalized)
        if cached is not None:
            yield cached
            return

        self._conversations.sweep()
        fragments: list[str] = []
        try:
            async for fragment in self._generator.stream(normalized):
                fragments.append(fragment)
                yield fragment
        except CompletionGenerationError:
            logger.exception(
                "Generator %s failed after %d fragments for conversation %s",
                self._generator.name,
                len(fragments),
                conversation_id,
            )
            raise

        self._metrics.record_generation()
        self._cache.set(key, "".join(fragments))

    def get_stats(self) -> dict:
        """Get store sizes and request metrics.

        Returns:
            Dictionary with statistics
        """
        stats: dict = {
            "conversations": self._conversations.count(),
            "cache_entries": self._cache.count(),
        }
        stats.update(self._metrics.to_dict())
        return stats

    @property
    def metrics(self) -> PerformanceMetrics:
        """Get the request metrics."""
        return self._metrics

    @property
    def conversations(self) -> ConversationStore:
        """Get the underlying conversation store (for testing)."""
        return self._conversations

    @property
    def cache(self) -> CacheStore:
        """Get the underlying response cache (for testing)."""
        return self._cache

    @property
    def generator(self) -> CompletionGenerator:
        """Get the underlying generator (for testing)."""
        return self._generator
