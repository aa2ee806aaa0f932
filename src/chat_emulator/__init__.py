"""Chat Completion Emulator - OpenAI-style completions with response caching.

This package provides a layered architecture for an emulated chat API:

Layers:
    - protocols: Interface contracts (ConversationStore, CacheStore, CompletionGenerator)
    - repositories: In-memory stores and the placeholder generator
    - services: Business logic (normalization, caching, streaming)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from chat_emulator.services import CompletionService

    service = CompletionService.create(
        conversations=InMemoryConversationRepository.create(),
        cache=InMemoryCacheRepository.create(),
        generator=PlaceholderCompletionGenerator.create(),
    )
    ```

For HTTP API:
    ```python
    from chat_emulator.api.app import app, create_app
    ```
"""

from chat_emulator.config import Settings, settings
from chat_emulator.dto import ChatCompletionRequest, ChatMessage
from chat_emulator.entities import ChatMessageEntity, CompletionEntity
from chat_emulator.handlers import CompletionHandler
from chat_emulator.protocols import (
    CacheStore,
    CompletionGenerationError,
    CompletionGenerator,
    ConversationStore,
)
from chat_emulator.repositories import (
    InMemoryCacheRepository,
    InMemoryConversationRepository,
    PlaceholderCompletionGenerator,
)
from chat_emulator.services import CacheSweeper, CompletionService, fingerprint, normalize_messages

__all__ = [
    # Configuration
    "Settings",
    "settings",
    # Protocols (interfaces)
    "CacheStore",
    "CompletionGenerationError",
    "CompletionGenerator",
    "ConversationStore",
    # Services (business logic)
    "CacheSweeper",
    "CompletionService",
    "fingerprint",
    "normalize_messages",
    # Handlers (HTTP)
    "CompletionHandler",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "InMemoryConversationRepository",
    "PlaceholderCompletionGenerator",
    # Entities (domain models)
    "ChatMessageEntity",
    "CompletionEntity",
    # DTOs (API contracts)
    "ChatCompletionRequest",
    "ChatMessage",
]
