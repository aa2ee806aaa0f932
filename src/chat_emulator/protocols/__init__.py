"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory → Redis, placeholder → real model)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from chat_emulator.protocols import CacheStore, CompletionGenerator

    cache: CacheStore = InMemoryCacheRepository()
    generator: CompletionGenerator = PlaceholderCompletionGenerator()
    ```
"""

from .cache_store import CacheStore
from .completion_generator import CompletionGenerationError, CompletionGenerator
from .conversation_store import ConversationStore

__all__ = [
    "CacheStore",
    "CompletionGenerationError",
    "CompletionGenerator",
    "ConversationStore",
]
