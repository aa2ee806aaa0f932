"""Repository layer for data access.

This layer holds the concrete implementations behind the protocol-based
interfaces: the two in-process stores and the placeholder generator. This
enables:
- Easy swapping of implementations (in-memory → Redis, placeholder → model)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from .memory_cache_repository import InMemoryCacheRepository
from .memory_conversation_repository import InMemoryConversationRepository
from .placeholder_generator import PlaceholderCompletionGenerator

__all__ = [
    "InMemoryCacheRepository",
    "InMemoryConversationRepository",
    "PlaceholderCompletionGenerator",
]
