"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from chat_emulator.services import CompletionService

    service = CompletionService.create(
        conversations=conversations, cache=cache, generator=generator
    )
    ```
"""

from .cache_sweeper import CacheSweeper
from .completion_service import CompletionService
from .message_normalizer import fingerprint, normalize_messages

__all__ = [
    "CacheSweeper",
    "CompletionService",
    "fingerprint",
    "normalize_messages",
]
