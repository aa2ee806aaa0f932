"""Domain entities for internal representation.

These are plain dataclasses used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .chat_message import ROLE_PRIORITY, ChatMessageEntity, Role
from .completion import CompletionEntity
from .metrics import PerformanceMetrics

__all__ = [
    "ChatMessageEntity",
    "CompletionEntity",
    "PerformanceMetrics",
    "ROLE_PRIORITY",
    "Role",
]
