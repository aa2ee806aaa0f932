"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ChatCompletionRequest, ChatMessage
from .responses import (
    AssistantMessage,
    ChatCompletionChunk,
    ChatCompletionResponse,
    ChunkChoice,
    CompletionChoice,
    ErrorResponse,
    HealthCheckResponse,
    StatsResponse,
)

__all__ = [
    "ChatMessage",
    "ChatCompletionRequest",
    "AssistantMessage",
    "CompletionChoice",
    "ChatCompletionResponse",
    "ChunkChoice",
    "ChatCompletionChunk",
    "ErrorResponse",
    "StatsResponse",
    "HealthCheckResponse",
]
