"""Response DTOs for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class AssistantMessage(BaseModel):
    """The assistant message inside a completion choice."""

    role: Literal["assistant"] = "assistant"
    content: str = Field(..., description="The generated or cached reply")


class CompletionChoice(BaseModel):
    """Single choice of a non-streamed completion."""

    index: int = 0
    message: AssistantMessage
    finish_reason: str = "stop"


class ChatCompletionResponse(BaseModel):
    """Response DTO for a non-streamed chat completion."""

    id: str = Field(..., description="Completion id shared by all parts of the reply")
    object: Literal["chat.completion"] = "chat.completion"
    created: int = Field(..., description="Unix timestamp in seconds")
    model: str
    choices: list[CompletionChoice]


class ChunkChoice(BaseModel):
    """Single choice of a streamed completion chunk.

    ``delta`` carries ``content`` on content chunks and is empty on the
    terminal chunk.
    """

    index: int = 0
    delta: dict[str, str] = Field(default_factory=dict)
    finish_reason: str | None = None


class ChatCompletionChunk(BaseModel):
    """One server-sent event of a streamed chat completion."""

    id: str
    object: Literal["chat.completion.chunk"] = "chat.completion.chunk"
    created: int
    model: str
    choices: list[ChunkChoice]


class ErrorResponse(BaseModel):
    """Error body for rejected requests."""

    error: str = Field(..., description="Human-readable error message")


class StatsResponse(BaseModel):
    """Response DTO for GET /stats."""

    conversations: int = Field(..., description="Conversations currently held", ge=0)
    cache_entries: int = Field(..., description="Cached completions currently held", ge=0)
    total_requests: int = Field(..., ge=0)
    cache_hits: int = Field(..., ge=0)
    cache_misses: int = Field(..., ge=0)
    generations: int = Field(..., ge=0)
    hit_rate: float = Field(..., ge=0.0, le=1.0)
    avg_lookup_time_ms: float = Field(..., ge=0.0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    conversations: int = Field(..., ge=0)
    cache_entries: int = Field(..., ge=0)
