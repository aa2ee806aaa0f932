"""Request DTOs for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single message in a chat completion request."""

    role: Literal["system", "user", "assistant"] = Field(..., description="Author of the message")
    content: str = Field(..., description="The message text")

    model_config = {"frozen": True}


class ChatCompletionRequest(BaseModel):
    """Request DTO for POST /chat/completions.

    The handler will convert this to internal calls to the service layer.
    """

    model: str | None = Field(
        None,
        description="Model identifier echoed back in the response (defaults to DEFAULT_MODEL)",
    )
    messages: list[ChatMessage] = Field(
        ...,
        description="Conversation so far (must not be empty)",
        min_length=1,
    )
    stream: bool | None = Field(
        False, description="Deliver the reply as server-sent events (null means false)"
    )

    # Accepted for compatibility; the emulator does not use them
    temperature: float | None = Field(None, description="Sampling temperature (ignored)")
    max_tokens: int | None = Field(None, description="Completion length limit (ignored)")
