"""HTTP handlers for chat completion operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import json
import logging
import time
from collections.abc import AsyncIterator, Sequence
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response, StreamingResponse
from pydantic import ValidationError

from chat_emulator.config import settings
from chat_emulator.dto import (
    AssistantMessage,
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChunkChoice,
    CompletionChoice,
    ErrorResponse,
    HealthCheckResponse,
    StatsResponse,
)
from chat_emulator.entities import ChatMessageEntity
from chat_emulator.protocols import CompletionGenerationError
from chat_emulator.services import CompletionService

logger = logging.getLogger(__name__)

INVALID_BODY = "Invalid request body"
MESSAGES_REQUIRED = "Messages array is required"

SSE_DONE = "data: [DONE]\n\n"
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class RequestValidationFailed(Exception):
    """Raised when a completion request body is rejected."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def format_event(payload: str) -> str:
    """Frame a payload as a single server-sent event."""
    return f"data: {payload}\n\n"


class CompletionHandler:
    """HTTP handlers for chat completion operations.

    This handler delegates business logic to CompletionService
    and handles HTTP-specific concerns like:
    - Parsing and validating the raw request body
    - Converting entities to DTOs
    - Framing streamed replies as server-sent events
    - Setting appropriate status codes

    Example:
        ```python
        handler = CompletionHandler(completion_service=service)

        @app.post("/chat/completions")
        async def chat_completions(request: Request):
            return await handler.chat_completions(request)
        ```
    """

    def __init__(
        self, completion_service: CompletionService, default_model: str | None = None
    ) -> None:
        """Initialize the completion handler.

        Args:
            completion_service: The completion service for business logic (required).
            default_model: Model echoed when the request names none. Defaults to settings.
        """
        self._service = completion_service
        self._default_model = default_model or settings.default_model

    async def parse_request(self, request: Request) -> ChatCompletionRequest:
        """Parse and validate a raw completion request body.

        Args:
            request: The incoming HTTP request

        Returns:
            The validated request DTO

        Raises:
            RequestValidationFailed: If the body is not JSON, lacks a
                non-empty ``messages`` array, or has malformed fields
        """
        try:
            body = await request.json()
        except ValueError as e:
            raise RequestValidationFailed(INVALID_BODY) from e

        if not isinstance(body, dict):
            raise RequestValidationFailed(INVALID_BODY)

        messages = body.get("messages")
        if not isinstance(messages, list) or not messages:
            raise RequestValidationFailed(MESSAGES_REQUIRED)

        try:
            return ChatCompletionRequest.model_validate(body)
        except ValidationError as e:
            raise RequestValidationFailed(INVALID_BODY) from e

    async def chat_completions(self, request: Request) -> Response:
        """Handle POST /chat/completions requests.

        Args:
            request: The incoming HTTP request

        Returns:
            JSON completion, SSE stream, or a 400/502 error body
        """
        try:
            payload = await self.parse_request(request)
        except RequestValidationFailed as e:
            logger.info("Rejected completion request: %s", e.message)
            return JSONResponse(
                ErrorResponse(error=e.message).model_dump(),
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        model = payload.model or self._default_model
        messages = [ChatMessageEntity(role=m.role, content=m.content) for m in payload.messages]
        completion_id = f"chatcmpl-{uuid4().hex}"
        created = int(time.time())

        if payload.stream:
            return StreamingResponse(
                self._event_stream(messages, completion_id, created, model),
                media_type="text/event-stream",
                headers=SSE_HEADERS,
            )

        try:
            result = await self._service.complete(messages)
        except CompletionGenerationError as e:
            return JSONResponse(
                ErrorResponse(error=str(e)).model_dump(),
                status_code=status.HTTP_502_BAD_GATEWAY,
            )

        response = ChatCompletionResponse(
            id=completion_id,
            created=created,
            model=model,
            choices=[CompletionChoice(message=AssistantMessage(content=result.content))],
        )
        return JSONResponse(response.model_dump())

    async def _event_stream(
        self,
        messages: Sequence[ChatMessageEntity],
        completion_id: str,
        created: int,
        model: str,
    ) -> AsyncIterator[str]:
        """Frame the service's fragments as chat.completion.chunk events."""

        def chunk(delta: dict[str, str], finish_reason: str | None) -> str:
            return format_event(
                ChatCompletionChunk(
                    id=completion_id,
                    created=created,
                    model=model,
                    choices=[ChunkChoice(delta=delta, finish_reason=finish_reason)],
                ).model_dump_json()
            )

        try:
            async for fragment in self._service.stream(messages):
                yield chunk({"content": fragment}, None)
        except CompletionGenerationError as e:
            # Fragments already sent cannot be retracted
            yield format_event(json.dumps({"error": {"message": str(e)}}))
            yield SSE_DONE
            return

        yield chunk({}, "stop")
        yield SSE_DONE

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests."""
        return StatsResponse(**self._service.get_stats())

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        stats = self._service.get_stats()
        return HealthCheckResponse(
            status="healthy",
            conversations=stats["conversations"],
            cache_entries=stats["cache_entries"],
        )
