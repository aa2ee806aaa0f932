"""Completion result domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionEntity:
    """Domain entity for a finished (non-streamed) completion.

    Attributes:
        conversation_id: Id allocated for the request's conversation entry
        content: The assistant text
        cached: Whether the text was replayed from the response cache
    """

    conversation_id: str
    content: str
    cached: bool
