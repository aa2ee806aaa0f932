"""Completion generator protocol.

Defines the interface for anything that turns a normalized message list into
assistant text, either in one piece or fragment by fragment.

Implementations can include:
- Placeholder text with artificial pacing (default)
- A proxy to an OpenAI-compatible backend
- A local model runtime
"""

from collections.abc import AsyncIterator, Sequence
from typing import Protocol, runtime_checkable

from chat_emulator.entities import ChatMessageEntity


class CompletionGenerationError(RuntimeError):
    """Raised by a generator backend that fails to produce a completion."""


@runtime_checkable
class CompletionGenerator(Protocol):
    """Protocol for completion generation backends.

    Example:
        ```python
        from chat_emulator.protocols import CompletionGenerator

        generator: CompletionGenerator = PlaceholderCompletionGenerator()
        text = await generator.generate(messages)

        async for fragment in generator.stream(messages):
            print(fragment, end="")
        ```
    """

    @property
    def name(self) -> str:
        """Return the name/identifier of the backend."""
        ...

    async def generate(self, messages: Sequence[ChatMessageEntity]) -> str:
        """Produce the complete reply in one result.

        Args:
            messages: Normalized message sequence

        Returns:
            The reply text

        Raises:
            CompletionGenerationError: If the backend fails
        """
        ...

    def stream(self, messages: Sequence[ChatMessageEntity]) -> AsyncIterator[str]:
        """Produce the reply as a lazy, finite sequence of text fragments.

        Joining every fragment yields the same text ``generate`` returns.

        Args:
            messages: Normalized message sequence

        Returns:
            Async iterator of text fragments
        """
        ...
