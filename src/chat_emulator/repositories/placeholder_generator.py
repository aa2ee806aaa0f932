"""Placeholder completion generator.

Stands in for a language model: the reply is a fixed sentence that mentions
how many messages it was given. Streaming splits that sentence on spaces and
paces the fragments to look like token-by-token delivery.
"""

import asyncio
from collections.abc import AsyncIterator, Sequence

from chat_emulator.config import settings
from chat_emulator.entities import ChatMessageEntity


class PlaceholderCompletionGenerator:
    """Deterministic implementation of the CompletionGenerator protocol.

    This class satisfies the CompletionGenerator protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        generator = PlaceholderCompletionGenerator.create(token_delay=0.0)
        text = await generator.generate(messages)
        ```
    """

    def __init__(self, token_delay: float | None = None) -> None:
        """Initialize the placeholder generator.

        Args:
            token_delay: Seconds to wait between streamed fragments.
                         Defaults to settings.token_delay.
        """
        if token_delay is None:
            token_delay = settings.token_delay
        if token_delay < 0:
            raise ValueError("token_delay must not be negative")
        self._token_delay = token_delay

    @classmethod
    def create(cls, token_delay: float | None = None) -> "PlaceholderCompletionGenerator":
        """Factory method to create PlaceholderCompletionGenerator with defaults.

        Args:
            token_delay: Inter-fragment delay. If None, uses settings.

        Returns:
            Configured PlaceholderCompletionGenerator
        """
        return cls(token_delay=token_delay)

    @property
    def name(self) -> str:
        return "placeholder"

    @property
    def token_delay(self) -> float:
        """Get the delay between streamed fragments in seconds."""
        return self._token_delay

    def compose(self, messages: Sequence[ChatMessageEntity]) -> str:
        """Build the reply text for a message sequence."""
        count = len(messages)
        noun = "message" if count == 1 else "messages"
        return (
            f"This is an emulated response to a conversation of {count} {noun}. "
            "No language model was consulted to produce it."
        )

    async def generate(self, messages: Sequence[ChatMessageEntity]) -> str:
        return self.compose(messages)

    async def stream(self, messages: Sequence[ChatMessageEntity]) -> AsyncIterator[str]:
        """Yield the reply word by word.

        Every fragment after the first keeps its leading space, so the
        fragments concatenate back to exactly ``compose(messages)``.
        """
        for index, word in enumerate(self.compose(messages).split(" ")):
            if index:
                await asyncio.sleep(self._token_delay)
                yield " " + word
            else:
                yield word
