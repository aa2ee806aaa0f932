"""Chat message domain entity."""

from dataclasses import dataclass
from typing import Literal

Role = Literal["system", "user", "assistant"]

# Normalized ordering: instructions first, then the user turns, then prior replies.
ROLE_PRIORITY: tuple[Role, ...] = ("system", "user", "assistant")


@dataclass(frozen=True)
class ChatMessageEntity:
    """Domain entity for a single chat message.

    Attributes:
        role: Author of the message (system, user or assistant)
        content: The message text
    """

    role: Role
    content: str
