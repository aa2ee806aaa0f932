"""Message normalization and fingerprinting.

Both functions are pure. Fingerprints are always computed over the
normalized sequence, so callers that interleave roles differently still
share cache entries.
"""

import hashlib
import json
from collections.abc import Sequence

from chat_emulator.entities import ROLE_PRIORITY, ChatMessageEntity


def normalize_messages(messages: Sequence[ChatMessageEntity]) -> list[ChatMessageEntity]:
    """Group messages as system, then user, then assistant.

    The partition is stable: messages keep their relative order within
    each role group. Nothing is added or dropped.

    Args:
        messages: Messages in the order the client sent them

    Returns:
        A new list in normalized order
    """
    return sorted(messages, key=lambda message: ROLE_PRIORITY.index(message.role))


def fingerprint(messages: Sequence[ChatMessageEntity]) -> str:
    """Compute the cache key for a message sequence.

    Args:
        messages: Normalized messages

    Returns:
        Hex SHA-256 digest of the ordered (role, content) pairs
    """
    payload = json.dumps(
        [[message.role, message.content] for message in messages],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
