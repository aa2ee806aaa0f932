"""Response cache storage protocol.

Defines the interface for any store that maps a message fingerprint to a
previously produced completion text.

Implementations can include:
- In-process dictionary with probabilistic sweep (default)
- Redis with key expiry
- Any other key-value store
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for response cache backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.
    """

    def get(self, fingerprint: str) -> str | None:
        """Look up a cached completion.

        Args:
            fingerprint: Fingerprint of the normalized message sequence

        Returns:
            The cached completion text, or None on a miss
        """
        ...

    def set(self, fingerprint: str, text: str) -> None:
        """Store a completion, overwriting any existing entry.

        Args:
            fingerprint: Fingerprint of the normalized message sequence
            text: The final completion text
        """
        ...

    def sweep(self) -> int:
        """Run one eviction pass.

        Returns:
            Number of entries removed
        """
        ...

    def count(self) -> int:
        """Count entries currently cached."""
        ...

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...
