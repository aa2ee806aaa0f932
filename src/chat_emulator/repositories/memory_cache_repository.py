"""In-process implementation of CacheStore.

Entries carry no timestamp. Expiry is approximated by a periodic sweep that
drops each entry with a fixed probability, so an entry survives a geometric
number of sweeps (mean 1 / probability).
"""

import logging
import random

from chat_emulator.config import settings

logger = logging.getLogger(__name__)


class InMemoryCacheRepository:
    """Dictionary-backed response cache with probabilistic eviction.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Lookups do not refresh an entry's eviction chances.
    """

    def __init__(
        self,
        eviction_probability: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the in-memory cache.

        Args:
            eviction_probability: Chance that a sweep removes any given entry.
                                  Defaults to settings.cache_eviction_probability.
            rng: Random source used by sweeps (injectable for tests).
        """
        if eviction_probability is None:
            eviction_probability = settings.cache_eviction_probability
        if not 0 <= eviction_probability <= 1:
            raise ValueError("eviction_probability must be between 0 and 1")

        self._probability = eviction_probability
        self._rng = rng or random.Random()
        self._entries: dict[str, str] = {}

    @classmethod
    def create(cls, eviction_probability: float | None = None) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository with defaults.

        Args:
            eviction_probability: Per-entry sweep probability. If None, uses settings.

        Returns:
            Configured InMemoryCacheRepository
        """
        return cls(eviction_probability=eviction_probability)

    def get(self, fingerprint: str) -> str | None:
        return self._entries.get(fingerprint)

    def set(self, fingerprint: str, text: str) -> None:
        self._entries[fingerprint] = text

    def sweep(self) -> int:
        """Remove each entry independently with the configured probability.

        Returns:
            Number of entries removed
        """
        removed = 0
        for fingerprint in list(self._entries):
            if self._rng.random() < self._probability:
                del self._entries[fingerprint]
                removed += 1

        logger.info("Cache sweep removed %d of %d entries", removed, removed + len(self._entries))
        return removed

    def count(self) -> int:
        return len(self._entries)

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    @property
    def eviction_probability(self) -> float:
        """Get the per-entry sweep probability."""
        return self._probability
