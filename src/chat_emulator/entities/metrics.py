"""Request metrics for the completion service."""

from dataclasses import dataclass


@dataclass
class PerformanceMetrics:
    """Track cache and generation counters for completion requests."""

    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    generations: int = 0
    total_lookup_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests

    @property
    def avg_lookup_time_ms(self) -> float:
        """Calculate average lookup time."""
        if self.total_requests == 0:
            return 0.0
        return self.total_lookup_time_ms / self.total_requests

    def record_hit(self, lookup_time_ms: float) -> None:
        """Record a cache hit."""
        self.total_requests += 1
        self.cache_hits += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_miss(self, lookup_time_ms: float) -> None:
        """Record a cache miss."""
        self.total_requests += 1
        self.cache_misses += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_generation(self) -> None:
        """Record a completed generator run."""
        self.generations += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "generations": self.generations,
            "hit_rate": self.hit_rate,
            "avg_lookup_time_ms": self.avg_lookup_time_ms,
        }
