"""Periodic background sweep of the response cache."""

import asyncio
import logging

from chat_emulator.config import settings
from chat_emulator.protocols import CacheStore

logger = logging.getLogger(__name__)


class CacheSweeper:
    """Runs ``CacheStore.sweep`` on a fixed wall-clock period.

    The sweep runs as an asyncio task on the server's event loop,
    independent of request traffic. Each pass is a single synchronous call,
    so requests are only paused for the duration of one pass.

    Example:
        ```python
        sweeper = CacheSweeper(cache, interval=300)
        sweeper.start()
        ...
        await sweeper.stop()
        ```
    """

    def __init__(self, cache: CacheStore, interval: float | None = None) -> None:
        """Initialize the sweeper.

        Args:
            cache: The cache to sweep.
            interval: Seconds between sweeps. Defaults to settings.cache_sweep_interval.
        """
        if interval is None:
            interval = settings.cache_sweep_interval
        if interval <= 0:
            raise ValueError("interval must be positive")

        self._cache = cache
        self._interval = interval
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="cache-sweeper")
        logger.info("Cache sweeper started (every %.0fs)", self._interval)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Cache sweeper stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._cache.sweep()
            except Exception:
                logger.exception("Cache sweep failed")

    @property
    def running(self) -> bool:
        """Whether the sweep loop is scheduled."""
        return self._task is not None and not self._task.done()

    @property
    def interval(self) -> float:
        """Get the sweep period in seconds."""
        return self._interval
