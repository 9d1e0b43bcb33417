"""Write-through to the time-series store, rate-limited to one point per interval.

Every reading goes into the in-memory buffer.  At most one reading per
``flush_interval_ms`` is also persisted, in a detached task: the caller
never waits on the store and never sees a store error.  Under a steady
2 s ingestion cadence this keeps roughly one durable point every 10 s;
the buffer already serves the fine-grained recent window.
"""

import asyncio
import logging
from typing import Callable

from .readings import Reading, now_ms
from .sample_buffer import SampleBuffer
from .store import TimeSeriesStore

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_INTERVAL_MS = 10000


class ThrottledWriter:
    """Feeds the sample buffer and throttles persistence of readings."""

    def __init__(
        self,
        buffer: SampleBuffer,
        store: TimeSeriesStore,
        flush_interval_ms: int = DEFAULT_FLUSH_INTERVAL_MS,
        clock: Callable[[], float] = now_ms,
    ):
        self.buffer = buffer
        self.store = store
        self.flush_interval_ms = flush_interval_ms
        self._clock = clock
        self.last_flush_ms: float = 0
        self.flush_count = 0
        self.failed_flushes = 0
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def on_reading(self, reading: Reading) -> asyncio.Task | None:
        """Buffer the reading and start a flush if the interval has elapsed.

        Must be called from the event loop.  Returns the flush task, or None
        when the reading was throttled.
        """
        self.buffer.append(reading)

        now = self._clock()
        if now - self.last_flush_ms <= self.flush_interval_ms:
            return None

        # Advanced before the write completes; a failed flush is not retried
        self.last_flush_ms = now
        self.flush_count += 1
        task = asyncio.get_running_loop().create_task(self._flush(reading))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _flush(self, reading: Reading) -> None:
        try:
            await self.store.async_write_point(reading)
            logger.info(
                "Flushed point t=%d temp=%s hum=%s pres=%s",
                reading.time, reading.temperature, reading.humidity, reading.pressure,
            )
        except Exception as e:
            self.failed_flushes += 1
            logger.error("Store write failed (point dropped): %s", e, exc_info=True)

    async def drain(self) -> None:
        """Wait for all in-flight flushes to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
