"""Single owner of the ingestion state shared by the HTTP handlers.

The hub holds the sample buffer, the throttled writer and the store.  It
is created once per application and handed to handlers through FastAPI
dependency injection instead of living in module globals.
"""

import logging
import math
from typing import Optional

from ..config import Settings
from ..models.database import engine as default_engine
from . import downsample
from .readings import Reading
from .sample_buffer import SampleBuffer
from .store import QueryResult, TimeSeriesStore
from .throttled_writer import ThrottledWriter

logger = logging.getLogger(__name__)


class InvalidScaleError(ValueError):
    """Raised when a look-back scale is not a positive, finite hour count."""


def parse_scale(raw: str, max_hours: float) -> float:
    """Parse the ``scale`` query parameter into hours to look back."""
    try:
        hours = float(raw.strip())
    except ValueError:
        raise InvalidScaleError(f"scale is not a number: {raw!r}") from None
    if not math.isfinite(hours) or hours <= 0:
        raise InvalidScaleError(f"scale must be a positive number of hours: {raw!r}")
    if hours > max_hours:
        raise InvalidScaleError(f"scale exceeds {max_hours}h: {raw!r}")
    return hours


class TelemetryHub:
    """Buffer, writer and store for one sensor feed."""

    def __init__(
        self,
        store: TimeSeriesStore,
        buffer: Optional[SampleBuffer] = None,
        writer: Optional[ThrottledWriter] = None,
        send_data_limit: int = downsample.SEND_DATA_LIMIT,
    ):
        self.store = store
        self.buffer = buffer if buffer is not None else SampleBuffer()
        self.writer = writer if writer is not None else ThrottledWriter(self.buffer, store)
        self.send_data_limit = send_data_limit

    @classmethod
    def from_settings(cls, settings: Settings, engine=None) -> "TelemetryHub":
        store = TimeSeriesStore(
            engine if engine is not None else default_engine,
            measurement=settings.measurement,
            host=settings.host_tag,
        )
        buffer = SampleBuffer(settings.buffer_capacity)
        writer = ThrottledWriter(buffer, store, flush_interval_ms=settings.flush_interval_ms)
        return cls(store, buffer=buffer, writer=writer, send_data_limit=settings.send_data_limit)

    def ingest(self, reading: Reading) -> None:
        """Accept a validated reading; persistence happens in the background."""
        logger.debug("Reading t=%d (buffer=%d)", reading.time, len(self.buffer))
        self.writer.on_reading(reading)

    def recent(self) -> list[Reading]:
        return self.buffer.snapshot()

    async def history(self, hours: float) -> QueryResult:
        """Range query over the store, decimated to ``send_data_limit`` rows."""
        result = await self.store.async_query_range(hours)
        if not result.ok:
            return result
        rows = downsample.reduce(result.rows, self.send_data_limit)
        if len(rows) != len(result.rows):
            logger.info(
                "History %sh: %d rows reduced to %d", hours, len(result.rows), len(rows),
            )
        return QueryResult.success(list(rows))
