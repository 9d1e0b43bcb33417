"""Durable time-series store for flushed readings.

Points are stored one row per field under a measurement name and a host
tag.  Range queries filter by measurement, host and the known fields, then
pivot the field rows back into one Reading per timestamp.

The SQLAlchemy calls are synchronous; the async wrappers run them in the
default executor so the event loop keeps serving ingestion.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..models.database import init_database
from ..models.thermo_point import ThermoPointModel
from .readings import FIELDS, Reading

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one range query: either rows or an error, never both."""
    ok: bool
    rows: list[Reading] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def success(cls, rows: list[Reading]) -> "QueryResult":
        return cls(ok=True, rows=rows)

    @classmethod
    def failure(cls, error: str) -> "QueryResult":
        return cls(ok=False, error=error)


def _to_utc_naive(epoch_ms: int) -> datetime:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).replace(tzinfo=None)


def _to_epoch_ms(ts: datetime) -> int:
    return round(ts.replace(tzinfo=timezone.utc).timestamp() * 1000)


def pivot_rows(rows: list[tuple[datetime, str, float]]) -> list[Reading]:
    """Group (timestamp, field, value) rows into one Reading per timestamp.

    Rows must be ordered by timestamp.  Timestamps missing any of the three
    fields are dropped.
    """
    grouped: dict[datetime, dict[str, float]] = {}
    for ts, name, value in rows:
        grouped.setdefault(ts, {})[name] = value

    readings = []
    for ts, values in grouped.items():
        if not all(f in values for f in FIELDS):
            logger.debug("Dropping incomplete point at %s: %s", ts, sorted(values))
            continue
        readings.append(Reading(
            time=_to_epoch_ms(ts),
            temperature=values["temperature"],
            humidity=values["humidity"],
            pressure=values["pressure"],
        ))
    return readings


class TimeSeriesStore:
    """Writes single points and answers look-back range queries."""

    def __init__(self, engine: Engine, measurement: str = "thermo", host: str = "server"):
        self.engine = engine
        self.measurement = measurement
        self.host = host
        self._session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def init_schema(self) -> None:
        init_database(self.engine)

    def write_point(self, reading: Reading) -> None:
        """Persist one reading as three field rows. Raises on store errors."""
        ts = _to_utc_naive(reading.time)
        db = self._session_factory()
        try:
            for name in FIELDS:
                db.add(ThermoPointModel(
                    measurement=self.measurement,
                    host=self.host,
                    field=name,
                    value=float(getattr(reading, name)),
                    timestamp=ts,
                ))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def query_range(self, hours: float, now: Optional[datetime] = None) -> QueryResult:
        """Return readings from the last ``hours`` hours, oldest first."""
        now = now or datetime.now(timezone.utc)
        start = (now - timedelta(hours=hours)).astimezone(timezone.utc).replace(tzinfo=None)

        P = ThermoPointModel
        db = self._session_factory()
        try:
            rows = (
                db.query(P.timestamp, P.field, P.value)
                .filter(P.measurement == self.measurement)
                .filter(P.host == self.host)
                .filter(P.field.in_(FIELDS))
                .filter(P.timestamp >= start)
                .order_by(P.timestamp, P.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Range query (%sh) failed: %s", hours, e)
            return QueryResult.failure(str(e))
        finally:
            db.close()

        return QueryResult.success(pivot_rows([(r[0], r[1], r[2]) for r in rows]))

    async def async_write_point(self, reading: Reading) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.write_point, reading)

    async def async_query_range(self, hours: float) -> QueryResult:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.query_range, hours)
