"""Sensor reading type and ingestion-field parsing.

A reading is one timestamped (temperature, humidity, pressure) triple.
Raw query-string values are parsed and validated here so that nothing
non-numeric or non-finite ever reaches the buffer or the store.
"""

import math
import time
from dataclasses import asdict, dataclass
from typing import Optional

FIELDS = ("temperature", "humidity", "pressure")

# Range datetime.fromtimestamp accepts (through 9999-12-31)
MAX_TIME_MS = 253402300799999


class ReadingValidationError(ValueError):
    """Raised when an ingestion field is missing or not a finite number."""

    def __init__(self, field: str, raw: Optional[str]):
        self.field = field
        self.raw = raw
        super().__init__(f"invalid {field}: {raw!r}")


@dataclass(frozen=True)
class Reading:
    time: int  # epoch milliseconds
    temperature: float
    humidity: float
    pressure: float

    def to_dict(self) -> dict:
        return asdict(self)


def now_ms() -> int:
    return int(time.time() * 1000)


def _parse_number(field: str, raw: Optional[str]) -> float:
    if raw is None:
        raise ReadingValidationError(field, raw)
    try:
        value = float(raw.strip())
    except ValueError:
        raise ReadingValidationError(field, raw) from None
    # float() accepts "nan" and "inf"
    if not math.isfinite(value):
        raise ReadingValidationError(field, raw)
    return value


def _parse_time(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ReadingValidationError("time", raw) from None
    if not 0 <= value <= MAX_TIME_MS:
        raise ReadingValidationError("time", raw)
    return value


def parse_reading(
    temperature: Optional[str],
    humidity: Optional[str],
    pressure: Optional[str],
    time_ms: Optional[str] = None,
) -> Reading:
    """Build a Reading from raw string fields.

    Args:
        temperature, humidity, pressure: Raw numeric strings.
        time_ms: Optional integer epoch-millisecond timestamp; defaults to
            arrival time.

    Raises:
        ReadingValidationError: on the first field that fails to parse.
    """
    values = {
        "temperature": _parse_number("temperature", temperature),
        "humidity": _parse_number("humidity", humidity),
        "pressure": _parse_number("pressure", pressure),
    }
    if time_ms is None or time_ms == "":
        ts = now_ms()
    else:
        ts = _parse_time(time_ms)
    return Reading(time=ts, **values)
