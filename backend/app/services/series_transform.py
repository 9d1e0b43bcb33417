"""Numeric transforms that turn readings into drawable series.

Pure functions: channel projection, normalization into [0, 1], a clamped
moving average, and the polyline the normalized values map onto.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .readings import Reading

# Pressure is drawn against a fixed real-world band (Pa) so a flat series
# doesn't stretch across the full plot height.
PRESSURE_MIN = 95000.0
PRESSURE_MAX = 105000.0

# Value returned for every point when max == min
DEGENERATE_LEVEL = 0.5


@dataclass(frozen=True)
class Range:
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class DisplayChannels:
    temperature: bool = False
    humidity: bool = False
    pressure: bool = False
    MA_temperature: bool = False
    MA_humidity: bool = False
    MA_pressure: bool = False


@dataclass(frozen=True)
class ViewSeries:
    label: str
    color: str
    data: list[float]
    range: Optional[Range] = None


def normalize(data: Sequence[float], range: Optional[Range] = None) -> list[float]:
    """Scale ``data`` so ``range.min`` maps to 0 and ``range.max`` to 1.

    Missing bounds fall back to the data's own extrema.  When the bounds
    coincide every value maps to DEGENERATE_LEVEL.
    """
    if not data:
        return []
    lo = range.min if range is not None and range.min is not None else min(data)
    hi = range.max if range is not None and range.max is not None else max(data)
    span = hi - lo
    if span == 0:
        return [DEGENERATE_LEVEL] * len(data)
    return [(v - lo) / span for v in data]


def moving_average(data: Sequence[float], window_size: int) -> list[float]:
    """Mean of ``data[i - w .. i + w]`` for each index ``i``.

    The window is ``2w + 1`` points wide at interior indices (the end is
    inclusive, unlike a half-open ``i + w`` bound).  Each end clamps to the
    series on its own, so near the edges the window shrinks and is no longer
    centered on ``i``.
    """
    if window_size < 0:
        raise ValueError(f"window_size must be >= 0, got {window_size}")
    n = len(data)
    result = []
    for i in range(n):
        start = max(0, i - window_size)
        end = min(n, i + window_size + 1)
        result.append(sum(data[start:end]) / (end - start))
    return result


def default_window(n: int) -> int:
    """Smoothing half-width scaled to the series length."""
    return math.ceil(n / 10)


def _extent(values: list[float]) -> Optional[Range]:
    if not values:
        return None
    return Range(min=min(values), max=max(values))


def project_channels(readings: Sequence[Reading], channels: DisplayChannels) -> list[ViewSeries]:
    """Build one ViewSeries per enabled channel.

    Moving-average channels are drawn against the raw series' extrema, not
    their own narrower ones.
    """
    temperature = [r.temperature for r in readings]
    humidity = [r.humidity for r in readings]
    pressure = [r.pressure for r in readings]
    window = max(default_window(len(readings)), 1)
    pressure_band = Range(min=PRESSURE_MIN, max=PRESSURE_MAX)

    series: list[ViewSeries] = []
    if channels.temperature:
        series.append(ViewSeries("Temperature", "red", temperature))
    if channels.humidity:
        series.append(ViewSeries("Humidity", "blue", humidity))
    if channels.pressure:
        series.append(ViewSeries("Pressure", "green", pressure, pressure_band))
    if channels.MA_temperature:
        series.append(ViewSeries(
            "MA_Temperature", "rgb(255, 128, 128)",
            moving_average(temperature, window), _extent(temperature),
        ))
    if channels.MA_humidity:
        series.append(ViewSeries(
            "MA_Humidity", "rgb(128, 128, 255)",
            moving_average(humidity, window), _extent(humidity),
        ))
    if channels.MA_pressure:
        series.append(ViewSeries(
            "MA_Pressure", "rgb(64, 255, 64)",
            moving_average(pressure, window), pressure_band,
        ))
    return series


def stroke_path(
    data: Sequence[float],
    width: float,
    height: float,
    range: Optional[Range] = None,
) -> list[tuple[float, float]]:
    """Polyline vertices for drawing ``data`` on a width x height surface.

    x advances by ``width / n`` per point; y is flipped so 1.0 is the top.
    """
    n = len(data)
    return [
        (i / n * width, (1 - t) * height)
        for i, t in enumerate(normalize(data, range))
    ]
