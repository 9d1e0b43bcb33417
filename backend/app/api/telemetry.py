"""GET /post, /get, /view - Sensor ingestion and series queries.

Paths stay at the root because the sensor firmware calls them directly.
Every response uses the ``{success, data | interval}`` envelope.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config import settings
from ..schemas.telemetry import DataResponse, IngestResponse, ViewResponse
from ..services.readings import ReadingValidationError, parse_reading
from ..services.series_transform import DisplayChannels, normalize, project_channels
from ..services.telemetry import InvalidScaleError, TelemetryHub, parse_scale
from .dependencies import get_telemetry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
def index():
    return {"message": "thermo telemetry"}


# post?temperature=30.0&humidity=50&pressure=100000
@router.get("/post", response_model=IngestResponse)
async def post_reading(
    temperature: Optional[str] = Query(default=None),
    humidity: Optional[str] = Query(default=None),
    pressure: Optional[str] = Query(default=None),
    time: Optional[str] = Query(default=None, description="Epoch ms, defaults to arrival"),
    hub: TelemetryHub = Depends(get_telemetry),
):
    """Accept one reading from the sensor and reply with the next send interval."""
    try:
        reading = parse_reading(temperature, humidity, pressure, time)
    except ReadingValidationError as e:
        logger.warning("Rejected reading: %s", e)
        return {"success": False, "interval": settings.retry_interval_ms}

    hub.ingest(reading)
    return {"success": True, "interval": settings.post_interval_ms}


async def _load(hub: TelemetryHub, scale: Optional[str]):
    """Return (ok, readings) for the recent window or a look-back range."""
    if scale is None:
        return True, hub.recent()

    try:
        hours = parse_scale(scale, settings.max_scale_hours)
    except InvalidScaleError as e:
        logger.warning("Rejected history query: %s", e)
        return False, []

    result = await hub.history(hours)
    return result.ok, result.rows


@router.get("/get", response_model=DataResponse)
async def get_data(
    scale: Optional[str] = Query(default=None, description="Hours to look back"),
    hub: TelemetryHub = Depends(get_telemetry),
):
    """Recent in-memory window, or decimated store history when scale is given."""
    ok, readings = await _load(hub, scale)
    return {"success": ok, "data": [r.to_dict() for r in readings]}


@router.get("/view", response_model=ViewResponse)
async def get_view(
    scale: Optional[str] = Query(default=None, description="Hours to look back"),
    temperature: bool = False,
    humidity: bool = False,
    pressure: bool = False,
    MA_temperature: bool = False,
    MA_humidity: bool = False,
    MA_pressure: bool = False,
    hub: TelemetryHub = Depends(get_telemetry),
):
    """Projected, normalized series for the selected display channels."""
    ok, readings = await _load(hub, scale)
    if not ok:
        return {"success": False, "data": []}

    channels = DisplayChannels(
        temperature=temperature,
        humidity=humidity,
        pressure=pressure,
        MA_temperature=MA_temperature,
        MA_humidity=MA_humidity,
        MA_pressure=MA_pressure,
    )
    series = project_channels(readings, channels)
    return {
        "success": True,
        "data": [
            {
                "label": s.label,
                "color": s.color,
                "data": s.data,
                "normalized": normalize(s.data, s.range),
                "range": (
                    {"min": s.range.min, "max": s.range.max}
                    if s.range is not None else None
                ),
            }
            for s in series
        ],
    }
