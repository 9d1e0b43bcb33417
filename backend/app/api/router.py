"""Top-level API router aggregation."""

from fastapi import APIRouter

from . import telemetry

# No prefix: the sensor posts to /post directly
api_router = APIRouter()

api_router.include_router(telemetry.router)
