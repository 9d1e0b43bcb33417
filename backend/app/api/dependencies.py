"""FastAPI dependency for the application's telemetry hub.

The hub is attached to ``app.state`` by the app factory, so each app
instance (including test apps) carries its own buffer and store.
"""

from fastapi import Request

from ..services.telemetry import TelemetryHub


def get_telemetry(request: Request) -> TelemetryHub:
    hub = getattr(request.app.state, "telemetry", None)
    if hub is None:
        raise RuntimeError("Telemetry hub not initialised on app.state")
    return hub
