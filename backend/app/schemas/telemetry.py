"""Pydantic schemas for the telemetry API envelope."""

from typing import Optional

from pydantic import BaseModel


class ReadingOut(BaseModel):
    time: int
    temperature: float
    humidity: float
    pressure: float


class IngestResponse(BaseModel):
    success: bool
    interval: int  # ms until the sensor should send again


class DataResponse(BaseModel):
    success: bool
    data: list[ReadingOut]


class RangeOut(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class ViewSeriesOut(BaseModel):
    label: str
    color: str
    data: list[float]
    normalized: list[float]
    range: Optional[RangeOut] = None


class ViewResponse(BaseModel):
    success: bool
    data: list[ViewSeriesOut]
