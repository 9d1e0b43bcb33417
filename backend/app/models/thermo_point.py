"""ThermoPoint ORM model: one stored field value of one flushed reading."""

from datetime import datetime

from sqlalchemy import Integer, Float, DateTime, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class ThermoPointModel(Base):
    __tablename__ = "thermo_points"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    measurement: Mapped[str] = mapped_column(Text, nullable=False)
    host: Mapped[str] = mapped_column(Text, nullable=False)
    field: Mapped[str] = mapped_column(Text, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    # Naive UTC
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        Index("idx_thermo_series_time", "measurement", "host", "timestamp"),
    )
