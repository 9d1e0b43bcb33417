"""Shared fixtures for backend tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.services.store import TimeSeriesStore


@pytest.fixture
def memory_engine():
    """In-memory SQLite shared across the executor threads flushes run on."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def store(memory_engine):
    s = TimeSeriesStore(memory_engine)
    s.init_schema()
    return s
