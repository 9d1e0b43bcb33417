"""Database engine and declarative base for SQLAlchemy."""

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import DeclarativeBase

from ..config import settings


class Base(DeclarativeBase):
    pass


engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False},  # flushes run in executor threads
    echo=False,
)


def init_database(bind: Engine = engine) -> None:
    """Create all tables.

    Models must be imported before create_all() so they register with Base.metadata.
    """
    from . import thermo_point  # noqa: F401
    Base.metadata.create_all(bind=bind)

    # WAL lets the ingestion flushes and history queries overlap
    if bind.url.get_backend_name() == "sqlite" and bind.url.database not in (None, "", ":memory:"):
        with bind.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.commit()
