"""Application configuration using Pydantic Settings."""

from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # Database
    db_path: str = "thermo.db"

    @model_validator(mode="after")
    def _resolve_db_path(self) -> "Settings":
        """Make db_path absolute, relative to the project root."""
        p = Path(self.db_path)
        if not p.is_absolute():
            self.db_path = str(_PROJECT_ROOT / p)
        return self

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    # In-memory window (2 s cadence * 900 = 30 minutes)
    buffer_capacity: int = 900

    # Store write throttle
    flush_interval_ms: int = 10000

    # Max points returned by a historical query
    send_data_limit: int = 1000
    max_scale_hours: float = 24 * 365

    # Cadence suggested back to the sensor
    post_interval_ms: int = 2000
    retry_interval_ms: int = 300

    # Series identity in the store
    measurement: str = "thermo"
    host_tag: str = "server"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = {"env_prefix": "THERMO_", "env_file": str(_ENV_FILE)}


settings = Settings()
