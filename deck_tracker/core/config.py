import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# =====================================
# Global configuration for Deck Tracker
# =====================================
#
# Values are read once from the environment (and an optional .env file)
# into a Settings object. Components receive the Settings explicitly;
# routes get it through the get_settings dependency so tests can swap it.

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./deck_tracker.db"
DEFAULT_TOKEN_TTL_SECONDS = 12 * 60 * 60


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Process configuration for the API."""
    database_url: str = DEFAULT_DATABASE_URL
    admin_secret: Optional[str] = None
    admin_token_ttl_seconds: int = Field(default=DEFAULT_TOKEN_TTL_SECONDS, gt=0)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    seed_on_startup: bool = True
    sql_echo: bool = False

    @property
    def admin_configured(self) -> bool:
        return bool(self.admin_secret)


def load_settings() -> Settings:
    """Build Settings from environment variables."""
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        admin_secret=os.getenv("ADMIN_SECRET") or None,
        admin_token_ttl_seconds=int(os.getenv("ADMIN_TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS)),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        seed_on_startup=_env_bool("SEED_ON_STARTUP", True),
        sql_echo=_env_bool("SQL_ECHO", False),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
