import logging
import os
from pathlib import Path
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# Prefer the backend/.env file so running from the repo root still picks up settings.
# __file__ is backend/app/core/config.py -> parents[2] is backend/
BACKEND_ENV = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(BACKEND_ENV)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean from the environment with sensible defaults."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: List[str] | None = None) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default or []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _cors_origins() -> List[str]:
    """Any CORS_ORIGINS override plus the local dev server; permissive (*) when unset."""
    base_dev = ["http://localhost:3000", "http://127.0.0.1:3000"]
    env_origins = _env_list("CORS_ORIGINS", [])
    merged = (env_origins or ["*"]) + base_dev

    seen = set()
    deduped = []
    for origin in merged:
        if origin in seen:
            continue
        seen.add(origin)
        deduped.append(origin)
    return deduped


@dataclass
class Settings:
    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Team Shuffle API"))
    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api"))
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///team_shuffle.db"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", False))
    cors_origins: List[str] = field(default_factory=_cors_origins)
    usage_log_path: Path = field(default_factory=lambda: Path(os.getenv("USAGE_LOG_PATH", "logs/usage.log")))
    max_attempts: int = field(default_factory=lambda: _env_int("MAX_ATTEMPTS", 10000))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance sourced from environment variables."""
    return Settings()


def setup_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
