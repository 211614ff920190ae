from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class Settings:
    redis_url: str
    session_ttl_seconds: int
    notification_ms: int
    log_level: str


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_dotenv_if_present(*, project_root: Path | None = None) -> None:
    """Load the repo `.env` for local runs; real environment variables win."""

    root = project_root or Path(__file__).resolve().parents[2]
    env_path = root / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


def settings_from_env() -> Settings:
    return Settings(
        redis_url=os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
        session_ttl_seconds=_int_from_env("VANISHING_SESSION_TTL_SECONDS", 3600),
        notification_ms=_int_from_env("VANISHING_NOTIFICATION_MS", 3000),
        log_level=os.environ.get("VANISHING_LOG_LEVEL", "INFO").upper(),
    )
