"""
Environment-backed settings.

Every value is read at call time so tests can monkeypatch os.environ.
"""

from __future__ import annotations

import os

DEFAULT_PORT = 10000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_POOL_MAX_SIZE = 5
DEFAULT_CORS_ORIGINS = (
    "https://justice00000.github.io",
    "https://git.transcendlogistics.online",
    "http://localhost:3000",
)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def database_ssl() -> str:
    return os.environ.get("DATABASE_SSL", "prefer").strip().lower() or "prefer"


def pool_max_size() -> int:
    size = _env_int("DATABASE_POOL_MAX_SIZE", DEFAULT_POOL_MAX_SIZE)
    return size if size > 0 else DEFAULT_POOL_MAX_SIZE


def command_timeout() -> float | None:
    return _env_float("DATABASE_COMMAND_TIMEOUT")


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def host() -> str:
    return os.environ.get("HOST", DEFAULT_HOST).strip() or DEFAULT_HOST


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO"
