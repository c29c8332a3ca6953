"""
Environment-driven settings.

Every value is read at call time so tests can monkeypatch `os.environ`.
"""

from __future__ import annotations

import os

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_PAGE_LIMIT_MAX = 100

# Largest value a Postgres bigint (ids, LIMIT/OFFSET) can hold.
MAX_BIGINT = 2**63 - 1


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), 1)


def command_timeout() -> float | None:
    # Unset means asyncpg applies no per-statement timeout.
    raw = os.environ.get("DB_COMMAND_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def page_limit_max() -> int:
    value = _env_int("PAGE_LIMIT_MAX", DEFAULT_PAGE_LIMIT_MAX)
    return value if value > 0 else DEFAULT_PAGE_LIMIT_MAX


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
