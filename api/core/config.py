"""
Environment-driven settings.

Every value is read at call time so tests can monkeypatch the environment.
Unparsable values fall back to the default instead of failing startup.
"""

from __future__ import annotations

import os


def env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def cors_allowed_origins() -> list[str]:
    raw = env_str("CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def db_pool_min_size() -> int:
    return max(1, env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout_s() -> float:
    return env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def recommendations_base_url() -> str:
    return env_str("RECOMMENDATIONS_BASE_URL", "http://localhost:3000")


def recommendations_path() -> str:
    return env_str("RECOMMENDATIONS_PATH", "/api/recommendations")


def recommendations_timeout_s() -> float:
    return env_float("RECOMMENDATIONS_TIMEOUT_S", 5.0)


def recommendations_max_items() -> int:
    return max(1, env_int("RECOMMENDATIONS_MAX_ITEMS", 50))
