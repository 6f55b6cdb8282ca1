"""
Environment-driven settings.

Every value is read on call so tests can monkeypatch the environment.
Invalid numeric values fall back to their defaults.
"""

from __future__ import annotations

import os


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def db_pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def db_pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), db_pool_min_size(), 1)


def db_command_timeout_s() -> float:
    value = _env_float("DB_COMMAND_TIMEOUT_S", 5.0)
    return value if value > 0 else 5.0


def cors_allow_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return _env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_MIN", 15)
