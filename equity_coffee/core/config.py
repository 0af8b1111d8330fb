"""
Environment-backed settings.

Values are read on every call so tests can flip them with monkeypatch.
"""

from __future__ import annotations

import os
from pathlib import Path

SERVICE_NAME = "Equity Coffee API"


def env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


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


def app_env() -> str:
    return env_str("APP_ENV", "development").lower()


def is_production() -> bool:
    return app_env() == "production"


def is_development() -> bool:
    return app_env() == "development"


def is_test() -> bool:
    return app_env() == "test"


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    raw = env_str("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def public_dir() -> Path:
    default = Path(__file__).resolve().parents[2] / "public"
    raw = os.environ.get("PUBLIC_DIR", "").strip()
    return Path(raw) if raw else default


def password_reset_ttl_seconds() -> int:
    return env_int("PASSWORD_RESET_TTL_S", 60 * 60)
