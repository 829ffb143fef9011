"""
FIELD ENCRYPTION CONFIG
=======================
Centralized settings loaded from environment.
"""

# FLOW:
# - Pick the active env file, load it, expose ENCRYPTION_SETTINGS.
# WHY:
# - Keeps logging/metrics tuning per environment.
# HOW:
# - Reads env vars once and stores them in a dict.

from __future__ import annotations

import os

import dotenv


def get_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


def get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _root() -> str:
    return os.getenv("FIELD_ENCRYPTION_ENV_DIR") or os.getcwd()


def _env_name() -> str:
    env = os.getenv("APP_ENV", "").strip().lower()
    if env in {"prod", "production"}:
        return ".env.production"
    if env in {"local", "localhost", "dev", "development"}:
        return ".env.localhost"

    # Auto-select based on ENV_ACTIVE flag if APP_ENV is not set
    prod_path = os.path.join(_root(), ".env.production")

    def _is_active(path: str) -> bool:
        if not os.path.exists(path):
            return False
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                if line.strip().startswith("ENV_ACTIVE="):
                    return line.split("=", 1)[1].strip().strip('"').lower() == "true"
        return False

    if _is_active(prod_path):
        return ".env.production"
    return ".env.localhost"


def env_path() -> str:
    return os.path.join(_root(), _env_name())


def load_settings() -> dict:
    dotenv.load_dotenv(env_path())
    return {
        "LOG_LEVEL": os.getenv("FIELD_ENCRYPTION_LOG_LEVEL", "INFO").upper(),
        "LOG_FILE": os.getenv("FIELD_ENCRYPTION_LOG_FILE", "").strip(),
        "LOG_MAX_BYTES": get_int("FIELD_ENCRYPTION_LOG_MAX_BYTES", 2_000_000),
        "LOG_BACKUP_COUNT": get_int("FIELD_ENCRYPTION_LOG_BACKUPS", 3),
        "METRICS_ENABLED": get_bool("PROMETHEUS_ENABLED", True),
    }


ENCRYPTION_SETTINGS = load_settings()
