"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path

from app.database.connection import sqlite_url


def get_database_url() -> str:
    """Get SQLAlchemy database URL from env or default SQLite file."""
    return os.getenv("DATABASE_URL") or sqlite_url(
        str(Path(__file__).resolve().parents[2] / "data" / "cinema.db")
    )


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_file() -> str | None:
    """Get log file name from env; None logs to console only."""
    return os.getenv("LOG_FILE") or None


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins (comma-separated env var)."""
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
