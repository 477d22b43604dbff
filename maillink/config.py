"""Centralized configuration for maillink.

Typed constants read once from the environment (after loading .env). Every
setting has a default. Alphabets and payload prefixes are compatibility
constants and live in maillink.gmail, not here.
"""

from __future__ import annotations

import os

from maillink.infrastructure.env import ensure_env_loaded, get_optional_int

ensure_env_loaded()

# --- App ---
APP_VERSION: str = "0.1.0"
ENV: str = os.getenv("MAILLINK_ENV", "development")

# --- Webmail ---
WEBMAIL_HOST: str = os.getenv("MAILLINK_WEBMAIL_HOST", "mail.google.com")
# None -> generic /mail/ base path (no /u/<n>/ segment)
DEFAULT_ACCOUNT_INDEX: int | None = get_optional_int("MAILLINK_DEFAULT_ACCOUNT_INDEX")

# --- Search fallback ---
SEARCH_WINDOW_DAYS: int = int(os.getenv("MAILLINK_SEARCH_WINDOW_DAYS", "1"))
SEARCH_TIMEZONE: str | None = os.getenv("MAILLINK_SEARCH_TIMEZONE") or None
SEARCH_DATE_FORMAT: str = "%Y/%m/%d"

# --- API ---
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))


def is_development() -> bool:
    """Check if running in development"""
    return ENV == "development"
