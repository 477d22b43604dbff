"""
Centralized environment variable loader for maillink.

Call ensure_env_loaded() before reading MAILLINK_* settings from a script;
the API app and maillink.config do this on import.

Side Effects:
    - Loads .env file from project root (once per process)

Usage:
    from maillink.infrastructure.env import ensure_env_loaded, get_optional_env

    ensure_env_loaded()
    host = get_optional_env("MAILLINK_WEBMAIL_HOST", "mail.google.com")
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_ENV_LOADED = False


def ensure_env_loaded(env_path: Path | None = None) -> None:
    """
    Ensure .env file is loaded exactly once.

    Args:
        env_path: Optional path to .env file. If None, searches upward for one.

    Side Effects:
        - Loads environment variables from .env file (never overrides
          variables already set in the process environment)
        - Sets module-level flag to prevent double-loading
    """
    global _ENV_LOADED
    if _ENV_LOADED:
        return

    if env_path is None:
        current = Path(__file__).parent
        while current != current.parent:
            env_candidate = current / ".env"
            if env_candidate.exists():
                env_path = env_candidate
                break
            current = current.parent

    if env_path and env_path.exists():
        load_dotenv(env_path)
    else:
        # Fall back to python-dotenv's own search from the working directory
        load_dotenv()
    _ENV_LOADED = True


def get_optional_env(key: str, default: str = "") -> str:
    """
    Get optional environment variable with default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    ensure_env_loaded()
    return os.getenv(key, default)


def get_optional_int(key: str) -> int | None:
    """
    Integer environment variable, or None when unset/blank.

    Raises:
        ValueError: If the variable is set but is not an integer
    """
    raw = get_optional_env(key).strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from e
