"""Health check endpoint for the maillink API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from maillink import config

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Liveness probe. Reports the webmail host links are built for."""
    return {
        "status": "healthy",
        "service": "maillink API",
        "version": config.APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "webmail_host": config.WEBMAIL_HOST,
        "default_account_index": config.DEFAULT_ACCOUNT_INDEX,
    }
