"""
API Endpoints for Gmail deep links

Used by the dashboard's "Open in Gmail" menu:
- POST /api/links/resolve - best link (token, then search), url null if none
- POST /api/links/search  - search-only link ("Search in Gmail")
- POST /api/links/debug   - every candidate the resolver considered
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from maillink import config
from maillink.gmail.link_resolver import DeepLinkResolver
from maillink.gmail.models import EmailLinkRecord, LinkTier
from maillink.gmail.token_encoder import TokenClass

router = APIRouter(prefix="/api/links", tags=["links"])

_resolver = DeepLinkResolver()


class LinkRequest(BaseModel):
    """Stored email identifiers plus the account to open it in"""

    gmail_message_id: str | None = Field(default=None, max_length=256)
    thread_id: str | None = Field(default=None, max_length=256)
    email_subject: str | None = Field(default=None, max_length=2000)
    email_from: str | None = Field(default=None, max_length=320)
    email_received_at: datetime | str | None = None
    # Omitted -> MAILLINK_DEFAULT_ACCOUNT_INDEX; explicit null -> generic /mail/ path
    account_index: int | None = Field(default=None, ge=0)

    def to_record(self) -> EmailLinkRecord:
        return EmailLinkRecord(
            message_id=self.gmail_message_id,
            thread_id=self.thread_id,
            subject=self.email_subject,
            sender=self.email_from,
            received_at=self.email_received_at,
        )

    def resolved_account_index(self) -> int | None:
        if "account_index" not in self.model_fields_set:
            return config.DEFAULT_ACCOUNT_INDEX
        return self.account_index


class LinkResponse(BaseModel):
    """Resolved link; url is null when the UI should disable the action"""

    url: str | None
    tier: LinkTier | None = None
    token_class: TokenClass | None = None


@router.post("/resolve", response_model=LinkResponse)
async def resolve_link(request: LinkRequest) -> LinkResponse:
    """
    Resolve the best Gmail link for an email.

    Example request:
    ```json
    {
        "gmail_message_id": "18d4c5a7b2e3f901",
        "email_subject": "Offer on 123 Main St",
        "account_index": 0
    }
    ```
    """
    link = _resolver.resolve(request.to_record(), request.resolved_account_index())
    if link is None:
        return LinkResponse(url=None)
    return LinkResponse(url=link.url, tier=link.tier, token_class=link.token_class)


@router.post("/search", response_model=LinkResponse)
async def search_link(request: LinkRequest) -> LinkResponse:
    """Gmail search link built from sender, subject and received time only."""
    link = _resolver.search_link(request.to_record(), request.resolved_account_index())
    if link is None:
        return LinkResponse(url=None)
    return LinkResponse(url=link.url, tier=link.tier)


@router.post("/debug")
async def debug_link(request: LinkRequest) -> dict[str, Any]:
    """Diagnostics for a record: tokens per class, plan, chosen and search URLs."""
    return _resolver.describe_candidates(request.to_record(), request.resolved_account_index())
