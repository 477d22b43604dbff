"""
Domain models for Gmail deep-link resolution.

An EmailLinkRecord is whatever the mail-sync side stored for one email
(suggested task, client communication, notice). A ResolvedLink is the link
the resolver picked for it, built fresh on every render and never persisted.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from maillink.gmail.token_encoder import TokenClass


class LinkTier(str, Enum):
    """Which step of the fallback chain produced the link."""

    NATIVE_TOKEN = "native_token"  # id already in Gmail web UI form
    THREAD_TOKEN = "thread_token"  # hex id encoded as a thread token
    MESSAGE_TOKEN = "message_token"  # hex id encoded as a message token
    SEARCH = "search"  # sender/subject/date search


class IdentifierSource(str, Enum):
    MESSAGE_ID = "message_id"
    THREAD_ID = "thread_id"


class EmailLinkRecord(BaseModel):
    """Identifiers and metadata for one email, as stored by mail sync."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message_id: str | None = Field(
        default=None,
        alias="gmail_message_id",
        description="Primary id: Gmail API hex id or native web UI token",
    )
    thread_id: str | None = Field(default=None, description="Secondary id (thread)")
    subject: str | None = Field(default=None, alias="email_subject")
    sender: str | None = Field(default=None, alias="email_from", description="Sender address")
    received_at: datetime | str | None = Field(default=None, alias="email_received_at")

    @field_validator("message_id", "thread_id", "subject", "sender", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("received_at", mode="before")
    @classmethod
    def blank_received_at_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def identifiers(self) -> list[tuple[IdentifierSource, str]]:
        """Present identifiers in priority order (primary first)."""
        found: list[tuple[IdentifierSource, str]] = []
        if self.message_id:
            found.append((IdentifierSource.MESSAGE_ID, self.message_id))
        if self.thread_id:
            found.append((IdentifierSource.THREAD_ID, self.thread_id))
        return found


class ResolvedLink(BaseModel):
    """A clickable Gmail URL and how it was obtained."""

    model_config = ConfigDict(frozen=True)

    url: str
    tier: LinkTier
    source: IdentifierSource | None = None
    token_class: TokenClass | None = None
    token: str | None = None

    @property
    def is_search(self) -> bool:
        return self.tier == LinkTier.SEARCH
