"""
Gmail search fallback.

When no view token can be produced, the best remaining link is a Gmail
search that narrows to the email by sender, subject and a date window:

    from:agent@example.com subject:"Offer \\"123 Main\\"" after:2025/01/14 before:2025/01/16
"""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from maillink import config
from maillink.gmail.gmail_link_builder import GmailLinkBuilder
from maillink.observability.logging import get_logger

logger = get_logger(__name__)


def parse_received_at(received_at: str | datetime | None) -> datetime | None:
    """
    Parse an email received time, leniently.

    Accepts ISO-8601 (with or without a trailing Z), RFC 2822 mail Date
    headers, and datetime objects.

    Returns:
        datetime, or None when the value is missing or unparseable
    """
    if received_at is None:
        return None
    if isinstance(received_at, datetime):
        return received_at

    raw = received_at.strip()
    if not raw:
        return None

    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        pass

    try:
        return date_parser.parse(raw)
    except (ValueError, OverflowError) as e:
        # Can't parse date -> search without a date window
        logger.debug("Unparseable received_at %r: %s", raw, e)
        return None


def _localize(received: datetime) -> datetime:
    if received.tzinfo is None or not config.SEARCH_TIMEZONE:
        return received
    try:
        return received.astimezone(ZoneInfo(config.SEARCH_TIMEZONE))
    except ZoneInfoNotFoundError:
        logger.warning("Unknown MAILLINK_SEARCH_TIMEZONE %r, using timestamp offset", config.SEARCH_TIMEZONE)
        return received


def date_window_clause(received_at: str | datetime | None, window_days: int | None = None) -> str | None:
    """'after:<day before> before:<day after>' or None if the time is unusable."""
    received = parse_received_at(received_at)
    if received is None:
        return None

    days = config.SEARCH_WINDOW_DAYS if window_days is None else window_days
    received = _localize(received)
    try:
        after = (received - timedelta(days=days)).strftime(config.SEARCH_DATE_FORMAT)
        before = (received + timedelta(days=days)).strftime(config.SEARCH_DATE_FORMAT)
    except OverflowError:
        return None
    return f"after:{after} before:{before}"


def build_search_clauses(
    subject: str | None,
    sender_address: str | None,
    received_at: str | datetime | None,
    window_days: int | None = None,
) -> list[str]:
    """
    Gmail search clauses for whichever fields are present.

    Order is sender, subject, date window. The date window counts as one
    clause even though it renders as two Gmail operators.
    """
    clauses: list[str] = []

    sender = (sender_address or "").strip()
    if sender:
        clauses.append(f"from:{sender}")

    cleaned_subject = (subject or "").strip()
    if cleaned_subject:
        escaped = cleaned_subject.replace('"', '\\"')
        clauses.append(f'subject:"{escaped}"')

    window = date_window_clause(received_at, window_days)
    if window:
        clauses.append(window)

    return clauses


def build_search_query(
    subject: str | None,
    sender_address: str | None,
    received_at: str | datetime | None,
    window_days: int | None = None,
) -> str | None:
    """Joined search query, or None when no field is usable."""
    query = " ".join(build_search_clauses(subject, sender_address, received_at, window_days)).strip()
    return query or None


def build_search_url(
    subject: str | None,
    sender_address: str | None,
    received_at: str | datetime | None,
    account_index: int | None = None,
) -> str | None:
    """
    Build a Gmail search URL that should surface one email.

    Args:
        subject: Email subject (quotes are backslash-escaped)
        sender_address: Sender email address
        received_at: When the email arrived
        account_index: Optional /u/{n}/ account scoping

    Returns:
        Gmail #search/ URL, or None if no field is available

    Side Effects:
        None (pure function - builds URL string only)
    """
    query = build_search_query(subject, sender_address, received_at)
    if query is None:
        return None
    return GmailLinkBuilder.search_link(query, account_index)
