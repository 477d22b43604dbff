"""
Deep-Link Resolver - pick the best Gmail link for a stored email

Fallback chain, first success wins:
1. primary id (message id) already in web UI form -> #all/{id}
2. primary id is a hex id -> thread token, then message token
3. same two steps for the secondary id (thread id)
4. Gmail search built from sender / subject / received time
5. nothing -> no link (UI shows a disabled "Open in Gmail")

Thread tokens are always tried before message tokens for the same id.
DeepLinkResolver.plan returns the chain as an ordered list of ResolutionSteps.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from maillink.gmail.errors import NoLinkAvailable
from maillink.gmail.gmail_link_builder import GmailLinkBuilder
from maillink.gmail.models import EmailLinkRecord, IdentifierSource, LinkTier, ResolvedLink
from maillink.gmail.search_query import build_search_url
from maillink.gmail.token_encoder import TokenClass, encode_legacy_id, is_legacy_hex_id
from maillink.observability.logging import get_logger
from maillink.observability.telemetry import counter

logger = get_logger(__name__)

Encoder = Callable[[str, TokenClass], str | None]
SearchBuilder = Callable[[str | None, str | None, datetime | str | None, int | None], str | None]
RecordLike = EmailLinkRecord | Mapping[str, Any]

# Token classes in the order they are attempted for a hex id
TOKEN_CLASS_ORDER: tuple[TokenClass, ...] = (TokenClass.THREAD, TokenClass.MESSAGE)

_TIER_BY_CLASS: dict[TokenClass, LinkTier] = {
    TokenClass.THREAD: LinkTier.THREAD_TOKEN,
    TokenClass.MESSAGE: LinkTier.MESSAGE_TOKEN,
}


@dataclass(frozen=True)
class ResolutionStep:
    """One attempt in the fallback chain. Returning a link ends the chain."""

    name: str
    attempt: Callable[[], ResolvedLink | None]


def as_record(record: RecordLike) -> EmailLinkRecord:
    if isinstance(record, EmailLinkRecord):
        return record
    return EmailLinkRecord.model_validate(dict(record))


class DeepLinkResolver:
    """
    Resolve EmailLinkRecords to Gmail URLs.

    Args:
        encoder: hex id + token class -> token or None (default encode_legacy_id)
        search_builder: (subject, sender, received_at, account_index) -> URL or None
    """

    def __init__(
        self,
        encoder: Encoder | None = None,
        search_builder: SearchBuilder | None = None,
    ) -> None:
        self._encoder = encoder or encode_legacy_id
        self._search_builder = search_builder or build_search_url

    def plan(self, record: RecordLike, account_index: int | None = None) -> list[ResolutionStep]:
        """
        Ordered steps for this record. Nothing is attempted until a step is called.
        """
        record = as_record(record)
        steps: list[ResolutionStep] = []

        for source, identifier in record.identifiers():
            if not is_legacy_hex_id(identifier):
                steps.append(
                    ResolutionStep(
                        name=f"{source.value}:native",
                        attempt=self._native_attempt(source, identifier, account_index),
                    )
                )
                continue
            for token_class in TOKEN_CLASS_ORDER:
                steps.append(
                    ResolutionStep(
                        name=f"{source.value}:{token_class.value}",
                        attempt=self._token_attempt(source, identifier, token_class, account_index),
                    )
                )

        steps.append(ResolutionStep(name="search", attempt=self._search_attempt(record, account_index)))
        return steps

    def resolve(self, record: RecordLike, account_index: int | None = None) -> ResolvedLink | None:
        """
        Best available link for the record.

        Returns:
            ResolvedLink, or None when every step failed

        Side Effects:
            - Increments deeplink.resolved.<tier> or deeplink.no_link counters
            - Logs the winning step at debug level
        """
        found = self._first_link(record, account_index)
        if found is not None:
            step, link = found
            logger.debug("Gmail link resolved via %s", step.name)
            counter(f"deeplink.resolved.{link.tier.value}")
            return link

        logger.info("No Gmail link available (no usable id, no search metadata)")
        counter("deeplink.no_link")
        return None

    def resolve_or_raise(self, record: RecordLike, account_index: int | None = None) -> ResolvedLink:
        """
        Like resolve(), for callers that prefer an exception.

        Raises:
            NoLinkAvailable: If every step failed
        """
        link = self.resolve(record, account_index)
        if link is None:
            raise NoLinkAvailable(record)
        return link

    def search_link(self, record: RecordLike, account_index: int | None = None) -> ResolvedLink | None:
        """Search-only link, skipping identifier steps ("Search in Gmail")."""
        return self._search_attempt(as_record(record), account_index)()

    def describe_candidates(self, record: RecordLike, account_index: int | None = None) -> dict[str, Any]:
        """
        Everything the resolver could build for a record, for the debug view.

        Only presence flags are reported for subject and sender.
        """
        record = as_record(record)
        identifiers: dict[str, Any] = {}
        for source, identifier in record.identifiers():
            is_hex = is_legacy_hex_id(identifier)
            identifiers[source.value] = {
                "value": identifier,
                "is_legacy_hex": is_hex,
                "tokens": (
                    {tc.value: self._encoder(identifier, tc) for tc in TOKEN_CLASS_ORDER}
                    if is_hex
                    else None
                ),
            }

        found = self._first_link(record, account_index)
        chosen = found[1] if found else None
        search = self.search_link(record, account_index)
        return {
            "account_index": account_index,
            "identifiers": identifiers,
            "has_subject": record.subject is not None,
            "has_sender": record.sender is not None,
            "has_received_at": record.received_at is not None,
            "plan": [step.name for step in self.plan(record, account_index)],
            "chosen_url": chosen.url if chosen else None,
            "chosen_tier": chosen.tier.value if chosen else None,
            "search_url": search.url if search else None,
        }

    def _first_link(
        self, record: RecordLike, account_index: int | None
    ) -> tuple[ResolutionStep, ResolvedLink] | None:
        for step in self.plan(record, account_index):
            link = step.attempt()
            if link is not None:
                return step, link
        return None

    def _native_attempt(
        self, source: IdentifierSource, identifier: str, account_index: int | None
    ) -> Callable[[], ResolvedLink | None]:
        def attempt() -> ResolvedLink | None:
            return ResolvedLink(
                url=GmailLinkBuilder.token_link(identifier, account_index),
                tier=LinkTier.NATIVE_TOKEN,
                source=source,
                token=identifier,
            )

        return attempt

    def _token_attempt(
        self,
        source: IdentifierSource,
        identifier: str,
        token_class: TokenClass,
        account_index: int | None,
    ) -> Callable[[], ResolvedLink | None]:
        def attempt() -> ResolvedLink | None:
            token = self._encoder(identifier, token_class)
            if not token:
                return None
            return ResolvedLink(
                url=GmailLinkBuilder.token_link(token, account_index),
                tier=_TIER_BY_CLASS[token_class],
                source=source,
                token_class=token_class,
                token=token,
            )

        return attempt

    def _search_attempt(
        self, record: EmailLinkRecord, account_index: int | None
    ) -> Callable[[], ResolvedLink | None]:
        def attempt() -> ResolvedLink | None:
            url = self._search_builder(record.subject, record.sender, record.received_at, account_index)
            if not url:
                return None
            return ResolvedLink(url=url, tier=LinkTier.SEARCH)

        return attempt


_default_resolver = DeepLinkResolver()


def resolve_link(record: RecordLike, account_index: int | None = None) -> ResolvedLink | None:
    """Convenience function using the default resolver"""
    return _default_resolver.resolve(record, account_index)


def resolve_url(record: RecordLike, account_index: int | None = None) -> str | None:
    """URL string for the best link, or None (render the action disabled)."""
    link = _default_resolver.resolve(record, account_index)
    return link.url if link else None


def search_url_for(record: RecordLike, account_index: int | None = None) -> str | None:
    """Search-only URL, or None when the record has no sender/subject/date."""
    link = _default_resolver.search_link(record, account_index)
    return link.url if link else None


def describe_candidates(record: RecordLike, account_index: int | None = None) -> dict[str, Any]:
    return _default_resolver.describe_candidates(record, account_index)
