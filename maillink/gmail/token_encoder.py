"""
Gmail legacy id -> web UI view token.

The Gmail API returns message/thread ids as 15-16 hex digits (e.g.
`18d4c5a7b2e3f901`). The Gmail web UI addresses the same conversation with an
undocumented token (e.g. `FMfcgzGwJvhk...`). The token is built as:

1. hex id -> exact decimal value (big integer, never float)
2. payload "<prefix>:<decimal>" where prefix is "f" (thread) or "msg-f" (message)
3. standard base64 of the payload, "=" padding stripped
4. base64 digits transcoded from the 64-symbol alphabet to Gmail's 40-symbol one

The scheme was reverse-engineered and may change with Gmail rollouts. Keep all
knowledge of it in this module; callers only see encode_legacy_id().
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from enum import Enum

from maillink.gmail.errors import InvalidIdentifierFormat
from maillink.gmail.radix import FULL_ALPHABET, REDUCED_ALPHABET, transcode
from maillink.observability.logging import get_logger

logger = get_logger(__name__)

LEGACY_HEX_PATTERN = re.compile(r"^[0-9a-f]{15,16}$", re.IGNORECASE)


class TokenClass(str, Enum):
    """Which provider-internal payload prefix the token declares."""

    THREAD = "thread"
    MESSAGE = "message"

    @property
    def prefix(self) -> str:
        return _CLASS_PREFIXES[self]


_CLASS_PREFIXES: dict[TokenClass, str] = {
    TokenClass.THREAD: "f",
    TokenClass.MESSAGE: "msg-f",
}


@dataclass(frozen=True)
class TokenTrace:
    """Every intermediate value of one encoding, for fixtures and debugging."""

    legacy_id: str
    token_class: TokenClass
    decimal: str
    payload: str
    base64_unpadded: str
    token: str


def is_legacy_hex_id(value: str | None) -> bool:
    """True if value (after trimming) is a 15-16 character hex id."""
    if not value:
        return False
    return bool(LEGACY_HEX_PATTERN.fullmatch(value.strip()))


def parse_legacy_id(legacy_id: str) -> int:
    """
    Parse a legacy hex id into its exact integer value.

    Raises:
        InvalidIdentifierFormat: If the id is not 15-16 hex characters
    """
    hex_id = (legacy_id or "").strip()
    if not LEGACY_HEX_PATTERN.fullmatch(hex_id):
        raise InvalidIdentifierFormat(hex_id)
    return int(hex_id, 16)


def legacy_id_to_decimal(legacy_id: str) -> str:
    """Exact base-10 expansion of a legacy hex id."""
    return str(parse_legacy_id(legacy_id))


def build_payload(legacy_id: str, token_class: TokenClass) -> str:
    """Canonical payload, e.g. 'f:1789272276024424705'."""
    return f"{TokenClass(token_class).prefix}:{legacy_id_to_decimal(legacy_id)}"


def base64_unpadded(payload: str) -> str:
    """Standard base64 of an ASCII payload with trailing '=' removed."""
    return base64.b64encode(payload.encode("ascii")).decode("ascii").rstrip("=")


def trace_legacy_id(legacy_id: str, token_class: TokenClass) -> TokenTrace:
    """
    Run the full encoding and keep every intermediate value.

    Raises:
        InvalidIdentifierFormat: If legacy_id is not a hex id
        InvalidSymbol: If the base64 step produced a symbol outside the alphabet
    """
    token_class = TokenClass(token_class)
    hex_id = legacy_id.strip()
    decimal = legacy_id_to_decimal(hex_id)
    payload = f"{token_class.prefix}:{decimal}"
    encoded = base64_unpadded(payload)
    token = transcode(encoded, FULL_ALPHABET, REDUCED_ALPHABET)
    return TokenTrace(
        legacy_id=hex_id,
        token_class=token_class,
        decimal=decimal,
        payload=payload,
        base64_unpadded=encoded,
        token=token,
    )


def encode_legacy_id(legacy_id: str | None, token_class: TokenClass) -> str | None:
    """
    Convert a Gmail API hex id into a Gmail web UI view token.

    Args:
        legacy_id: 15-16 hex characters (case-insensitive)
        token_class: TokenClass.THREAD or TokenClass.MESSAGE

    Returns:
        Reduced-alphabet token, or None when the id is not a legacy hex id or
        encoding fails. Never raises for bad input.

    Side Effects:
        - Logs at debug level when encoding fails
    """
    if not legacy_id:
        return None
    try:
        return trace_legacy_id(legacy_id, token_class).token
    except ValueError as e:
        # DeepLinkError subclasses ValueError; so does an unknown token class
        logger.debug("Legacy id encoding failed (%s): %s", token_class, e)
        return None
