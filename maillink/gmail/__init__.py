"""Gmail web UI tokens, search fallback and link resolution."""

from __future__ import annotations

from maillink.gmail.errors import (
    DeepLinkError,
    InvalidIdentifierFormat,
    InvalidSymbol,
    NoLinkAvailable,
)
from maillink.gmail.radix import FULL_ALPHABET, REDUCED_ALPHABET, Alphabet, transcode
from maillink.gmail.token_encoder import TokenClass, encode_legacy_id, is_legacy_hex_id

__all__ = [
    "FULL_ALPHABET",
    "REDUCED_ALPHABET",
    "Alphabet",
    "DeepLinkError",
    "InvalidIdentifierFormat",
    "InvalidSymbol",
    "NoLinkAvailable",
    "TokenClass",
    "encode_legacy_id",
    "is_legacy_hex_id",
    "transcode",
]
