"""
Error taxonomy for Gmail deep-link construction.

InvalidSymbol and InvalidIdentifierFormat are raised by the low-level
encoders and converted to None at the encode_legacy_id boundary.
NoLinkAvailable is only raised by DeepLinkResolver.resolve_or_raise().
"""

from __future__ import annotations

from typing import Any


class DeepLinkError(ValueError):
    """Base class for deep-link failures."""

    pass


class InvalidSymbol(DeepLinkError):
    """A token character is not part of the alphabet used to decode it."""

    def __init__(self, symbol: str, position: int) -> None:
        self.symbol = symbol
        self.position = position
        super().__init__(f"Invalid token character {symbol!r} at position {position}")


class InvalidIdentifierFormat(DeepLinkError):
    """Identifier is not a 15-16 character hexadecimal legacy id."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Not a legacy hex identifier: {value!r}")


class NoLinkAvailable(DeepLinkError):
    """Every identifier tier and the search fallback produced nothing."""

    def __init__(self, record: Any = None) -> None:
        self.record = record
        super().__init__("No Gmail link available for this record")
