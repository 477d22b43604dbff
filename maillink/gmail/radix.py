"""
Radix transcoding between symbol alphabets.

Converts a digit string written in one alphabet into the digit string of the
same nonnegative value in another alphabet. The conversion runs on an array
of target-base digits (schoolbook multiply-add with carry propagation), so it
never needs an integer wide enough to hold the whole value.

Example:
    >>> transcode("//", FULL_ALPHABET, REDUCED_ALPHABET)
    'DdT'
"""

from __future__ import annotations

from dataclasses import dataclass, field

from maillink.gmail.errors import InvalidSymbol


@dataclass(frozen=True)
class Alphabet:
    """Ordered, duplicate-free symbol set. Its length is the radix."""

    symbols: str
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.symbols) < 2:
            raise ValueError("Alphabet needs at least two symbols")
        index: dict[str, int] = {}
        for position, symbol in enumerate(self.symbols):
            if symbol in index:
                raise ValueError(f"Duplicate symbol {symbol!r} in alphabet")
            index[symbol] = position
        object.__setattr__(self, "_index", index)

    @property
    def radix(self) -> int:
        return len(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def digit(self, symbol: str, position: int = 0) -> int:
        """
        Numeric value of a symbol.

        Raises:
            InvalidSymbol: If symbol is not in this alphabet
        """
        try:
            return self._index[symbol]
        except KeyError:
            raise InvalidSymbol(symbol, position) from None

    def symbol(self, digit: int) -> str:
        return self.symbols[digit]


# Standard base64 symbol set, order-sensitive
FULL_ALPHABET = Alphabet("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/")

# Gmail web UI token alphabet: consonants only, captured from real view tokens
REDUCED_ALPHABET = Alphabet("BCDFGHJKLMNPQRSTVWXZbcdfghjklmnpqrstvwxz")


def transcode(token: str, source: Alphabet, target: Alphabet) -> str:
    """
    Re-express a big-endian digit string from one alphabet in another.

    Args:
        token: Digits in `source`, most significant first
        source: Alphabet the token is written in
        target: Alphabet of the result

    Returns:
        Big-endian digits of the same value in `target`. An empty token gives
        an empty string; a token whose value is zero gives the single zero
        symbol of `target`. Leading zero digits are not preserved.

    Raises:
        InvalidSymbol: If a token character is not in `source`

    Side Effects:
        None (pure function)
    """
    if not token:
        return ""

    source_base = source.radix
    target_base = target.radix

    # Target-base digits, least significant first
    accumulator: list[int] = []

    for position, symbol in enumerate(token):
        carry = source.digit(symbol, position)

        # accumulator = accumulator * source_base + digit
        for i, value in enumerate(accumulator):
            carry, accumulator[i] = divmod(value * source_base + carry, target_base)
        while carry:
            carry, remainder = divmod(carry, target_base)
            accumulator.append(remainder)

    if not accumulator:
        return target.symbol(0)

    return "".join(target.symbol(digit) for digit in reversed(accumulator))
