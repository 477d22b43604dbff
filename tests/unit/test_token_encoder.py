"""
Tests for Gmail legacy hex id -> web UI token encoding.

Golden vectors pin every intermediate value (decimal, payload, unpadded
base64, token). They were computed from the encoding procedure and
cross-checked with an independent big-integer implementation; the thread
token for 18d4c5a7b2e3f901 has the FMfcgz prefix seen on real Gmail URLs.
"""

from __future__ import annotations

import pytest

from maillink.gmail.errors import InvalidIdentifierFormat
from maillink.gmail.token_encoder import (
    TokenClass,
    base64_unpadded,
    build_payload,
    encode_legacy_id,
    is_legacy_hex_id,
    legacy_id_to_decimal,
    parse_legacy_id,
    trace_legacy_id,
)

# (hex id, token class, decimal, payload, base64 without padding, token)
GOLDEN_VECTORS = [
    (
        "18d4c5a7b2e3f901",
        TokenClass.THREAD,
        "1789272276024424705",
        "f:1789272276024424705",
        "ZjoxNzg5MjcyMjc2MDI0NDI0NzA1",
        "FMfcgzGwJvhkHQHCXNhdCBzJVrBfWJGc",
    ),
    (
        "18d4c5a7b2e3f901",
        TokenClass.MESSAGE,
        "1789272276024424705",
        "msg-f:1789272276024424705",
        "bXNnLWY6MTc4OTI3MjI3NjAyNDQyNDcwNQ",
        "CXKnWZngLGgsFlnDcGWPrKjzZRgvZDGlDkpwXHL",
    ),
    (
        "19c01b2fa3f4e21",
        TokenClass.THREAD,
        "115969558619049505",
        "f:115969558619049505",
        "ZjoxMTU5Njk1NTg2MTkwNDk1MDU",
        "DBzlbfmBTvHdCKrkwqFDkQmlVWDGMFl",
    ),
    (
        "19c01b2fa3f4e21",
        TokenClass.MESSAGE,
        "115969558619049505",
        "msg-f:115969558619049505",
        "bXNnLWY6MTE1OTY5NTU4NjE5MDQ5NTA1",
        "dmPNfRrLJqLHWTtcsszDZHNcLKCCNDDdmbKm",
    ),
    (
        "ffffffffffffffff",
        TokenClass.THREAD,
        "18446744073709551615",
        "f:18446744073709551615",
        "ZjoxODQ0Njc0NDA3MzcwOTU1MTYxNQ",
        "LPmsdSMlgKSCtbnwnZBgZQBVFSnFCRrcxq",
    ),
]


class TestGoldenVectors:
    @pytest.mark.parametrize(
        ("legacy_id", "token_class", "decimal", "payload", "encoded", "token"),
        GOLDEN_VECTORS,
    )
    def test_every_intermediate_value(self, legacy_id, token_class, decimal, payload, encoded, token):
        trace = trace_legacy_id(legacy_id, token_class)

        assert trace.decimal == decimal
        assert trace.payload == payload
        assert trace.base64_unpadded == encoded
        assert trace.token == token

    @pytest.mark.parametrize(
        ("legacy_id", "token_class", "decimal", "payload", "encoded", "token"),
        GOLDEN_VECTORS,
    )
    def test_encode_legacy_id_returns_token(self, legacy_id, token_class, decimal, payload, encoded, token):
        assert encode_legacy_id(legacy_id, token_class) == token

    def test_thread_token_has_gmail_prefix(self):
        assert encode_legacy_id("18d4c5a7b2e3f901", TokenClass.THREAD).startswith("FMfcgz")


class TestDecimalConversion:
    def test_decimal_beyond_float_precision(self):
        # 2**64 - 1 is not representable as a double
        assert legacy_id_to_decimal("ffffffffffffffff") == "18446744073709551615"
        assert int(float(int("ffffffffffffffff", 16))) != 18446744073709551615

    @pytest.mark.parametrize(
        "legacy_id",
        ["18d4c5a7b2e3f901", "19c01b2fa3f4e21", "0000000000000ff", "abcdef0123456789", "8000000000000000"],
    )
    def test_matches_big_integer_parse(self, legacy_id):
        assert legacy_id_to_decimal(legacy_id) == str(int(legacy_id, 16))

    def test_known_values(self):
        assert legacy_id_to_decimal("abcdef0123456789") == "12379813738877118345"
        assert legacy_id_to_decimal("0000000000000ff") == "255"

    def test_case_insensitive(self):
        assert legacy_id_to_decimal("18D4C5A7B2E3F901") == "1789272276024424705"
        assert encode_legacy_id("18D4C5A7B2E3F901", TokenClass.THREAD) == encode_legacy_id(
            "18d4c5a7b2e3f901", TokenClass.THREAD
        )

    def test_parse_rejects_bad_format(self):
        with pytest.raises(InvalidIdentifierFormat) as exc_info:
            parse_legacy_id("not-hex")
        assert exc_info.value.value == "not-hex"


class TestPayload:
    def test_class_prefixes(self):
        assert TokenClass.THREAD.prefix == "f"
        assert TokenClass.MESSAGE.prefix == "msg-f"

    def test_build_payload_accepts_class_value(self):
        assert build_payload("19c01b2fa3f4e21", "thread") == "f:115969558619049505"
        assert build_payload("19c01b2fa3f4e21", "message") == "msg-f:115969558619049505"

    def test_base64_padding_stripped(self):
        # "f:1" -> "Zjox" (no padding), "f:12" -> "ZjoxMg==" -> "ZjoxMg"
        assert base64_unpadded("f:1") == "Zjox"
        assert base64_unpadded("f:12") == "ZjoxMg"


class TestInvalidInput:
    @pytest.mark.parametrize(
        "value",
        [
            "18d4c5a7b2e3f9",  # 14 characters
            "18d4c5a7b2e3f9012",  # 17 characters
            "18d4c5a7b2e3f90g",  # non-hex character
            "FMfcgzGwJvhkHQHCXNhdCBzJVrBfWJGc",  # already a web UI token
            "",
            "   ",
        ],
    )
    def test_encoder_returns_none_instead_of_raising(self, value):
        assert encode_legacy_id(value, TokenClass.THREAD) is None
        assert encode_legacy_id(value, TokenClass.MESSAGE) is None

    def test_none_returns_none(self):
        assert encode_legacy_id(None, TokenClass.THREAD) is None

    def test_unknown_token_class_returns_none(self):
        assert encode_legacy_id("18d4c5a7b2e3f901", "auto") is None

    def test_surrounding_whitespace_ignored(self):
        assert encode_legacy_id("  18d4c5a7b2e3f901\n", TokenClass.THREAD) == "FMfcgzGwJvhkHQHCXNhdCBzJVrBfWJGc"


class TestIsLegacyHexId:
    @pytest.mark.parametrize("value", ["18d4c5a7b2e3f901", "19c01b2fa3f4e21", "ABCDEF0123456789"])
    def test_hex_ids(self, value):
        assert is_legacy_hex_id(value)

    @pytest.mark.parametrize(
        "value",
        [None, "", "18d4c5a7b2e3f9", "18d4c5a7b2e3f9012", "FMfcgzGwJvhkHQHCXNhdCBzJVrBfWJGc", "thread-abc"],
    )
    def test_non_hex_ids(self, value):
        assert not is_legacy_hex_id(value)
