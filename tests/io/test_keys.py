# tests/io/test_keys.py
from __future__ import annotations

import pytest

from acl_sweep.errors import KeyDecodeError
from acl_sweep.io.keys import decode_key


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("plain/key.txt", "plain/key.txt"),
        ("with+space", "with space"),
        ("a%20b", "a b"),
        ("caf%C3%A9", "café"),
        ("100%25", "100%"),
        ("%2Bliteral-plus", "+literal-plus"),
    ],
)
def test_decode_valid_keys(raw, expected):
    assert decode_key(raw) == expected


@pytest.mark.parametrize("raw", ["bad%zzescape", "trailing%", "short%4"])
def test_malformed_escape_raises(raw):
    with pytest.raises(KeyDecodeError) as ei:
        decode_key(raw)
    assert ei.value.raw_key == raw
    assert "invalid escape" in str(ei.value)


def test_invalid_utf8_raises_with_cause():
    with pytest.raises(KeyDecodeError) as ei:
        decode_key("bad%FFbyte")
    assert isinstance(ei.value.__cause__, UnicodeDecodeError)
