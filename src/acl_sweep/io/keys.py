# acl_sweep/io/keys.py
from __future__ import annotations

import re
from urllib.parse import unquote_plus

from acl_sweep.errors import KeyDecodeError

__all__ = ["decode_key"]

# A '%' that is not followed by two hex digits.
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_key(raw_key: str) -> str:
    """
    Undo S3's ``EncodingType=url`` key encoding (query-unescape semantics).

    '+' decodes to a space and every '%' must start a well-formed hex escape.
    The unescaped bytes must form valid UTF-8. Anything else raises
    KeyDecodeError rather than producing a key that does not exist remotely.
    """
    m = _BAD_ESCAPE.search(raw_key)
    if m:
        bad = raw_key[m.start(): m.start() + 3]
        raise KeyDecodeError(raw_key, f"invalid escape {bad!r}")
    try:
        return unquote_plus(raw_key, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise KeyDecodeError(raw_key, "not valid UTF-8 once unescaped") from exc
