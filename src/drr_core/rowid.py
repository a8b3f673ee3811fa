"""DRR Core - $R rowid codec.

A stored rowid is 14 raw bytes. The first 12 bytes are the base64 body of
the textual rowid; the last 2 bytes are its final two characters, stored
as-is.
"""
from __future__ import annotations

import base64
import string

from .errors import InvalidAlphabetCharacter, InvalidLength, MalformedRecord
from .protocol import (
    ALPHABET_INDEX,
    B64_BODY_LEN,
    B64_BODY_RAW_LEN,
    RAW_ROWID_LEN,
    RECORD_HEX_WIDTH,
    ROWID_LEN,
)

_HEX_DIGITS = frozenset(string.hexdigits)


def decode(raw: bytes) -> str:
    """Decode 14 raw bytes into the 18-character rowid."""
    # Bytes-like input only; an int raises TypeError here.
    raw = memoryview(raw).tobytes()
    if len(raw) != RAW_ROWID_LEN:
        raise InvalidLength(f"expected {RAW_ROWID_LEN} bytes, got {len(raw)}")

    body = base64.b64encode(raw[:B64_BODY_RAW_LEN]).decode("ascii")
    tail = "".join(chr(b) for b in raw[B64_BODY_RAW_LEN:])
    return body + tail


def encode(rowid: str) -> bytes:
    """Encode an 18-character rowid back into its 14 raw bytes."""
    if len(rowid) != ROWID_LEN:
        raise InvalidLength(f"expected {ROWID_LEN} characters, got {len(rowid)}")

    for pos, ch in enumerate(rowid[:B64_BODY_LEN], start=1):
        if ch not in ALPHABET_INDEX:
            raise InvalidAlphabetCharacter(f"{ch!r} at position {pos}")

    tail = bytearray()
    for pos, ch in enumerate(rowid[B64_BODY_LEN:], start=B64_BODY_LEN + 1):
        if ord(ch) > 0xFF:
            raise InvalidAlphabetCharacter(f"{ch!r} at position {pos} is not a single byte")
        tail.append(ord(ch))

    body = base64.b64decode(rowid[:B64_BODY_LEN], validate=True)
    return body + bytes(tail)


def decode_hex(text: str) -> str:
    """Decode a 28-character hex record, as rawtohex renders it."""
    if len(text) != RECORD_HEX_WIDTH:
        raise MalformedRecord(f"expected {RECORD_HEX_WIDTH} hex characters, got {len(text)}")
    bad = [ch for ch in text if ch not in _HEX_DIGITS]
    if bad:
        raise MalformedRecord(f"non-hex character {bad[0]!r}")
    return decode(bytes.fromhex(text))


def encode_hex(rowid: str) -> str:
    return encode(rowid).hex().upper()
