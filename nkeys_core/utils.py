"""
nkeys_core.utils
----------------
Lightweight helpers for unpadded base32, secure random draws, and wiping
sensitive buffers.
"""

from __future__ import annotations
import base64, binascii, os
from typing import Callable, Optional

from .exceptions import FormatError, RandomSourceError

RandomSource = Callable[[int], bytes]


def b32e(b: bytes) -> str:
    # RFC 4648 alphabet, uppercase, padding stripped
    return base64.b32encode(b).decode("ascii").rstrip("=")


def b32d(s: str) -> bytes:
    """Strict inverse of b32e; anything b32e could not have produced is a FormatError."""
    if not isinstance(s, str):
        raise FormatError(f"encoded key must be text, got {type(s).__name__}")
    if not s or "=" in s:
        raise FormatError("invalid base32 encoding")
    try:
        raw = base64.b32decode(s + "=" * (-len(s) % 8))
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"invalid base32 encoding: {e}") from e
    # reject non-zero trailing bits so every byte string has exactly one text form
    if b32e(raw) != s:
        raise FormatError("non-canonical base32 encoding")
    return raw


def random_bytes(n: int, rand: Optional[RandomSource] = None) -> bytes:
    """Draw n bytes from rand (default os.urandom); never falls back to a weaker source."""
    source = rand or os.urandom
    try:
        out = source(n)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError(f"secure random source unavailable: {e}") from e
    if not isinstance(out, (bytes, bytearray)) or len(out) != n:
        raise RandomSourceError(f"short read from random source: wanted {n} bytes")
    return bytes(out)


def wipe(buf: Optional[bytearray]) -> None:
    if buf is None:
        return
    for i in range(len(buf)):
        buf[i] = 0

