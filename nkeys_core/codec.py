# nkeys_core/codec.py
"""
nkeys_core.codec
----------------
Checksummed base32 text form for nkey material:

    base32( prefix ‖ payload ‖ crc16-le(prefix ‖ payload) )

Seeds carry a two-byte tag (seed marker plus role prefix) so a seed string
alone identifies the role it reconstructs.
"""

from __future__ import annotations
import struct
from typing import Optional, Tuple

from .constants import (
    CHECKSUM_LEN, CURVE_PRIVATE_KEY_LEN, ED25519_PRIVATE_KEY_LEN,
    PREFIX_BYTE_PRIVATE, PREFIX_BYTE_SEED, PUBLIC_KEY_LEN, SEED_LEN,
)
from .crc16 import crc16, crc16_valid
from .exceptions import ChecksumError, FormatError, InvalidPrefixError, UnknownRoleError
from .roles import Role, is_role_prefix, prefix_for, role_for, role_from_name
from .utils import b32d, b32e

_PAYLOAD_LENS = {
    PREFIX_BYTE_PRIVATE: (ED25519_PRIVATE_KEY_LEN, CURVE_PRIVATE_KEY_LEN),
}


def _checked(raw: bytes) -> bytes:
    return raw + struct.pack("<H", crc16(raw))


def _decode_raw(text: str) -> bytes:
    raw = b32d(text)
    if len(raw) < 1 + CHECKSUM_LEN + 1:
        raise FormatError("encoded key too short")
    body, (crc,) = raw[:-CHECKSUM_LEN], struct.unpack("<H", raw[-CHECKSUM_LEN:])
    if not crc16_valid(body, crc):
        raise ChecksumError("invalid checksum")
    return body


def _as_text(text) -> str:
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("ascii")
        except UnicodeDecodeError as e:
            raise FormatError("encoded key is not ASCII") from e
    return text


# --------- Generic single-byte tag ----------
def _payload_sizes(prefix: int) -> Tuple[int, ...]:
    """Payload lengths allowed under a single-byte tag; only registered tags are accepted."""
    if prefix == PREFIX_BYTE_PRIVATE:
        return _PAYLOAD_LENS[PREFIX_BYTE_PRIVATE]
    if is_role_prefix(prefix):
        return (PUBLIC_KEY_LEN,)
    raise UnknownRoleError(f"unknown prefix byte: {prefix!r}")


def encode(prefix: int, payload: bytes) -> str:
    """Encode a public (role prefix) or private key; seeds go through encode_seed."""
    payload = bytes(payload)
    if len(payload) not in _payload_sizes(prefix):
        raise FormatError(f"invalid payload length {len(payload)} for prefix {prefix!r}")
    return b32e(_checked(bytes([prefix]) + payload))


def decode(text: str) -> Tuple[int, bytes]:
    """
    Return (prefix, payload) after base32, checksum, prefix and length
    validation. For seeds the prefix is the first tag byte and the payload
    starts with the second one.
    """
    body = _decode_raw(_as_text(text))
    prefix, payload = body[0], body[1:]
    if prefix & 0xF8 == PREFIX_BYTE_SEED:
        _split_seed(body)
    elif len(payload) not in _payload_sizes(prefix):
        raise FormatError(f"invalid payload length {len(payload)} for prefix {prefix!r}")
    return prefix, payload


def decode_expected(expected_prefix: int, text: str) -> bytes:
    """Decode text that must carry expected_prefix. Returns the payload."""
    prefix, payload = decode(text)
    if prefix != expected_prefix:
        raise InvalidPrefixError(
            f"unexpected prefix byte {prefix!r}, wanted {expected_prefix!r}"
        )
    return payload


# --------- Public identities ----------
def encode_public(role: Role, public: bytes) -> str:
    if len(public) != PUBLIC_KEY_LEN:
        raise FormatError(f"public key must be {PUBLIC_KEY_LEN} bytes")
    return encode(prefix_for(role), public)


def decode_public(text: str, role: Optional[Role] = None) -> Tuple[Role, bytes]:
    prefix, payload = decode(text)
    if not is_role_prefix(prefix):
        raise InvalidPrefixError("not a public key")
    found = role_for(prefix)
    if role is not None:
        expected = role if isinstance(role, Role) else role_from_name(role)
        if found is not expected:
            raise InvalidPrefixError(f"expected {expected.value} public key, got {found.value}")
    return found, payload


# --------- Private identities ----------
def encode_private(private: bytes) -> str:
    return encode(PREFIX_BYTE_PRIVATE, private)


def decode_private(text: str) -> bytes:
    return decode_expected(PREFIX_BYTE_PRIVATE, text)


# --------- Seeds ----------
def seed_tag(role: Role) -> bytes:
    """Two-byte tag: 5 bits of seed marker, then the 8-bit role prefix."""
    prefix = prefix_for(role)
    return bytes([PREFIX_BYTE_SEED | (prefix >> 5), (prefix & 31) << 3])


def encode_seed(role: Role, seed: bytes) -> str:
    if len(seed) != SEED_LEN:
        raise FormatError(f"seed must be {SEED_LEN} bytes")
    return b32e(_checked(seed_tag(role) + bytes(seed)))


def _split_seed(body: bytes) -> Tuple[Role, bytes]:
    if len(body) < 2 or body[0] & 0xF8 != PREFIX_BYTE_SEED:
        raise InvalidPrefixError("not a seed")
    role = role_for(((body[0] & 7) << 5) | ((body[1] & 0xF8) >> 3))
    if body[1] & 7:
        raise FormatError("invalid seed tag")
    seed = body[2:]
    if len(seed) != SEED_LEN:
        raise FormatError(f"invalid seed length {len(seed)}")
    return role, seed


def decode_seed(text: str) -> Tuple[Role, bytes]:
    return _split_seed(_decode_raw(_as_text(text)))


# --------- Validation helpers ----------
def is_valid_encoding(text: str) -> bool:
    try:
        decode(text)
    except (FormatError, ChecksumError, UnknownRoleError):
        return False
    return True


def role_of(text: str) -> Role:
    """Role carried by a public identity or a seed."""
    prefix, _ = decode(text)
    if prefix & 0xF8 == PREFIX_BYTE_SEED:
        return decode_seed(text)[0]
    if prefix == PREFIX_BYTE_PRIVATE:
        raise InvalidPrefixError("private keys do not carry a role")
    return role_for(prefix)
