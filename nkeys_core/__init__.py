"""
nkeys Core Package
==================
Role-aware key pairs encoded as self-describing, checksummed base32 text
("nkeys"), for operators, accounts, users, servers, clusters, modules and
x25519 curve keys.

Provides:
- Role registry and prefix bytes
- Checksummed base32 codec (CRC-16/XMODEM)
- Ed25519 signing and X25519 sealed messages
- KeyPair façade and the ephemeral generate_identity boundary
"""

from .roles import KeyFamily, Role, role_for, prefix_for, role_from_name
from .codec import decode, encode, decode_seed, encode_seed, is_valid_encoding, role_of
from .identity import EncodedIdentity, assemble
from .keypair import KeyPair, KeyPairState, PublicKey, is_valid_public_key
from .ephemeral import EphemeralNkey, NkeyModel, generate_identity
from .config import NkeysConfig, load_config
from .exceptions import (
    NKeysError, UnknownRoleError, RandomSourceError, FormatError, InvalidPrefixError,
    ChecksumError, UnsupportedOperationError, PublicKeyOnlyError, WipedKeyError,
    SealedMessageError,
)

__all__ = [
    "KeyFamily", "Role", "role_for", "prefix_for", "role_from_name",
    "decode", "encode", "decode_seed", "encode_seed", "is_valid_encoding", "role_of",
    "EncodedIdentity", "assemble",
    "KeyPair", "KeyPairState", "PublicKey", "is_valid_public_key",
    "EphemeralNkey", "NkeyModel", "generate_identity",
    "NkeysConfig", "load_config",
    "NKeysError", "UnknownRoleError", "RandomSourceError", "FormatError",
    "InvalidPrefixError", "ChecksumError", "UnsupportedOperationError",
    "PublicKeyOnlyError", "WipedKeyError", "SealedMessageError",
]
