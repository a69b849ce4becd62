# nkeys_core/keypair.py
"""
nkeys_core.keypair
------------------
Role-aware key pairs.

A KeyPair owns one RawKeyMaterial and exposes its three encoded forms.
Capabilities follow the role: signing roles sign and verify, the curve
role seals and opens. Asking for the other family's operation raises
UnsupportedOperationError rather than guessing.

Use as a context manager to wipe the seed when done:

    with KeyPair.generate("user") as kp:
        sig = kp.sign(b"nonce")
"""

from __future__ import annotations
from dataclasses import replace
from enum import Enum
from typing import Optional, Union
import logging

from . import codec, crypto
from .crypto import RawKeyMaterial
from .exceptions import (
    NKeysError, PublicKeyOnlyError, UnsupportedOperationError, WipedKeyError,
)
from .identity import EncodedIdentity, assemble
from .roles import KeyFamily, Role, role_from_name
from .utils import RandomSource

log = logging.getLogger("nkeys.keypair")

RoleLike = Union[Role, str]


def _to_role(role: RoleLike) -> Role:
    return role if isinstance(role, Role) else role_from_name(role)


def _require(role: Role, family: KeyFamily, op: str) -> None:
    if role.family is not family:
        raise UnsupportedOperationError(f"{op} is not supported for {role.value} keys")


class KeyPairState(str, Enum):
    GENERATED = "generated"
    RECONSTRUCTED = "reconstructed"


class KeyPair:
    def __init__(self, role: Role, material: RawKeyMaterial, state: KeyPairState = KeyPairState.GENERATED):
        self._role = Role(role)
        self._material = material
        self._state = state
        self._identity: EncodedIdentity = assemble(self._role, material)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def generate(cls, role: RoleLike, rand: Optional[RandomSource] = None) -> "KeyPair":
        """Fresh key pair for role (a Role or a case-insensitive role name)."""
        role = _to_role(role)
        kp = cls(role, crypto.generate(role, rand), KeyPairState.GENERATED)
        log.debug("generated %s key %s", role.value, kp.public_key())
        return kp

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> "KeyPair":
        """Rebuild a key pair, role included, from its encoded seed."""
        role, raw = codec.decode_seed(seed)
        return cls(role, crypto.derive(role.family, raw), KeyPairState.RECONSTRUCTED)

    @classmethod
    def from_raw_seed(cls, role: RoleLike, raw: bytes) -> "KeyPair":
        role = _to_role(role)
        return cls(role, crypto.derive(role.family, raw), KeyPairState.RECONSTRUCTED)

    @staticmethod
    def from_public_key(public_key: Union[str, bytes]) -> "PublicKey":
        return PublicKey.from_encoded(public_key)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def role(self) -> Role:
        return self._role

    @property
    def state(self) -> KeyPairState:
        return self._state

    @property
    def wiped(self) -> bool:
        return self._material.wiped

    def public_key(self) -> str:
        return self._identity.public

    def raw_public_key(self) -> bytes:
        return codec.decode_public(self._identity.public)[1]

    def private_key(self) -> str:
        self._check()
        return self._identity.private

    def seed(self) -> str:
        self._check()
        return self._identity.seed

    def identity(self) -> EncodedIdentity:
        self._check()
        return self._identity

    # ------------------------------------------------------------------
    # Signing roles
    # ------------------------------------------------------------------
    def sign(self, message: bytes) -> bytes:
        _require(self._role, KeyFamily.ED25519, "sign")
        self._check()
        return crypto.ed25519_sign(self._material.seed, message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        _require(self._role, KeyFamily.ED25519, "verify")
        return crypto.ed25519_verify(self.raw_public_key(), signature, message)

    # ------------------------------------------------------------------
    # Curve role
    # ------------------------------------------------------------------
    def seal(self, message: bytes, recipient_public_key: str, rand: Optional[RandomSource] = None) -> bytes:
        """Encrypt message for the holder of recipient_public_key (an 'X...' identity)."""
        _require(self._role, KeyFamily.X25519, "seal")
        self._check()
        _, recipient = codec.decode_public(recipient_public_key, Role.CURVE)
        return crypto.seal(self._material.seed, recipient, message, rand=rand)

    def open(self, sealed: bytes, sender_public_key: str) -> bytes:
        """Decrypt a message sealed for this key by the holder of sender_public_key."""
        _require(self._role, KeyFamily.X25519, "open")
        self._check()
        _, sender = codec.decode_public(sender_public_key, Role.CURVE)
        return crypto.open_sealed(self._material.seed, sender, sealed)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------
    def wipe(self) -> None:
        """Zero the seed buffer and drop the encoded secret forms."""
        self._material.wipe()
        self._identity = replace(self._identity, private="", seed="")

    def __enter__(self) -> "KeyPair":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()

    def __repr__(self) -> str:
        return f"KeyPair(role={self._role.value}, public_key={self._identity.public!r}, state={self._state.value})"

    def _check(self) -> None:
        if self._material.wiped:
            raise WipedKeyError("key pair has been wiped")


class PublicKey:
    """Public-only key: verifies for signing roles, names a recipient for curve."""

    def __init__(self, role: Role, raw: bytes):
        self._role = Role(role)
        self._encoded = codec.encode_public(self._role, raw)
        self._raw = bytes(raw)

    @classmethod
    def from_encoded(cls, text: Union[str, bytes]) -> "PublicKey":
        role, raw = codec.decode_public(text)
        return cls(role, raw)

    @property
    def role(self) -> Role:
        return self._role

    def public_key(self) -> str:
        return self._encoded

    def raw_public_key(self) -> bytes:
        return self._raw

    def verify(self, message: bytes, signature: bytes) -> bool:
        _require(self._role, KeyFamily.ED25519, "verify")
        return crypto.ed25519_verify(self._raw, signature, message)

    def private_key(self) -> str:
        raise PublicKeyOnlyError("no private key available")

    def seed(self) -> str:
        raise PublicKeyOnlyError("no seed available")

    def sign(self, message: bytes) -> bytes:
        raise PublicKeyOnlyError("cannot sign with a public key")

    def seal(self, message: bytes, recipient_public_key: str) -> bytes:
        raise PublicKeyOnlyError("cannot seal with a public key")

    def open(self, sealed: bytes, sender_public_key: str) -> bytes:
        raise PublicKeyOnlyError("cannot open with a public key")

    def __eq__(self, other) -> bool:
        return isinstance(other, PublicKey) and other._encoded == self._encoded

    def __hash__(self) -> int:
        return hash(self._encoded)

    def __repr__(self) -> str:
        return f"PublicKey(role={self._role.value}, public_key={self._encoded!r})"


def is_valid_public_key(text: Union[str, bytes], role: Optional[RoleLike] = None) -> bool:
    """True when text decodes to a public identity (of role, when given)."""
    expected = None if role is None else _to_role(role)
    try:
        codec.decode_public(text, expected)
    except NKeysError:
        return False
    return True
