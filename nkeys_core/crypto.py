"""
nkeys_core.crypto
-----------------
Raw key material and the primitives bound to it:

- Ed25519: signatures for every signing role
- X25519 + HKDF + AES-GCM: sealed messages for the curve role

Material is generated from a 32-byte secure random seed; the public half is
always re-derived from the seed, never trusted from outside.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple
from cryptography.exceptions import InvalidSignature, InvalidTag
from cryptography.hazmat.primitives.asymmetric import ed25519, x25519
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from .constants import (
    PUBLIC_KEY_LEN, SEAL_HKDF_INFO, SEAL_NONCE_LEN, SEAL_VERSION, SEED_LEN,
)
from .exceptions import FormatError, SealedMessageError, WipedKeyError
from .roles import KeyFamily, Role, family_for
from .utils import RandomSource, random_bytes, wipe


@dataclass
class RawKeyMaterial:
    family: KeyFamily
    seed: bytearray
    public: bytes = field(default=b"")

    @property
    def wiped(self) -> bool:
        return not any(self.seed) and not self.public

    def private(self) -> bytes:
        """Ed25519: 64-byte seed ‖ public. X25519: the 32-byte scalar."""
        self._check()
        if self.family is KeyFamily.ED25519:
            return bytes(self.seed) + self.public
        return bytes(self.seed)

    def wipe(self) -> None:
        wipe(self.seed)
        self.public = b""

    def _check(self) -> None:
        if self.wiped:
            raise WipedKeyError("key material has been wiped")


# --------- Raw key generator ----------
def derive(family: KeyFamily, seed: bytes) -> RawKeyMaterial:
    if len(seed) != SEED_LEN:
        raise FormatError(f"seed must be {SEED_LEN} bytes")
    if family is KeyFamily.ED25519:
        pub = ed25519.Ed25519PrivateKey.from_private_bytes(bytes(seed)).public_key()
    else:
        pub = x25519.X25519PrivateKey.from_private_bytes(bytes(seed)).public_key()
    return RawKeyMaterial(family=family, seed=bytearray(seed), public=pub.public_bytes_raw())


def generate(role: Role, rand: Optional[RandomSource] = None) -> RawKeyMaterial:
    family = family_for(role)
    return derive(family, random_bytes(SEED_LEN, rand))


# --------- Ed25519 (sign/verify) ----------
def ed25519_sign(seed: bytes, data: bytes) -> bytes:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(bytes(seed))
    return sk.sign(bytes(data))


def ed25519_verify(pub_raw: bytes, sig: bytes, data: bytes) -> bool:
    try:
        ed25519.Ed25519PublicKey.from_public_bytes(pub_raw).verify(bytes(sig), bytes(data))
        return True
    except (InvalidSignature, ValueError, TypeError):
        return False


# --------- X25519 + HKDF + AES-GCM (seal/open) ----------
def derive_key(own_priv: bytes, peer_pub: bytes, salt: Optional[bytes] = None, info: bytes = SEAL_HKDF_INFO) -> bytes:
    sk = x25519.X25519PrivateKey.from_private_bytes(bytes(own_priv))
    shared = sk.exchange(x25519.X25519PublicKey.from_public_bytes(peer_pub))
    hkdf = HKDF(algorithm=hashes.SHA256(), length=32, salt=salt, info=info)
    return hkdf.derive(shared)  # 256-bit AEAD key


def aead_encrypt(key: bytes, plaintext: bytes, aad: Optional[bytes] = None, rand: Optional[RandomSource] = None) -> Tuple[bytes, bytes]:
    aes = AESGCM(key)
    nonce = random_bytes(SEAL_NONCE_LEN, rand)
    ct = aes.encrypt(nonce, bytes(plaintext), aad)
    return nonce, ct


def aead_decrypt(key: bytes, nonce: bytes, ciphertext: bytes, aad: Optional[bytes] = None) -> bytes:
    aes = AESGCM(key)
    return aes.decrypt(nonce, ciphertext, aad)


def seal(own_priv: bytes, recipient_pub: bytes, message: bytes, rand: Optional[RandomSource] = None) -> bytes:
    """version ‖ nonce ‖ AES-GCM(ciphertext ‖ tag); the version header is bound as AAD."""
    try:
        key = derive_key(own_priv, recipient_pub)
    except ValueError as e:
        raise SealedMessageError("invalid recipient key") from e
    nonce, ct = aead_encrypt(key, message, aad=SEAL_VERSION, rand=rand)
    return SEAL_VERSION + nonce + ct


def open_sealed(own_priv: bytes, sender_pub: bytes, sealed: bytes) -> bytes:
    sealed = bytes(sealed)
    head = len(SEAL_VERSION) + SEAL_NONCE_LEN
    if len(sealed) < head + 16 or not sealed.startswith(SEAL_VERSION):
        raise SealedMessageError("invalid sealed message")
    if len(sender_pub) != PUBLIC_KEY_LEN:
        raise SealedMessageError("invalid sender key")
    try:
        key = derive_key(own_priv, sender_pub)
    except ValueError as e:
        raise SealedMessageError("invalid sender key") from e
    try:
        return aead_decrypt(key, sealed[len(SEAL_VERSION):head], sealed[head:], aad=SEAL_VERSION)
    except InvalidTag as e:
        raise SealedMessageError("cannot open sealed message") from e
