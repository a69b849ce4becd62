# nkeys_core/identity.py
"""
nkeys_core.identity
-------------------
Assembles the three text forms of a key pair from its role and raw material:

- public:  role prefix    ‖ 32-byte public key
- private: private prefix ‖ private key (64 bytes Ed25519, 32 bytes X25519)
- seed:    seed marker + role prefix ‖ 32-byte seed
"""

from __future__ import annotations
from dataclasses import dataclass, field

from . import codec
from .crypto import RawKeyMaterial
from .exceptions import UnsupportedOperationError
from .roles import Role, family_for


@dataclass(frozen=True)
class EncodedIdentity:
    role: Role
    public: str
    private: str = field(repr=False)
    seed: str = field(repr=False)


def assemble(role: Role, material: RawKeyMaterial) -> EncodedIdentity:
    role = Role(role)
    if material.family is not family_for(role):
        raise UnsupportedOperationError(f"{material.family.value} material cannot back a {role.value} key")
    return EncodedIdentity(
        role=role,
        public=codec.encode_public(role, material.public),
        private=codec.encode_private(material.private()),
        seed=codec.encode_seed(role, bytes(material.seed)),
    )
