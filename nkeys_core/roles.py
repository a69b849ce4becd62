# nkeys_core/roles.py
"""
nkeys_core.roles
----------------
Closed enumeration of identity roles and their fixed mapping to a prefix
byte and a key family. Pure lookup tables, no state.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Optional

from .constants import (
    PREFIX_BYTE_ACCOUNT, PREFIX_BYTE_CLUSTER, PREFIX_BYTE_CURVE,
    PREFIX_BYTE_MODULE, PREFIX_BYTE_OPERATOR, PREFIX_BYTE_SERVER,
    PREFIX_BYTE_USER,
)
from .exceptions import UnknownRoleError


class KeyFamily(str, Enum):
    ED25519 = "ed25519"   # sign / verify
    X25519 = "x25519"     # seal / open


class Role(str, Enum):
    OPERATOR = "operator"
    ACCOUNT = "account"
    USER = "user"
    SERVER = "server"
    CLUSTER = "cluster"
    MODULE = "module"
    CURVE = "curve"

    @property
    def prefix(self) -> int:
        return prefix_for(self)

    @property
    def family(self) -> KeyFamily:
        return family_for(self)

    @property
    def can_sign(self) -> bool:
        return family_for(self) is KeyFamily.ED25519


_PREFIXES: Dict[Role, int] = {
    Role.OPERATOR: PREFIX_BYTE_OPERATOR,
    Role.ACCOUNT: PREFIX_BYTE_ACCOUNT,
    Role.USER: PREFIX_BYTE_USER,
    Role.SERVER: PREFIX_BYTE_SERVER,
    Role.CLUSTER: PREFIX_BYTE_CLUSTER,
    Role.MODULE: PREFIX_BYTE_MODULE,
    Role.CURVE: PREFIX_BYTE_CURVE,
}

_ROLES_BY_PREFIX: Dict[int, Role] = {tag: role for role, tag in _PREFIXES.items()}

_FAMILIES: Dict[Role, KeyFamily] = {
    role: (KeyFamily.X25519 if role is Role.CURVE else KeyFamily.ED25519)
    for role in Role
}


def prefix_for(role: Role) -> int:
    try:
        return _PREFIXES[role]
    except KeyError:
        raise UnknownRoleError(f"unknown role: {role!r}") from None


def family_for(role: Role) -> KeyFamily:
    try:
        return _FAMILIES[role]
    except KeyError:
        raise UnknownRoleError(f"unknown role: {role!r}") from None


def role_for(tag: int) -> Role:
    """Inverse of prefix_for; raises UnknownRoleError for any other byte."""
    try:
        return _ROLES_BY_PREFIX[tag]
    except KeyError:
        raise UnknownRoleError(f"unknown role prefix byte: {tag!r}") from None


def role_from_name(name: Optional[str]) -> Role:
    """
    Case-insensitive lookup of a role by name ("User", "CURVE", ...).

    Unrecognized names are an error; there is no fallback role.
    """
    if not isinstance(name, str):
        raise UnknownRoleError(f"role name must be a string, got {type(name).__name__}")
    try:
        return Role(name.strip().lower())
    except ValueError:
        raise UnknownRoleError(f"unknown role: {name!r}") from None


def is_role_prefix(tag: int) -> bool:
    return tag in _ROLES_BY_PREFIX
