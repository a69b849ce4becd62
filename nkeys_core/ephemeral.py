# nkeys_core/ephemeral.py
"""
nkeys_core.ephemeral
--------------------
Boundary between the key core and a host that asks for an nkey as a
transient value: open it, use it within one operation, close it.

Nothing generated here is persisted. The private key and seed are marked
sensitive and are redacted from every serialized view unless the caller
asks for them explicitly.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional
import logging

from .config import NkeysConfig, load_config
from .exceptions import NKeysError
from .keypair import KeyPair
from .logger import configure_logging
from .roles import Role, role_from_name

log = logging.getLogger("nkeys.ephemeral")

REDACTED = "<sensitive>"

SCHEMA: Dict[str, Any] = {
    "description": (
        "An ephemeral nkey is an ed25519 (or x25519 curve) key pair formatted for use "
        "with NATS. The key pair is generated on open and is never persisted."
    ),
    "attributes": {
        "type": {
            "optional": True,
            "computed": True,
            "sensitive": False,
            "description": "The type of nkey to generate. Must be one of "
                           + "|".join(r.value for r in Role),
        },
        "public_key": {
            "computed": True,
            "sensitive": False,
            "description": "Public key of the nkey to be given in config to the nats server",
        },
        "private_key": {
            "computed": True,
            "sensitive": True,
            "description": "Private key of the nkey to be given to the client for authentication",
        },
        "seed": {
            "computed": True,
            "sensitive": True,
            "description": "Seed of the nkey to be given to the client for authentication",
        },
    },
}

SENSITIVE_FIELDS = tuple(
    name for name, attr in SCHEMA["attributes"].items() if attr.get("sensitive")
)


def resolve_role(role_name: Optional[str | Role], cfg: Optional[NkeysConfig] = None) -> Role:
    """
    Unset or blank role -> configured default role.
    Anything else must name a role exactly (case-insensitive).
    """
    if isinstance(role_name, Role):
        return role_name
    if role_name is None or (isinstance(role_name, str) and not role_name.strip()):
        return (cfg or load_config()).default_role
    return role_from_name(role_name)


def generate_identity(role_name: Optional[str | Role], config: Optional[NkeysConfig] = None) -> Dict[str, str]:
    """Generate a key pair for role_name and return its public key, private key and seed."""
    role = resolve_role(role_name, config)
    with KeyPair.generate(role) as kp:
        return {
            "public_key": kp.public_key(),
            "private_key": kp.private_key(),
            "seed": kp.seed(),
        }


@dataclass
class NkeyModel:
    type: Optional[str] = None
    public_key: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    seed: Optional[str] = field(default=None, repr=False)

    def to_dict(self, redact: bool = True) -> Dict[str, Any]:
        d = asdict(self)
        if redact:
            for name in SENSITIVE_FIELDS:
                if d.get(name) is not None:
                    d[name] = REDACTED
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NkeyModel":
        return cls(type=data.get("type"))

    def generate_keys(self, cfg: Optional[NkeysConfig] = None) -> None:
        role = resolve_role(self.type, cfg)
        ident = generate_identity(role)
        self.type = role.value
        self.public_key = ident["public_key"]
        self.private_key = ident["private_key"]
        self.seed = ident["seed"]


@dataclass
class Diagnostic:
    summary: str
    detail: str
    severity: str = "error"


@dataclass
class OpenResponse:
    result: Optional[NkeyModel] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)


class EphemeralNkey:
    """
    Lifecycle hooks for an nkey handed out as a transient value.

    open() turns the requested configuration into a populated NkeyModel, or
    into an error diagnostic when generation fails. close() has nothing to
    release: the model is owned by the caller and never stored here.
    """

    type_suffix = "_nkey"

    def __init__(self, config: Optional[NkeysConfig] = None):
        self.config = config or load_config()
        configure_logging(self.config)

    def metadata(self, provider_type_name: str) -> str:
        return provider_type_name + self.type_suffix

    def schema(self) -> Dict[str, Any]:
        return SCHEMA

    def open(self, data: Dict[str, Any] | NkeyModel | None = None) -> OpenResponse:
        resp = OpenResponse()
        model = data if isinstance(data, NkeyModel) else NkeyModel.from_dict(data or {})

        try:
            model.generate_keys(self.config)
        except NKeysError as e:
            resp.diagnostics.append(Diagnostic(summary="generating nkey", detail=str(e)))
            log.error(f"[NKEY OPEN] generating nkey failed: {e}")
            return resp

        log.debug(f"[NKEY OPEN] opened ephemeral nkey type={model.type} public_key={model.public_key}")
        resp.result = model
        return resp

    def close(self) -> None:
        log.debug("[NKEY CLOSE] closed ephemeral nkey")
