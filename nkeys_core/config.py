# nkeys_core/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import os

from .roles import Role, role_from_name


@dataclass(frozen=True)
class NkeysConfig:
    """
    Runtime settings for the nkey boundary layer.

    default_role only applies when a caller leaves the role unset; a
    non-empty unrecognized role name is always an error.
    """
    default_role: Role = Role.ACCOUNT
    log_level: int = logging.INFO
    log_file: Optional[str] = None


def _level(value) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


def load_config(config: dict | None = None) -> NkeysConfig:
    """
    Resolve settings from an explicit dict first, then the environment:

        NKEYS_DEFAULT_ROLE  (account)
        NKEYS_LOG_LEVEL     (INFO)
        NKEYS_LOG_FILE      (unset)
    """
    config = config or {}
    role = config.get("default_role") or os.getenv("NKEYS_DEFAULT_ROLE", "account")
    level = config.get("log_level") or os.getenv("NKEYS_LOG_LEVEL", "INFO")
    log_file = config.get("log_file") or os.getenv("NKEYS_LOG_FILE") or None

    return NkeysConfig(
        default_role=role if isinstance(role, Role) else role_from_name(role),
        log_level=_level(level),
        log_file=log_file,
    )
