"""nkey error hierarchy."""


class NKeysError(Exception):
    """Base exception for all nkey errors."""


class UnknownRoleError(NKeysError):
    """Role name or prefix tag is not part of the role enumeration."""


class RandomSourceError(NKeysError):
    """The secure random source could not supply entropy."""


class FormatError(NKeysError):
    """Malformed base32 text or wrong decoded length."""


class InvalidPrefixError(FormatError):
    """Well-formed identity of the wrong kind for this use."""


class ChecksumError(NKeysError):
    """Embedded CRC-16 does not match the decoded bytes."""


class UnsupportedOperationError(NKeysError):
    """Operation is not available for this key's role or state."""


class PublicKeyOnlyError(UnsupportedOperationError):
    """Private material is required but only a public key is held."""


class WipedKeyError(UnsupportedOperationError):
    """Key pair material was already wiped."""


class SealedMessageError(NKeysError):
    """Sealed message is malformed or cannot be opened with these keys."""
