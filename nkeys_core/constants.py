# nkeys_core/constants.py
"""
Fixed wire parameters for nkey identities.

Every value in this module is compatibility-critical: two parties exchanging
encoded keys must agree on all of them.
"""

# --------- Prefix bytes ----------
# The top five bits of the tag byte select the leading base32 character.
PREFIX_BYTE_ACCOUNT = 0          # 'A'
PREFIX_BYTE_CLUSTER = 2 << 3     # 'C'
PREFIX_BYTE_MODULE = 12 << 3     # 'M'
PREFIX_BYTE_SERVER = 13 << 3     # 'N'
PREFIX_BYTE_OPERATOR = 14 << 3   # 'O'
PREFIX_BYTE_PRIVATE = 15 << 3    # 'P'
PREFIX_BYTE_SEED = 18 << 3       # 'S'
PREFIX_BYTE_USER = 20 << 3       # 'U'
PREFIX_BYTE_CURVE = 23 << 3      # 'X'
PREFIX_BYTE_UNKNOWN = 25 << 3    # 'Z', reserved, never issued

# --------- Sizes ----------
SEED_LEN = 32
PUBLIC_KEY_LEN = 32
ED25519_PRIVATE_KEY_LEN = 64     # seed || public
CURVE_PRIVATE_KEY_LEN = 32
CHECKSUM_LEN = 2

# --------- Checksum (CRC-16/XMODEM) ----------
CRC16_INIT = 0x0000

# --------- Curve sealing ----------
SEAL_VERSION = b"xkc1"
SEAL_NONCE_LEN = 12
SEAL_HKDF_INFO = b"nkeys-curve-v1"
