"""
CRC-16/XMODEM: polynomial 0x1021, initial value 0, no reflection, no final XOR.

binascii.crc_hqx implements exactly this variant when seeded with 0.
Check value: crc16(b"123456789") == 0x31C3.
"""

import binascii

from .constants import CRC16_INIT


def crc16(data: bytes) -> int:
    return binascii.crc_hqx(bytes(data), CRC16_INIT)


def crc16_valid(data: bytes, expected: int) -> bool:
    return crc16(data) == expected
