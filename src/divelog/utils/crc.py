"""CRC (Cyclic Redundancy Check) implementation.

The GENIUS log format protects each framed record with a CRC-16/CCITT
checksum computed with an initial value of zero (the XMODEM flavour) and
stored little-endian.
"""

from __future__ import annotations

import struct

CCITT_POLY = 0x1021


def crc16(data: bytes | memoryview, poly: int = CCITT_POLY, init: int = 0x0000) -> int:
    """Calculate CRC-16 checksum.

    Args:
        data: Data to checksum
        poly: CRC polynomial (default: 0x1021 for CRC-16-CCITT)
        init: Initial CRC value (default: 0x0000)

    Returns:
        16-bit CRC value

    Example:
        >>> hex(crc16(b"123456789"))
        '0x31c3'
    """
    crc = init

    for byte in data:
        crc ^= byte << 8

        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ poly
            else:
                crc <<= 1

        crc &= 0xFFFF

    return crc


def verify_crc16(
    data: bytes | memoryview,
    expected_crc: int | bytes,
    poly: int = CCITT_POLY,
    init: int = 0x0000,
) -> bool:
    """Verify CRC-16 checksum.

    Args:
        data: Data to verify
        expected_crc: Expected CRC value (int, or 2 little-endian bytes)
        poly: CRC polynomial
        init: Initial CRC value

    Returns:
        True if CRC matches, False otherwise

    Example:
        >>> verify_crc16(b"123456789", b"\\xc3\\x31")
        True
    """
    if isinstance(expected_crc, bytes):
        if len(expected_crc) != 2:
            raise ValueError(f"CRC-16 must be 2 bytes, got {len(expected_crc)}")
        expected_crc = struct.unpack("<H", expected_crc)[0]

    return crc16(data, poly, init) == expected_crc
