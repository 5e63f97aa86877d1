"""Utility functions for divelog.

This module provides the CRC-16 checksum and bounds-checked integer reads.
"""

from __future__ import annotations

from .array import int16_le, uint8, uint16_le, uint32_be, uint32_le
from .crc import crc16, verify_crc16

__all__ = [
    # CRC functions
    "crc16",
    "verify_crc16",
    # Integer reads
    "uint8",
    "uint16_le",
    "int16_le",
    "uint32_le",
    "uint32_be",
]
