"""Record framing utilities for divelog.

This module validates the tagged, CRC-protected records of the GENIUS format.
"""

from __future__ import annotations

from .records import RecordType, is_valid_record, require_record

__all__ = [
    "RecordType",
    "is_valid_record",
    "require_record",
]
