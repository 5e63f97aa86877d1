"""Exception hierarchy for divelog.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from DivelogError for easy catching of any divelog-specific error.
"""

from __future__ import annotations


class DivelogError(Exception):
    """Base exception for all divelog errors."""

    pass


class DataFormatError(DivelogError):
    """Raised when a dive buffer is malformed.

    Examples:
        - Truncated buffer or declared length beyond the buffer
        - Calculated and stored size are not equal
        - Bad record tag or CRC-16 checksum mismatch
        - Unrecognized dive mode or salinity code
        - Gas mix index outside the cached gas mixes
        - Zero working pressure for an imperial tank
    """

    pass


class UnsupportedError(DivelogError):
    """Raised when a summary field has no mapping for this model."""

    pass


class InvalidArgumentError(DivelogError, ValueError):
    """Raised on API misuse.

    Examples:
        - Unknown device model number
        - Missing model variant at construction
        - Gas mix or tank index outside the cached count
    """

    pass
