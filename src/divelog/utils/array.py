"""Bounds-checked integer reads from a byte buffer.

Every read takes an absolute offset and raises DataFormatError instead of
struct.error when the field would fall outside the buffer.
"""

from __future__ import annotations

import struct

from ..exceptions import DataFormatError

_U16_LE = struct.Struct("<H")
_S16_LE = struct.Struct("<h")
_U32_LE = struct.Struct("<I")
_U32_BE = struct.Struct(">I")


def _unpack(fmt: struct.Struct, data: bytes | memoryview, offset: int) -> int:
    if offset < 0 or offset + fmt.size > len(data):
        raise DataFormatError(
            f"Buffer overflow detected: {fmt.size} bytes at offset {offset}, "
            f"buffer is {len(data)} bytes"
        )
    try:
        return int(fmt.unpack_from(data, offset)[0])
    except struct.error as e:
        raise DataFormatError(f"Cannot read {fmt.size} bytes at offset {offset}: {e}") from e


def uint8(data: bytes | memoryview, offset: int) -> int:
    """Read one unsigned byte."""
    if offset < 0 or offset >= len(data):
        raise DataFormatError(
            f"Buffer overflow detected: byte at offset {offset}, buffer is {len(data)} bytes"
        )
    return int(data[offset])


def uint16_le(data: bytes | memoryview, offset: int) -> int:
    """Read a little-endian unsigned 16-bit integer."""
    return _unpack(_U16_LE, data, offset)


def int16_le(data: bytes | memoryview, offset: int) -> int:
    """Read a little-endian signed 16-bit integer."""
    return _unpack(_S16_LE, data, offset)


def uint32_le(data: bytes | memoryview, offset: int) -> int:
    """Read a little-endian unsigned 32-bit integer."""
    return _unpack(_U32_LE, data, offset)


def uint32_be(data: bytes | memoryview, offset: int) -> int:
    """Read a big-endian unsigned 32-bit integer."""
    return _unpack(_U32_BE, data, offset)
