"""Checksummed record framing of the GENIUS log format.

Every logical record of a GENIUS profile is framed as:
- [Type tag (4 bytes, big-endian)] [Payload] [CRC-16 (2 bytes, little-endian)] [Type tag]

The CRC-16/CCITT (initial value 0) covers the payload only, i.e. the
bytes between the leading tag and the checksum.
"""

from __future__ import annotations

import enum

from ..exceptions import DataFormatError
from ..utils.array import uint16_le, uint32_be
from ..utils.crc import crc16

TAG_SIZE = 4
CRC_SIZE = 2
MIN_RECORD_SIZE = 2 * TAG_SIZE + CRC_SIZE


class RecordType(enum.Enum):
    """Framed record kinds with their (type tag, fixed size)."""

    DSTR = (0x44535452, 58)  # Dive start
    TISS = (0x54495353, 138)  # Tissue loading
    DPRS = (0x44505253, 34)  # Depth sample
    AIRS = (0x41495253, 16)  # Air integration
    DEND = (0x44454E44, 162)  # Dive end

    @property
    def tag(self) -> int:
        return self.value[0]

    @property
    def size(self) -> int:
        return self.value[1]


def is_valid_record(data: bytes | memoryview, size: int, tag: int) -> bool:
    """Check that ``data`` starts with a well-formed record.

    Args:
        data: Buffer starting at the record
        size: Expected record size
        tag: Expected big-endian type tag

    Returns:
        True if both tags match and the CRC-16 verifies, False otherwise.
        A record that does not fit in ``data`` is not valid.

    Example:
        >>> is_valid_record(b"", 34, RecordType.DPRS.tag)
        False
    """
    if size < MIN_RECORD_SIZE or len(data) < size:
        return False

    head = uint32_be(data, 0)
    tail = uint32_be(data, size - TAG_SIZE)
    if head != tag or tail != tag:
        return False

    stored = uint16_le(data, size - TAG_SIZE - CRC_SIZE)
    computed = crc16(data[TAG_SIZE : size - TAG_SIZE - CRC_SIZE], init=0x0000)
    return stored == computed


def require_record(data: bytes | memoryview, offset: int, record: RecordType) -> int:
    """Validate the record at ``offset`` and return the offset past it.

    Raises:
        DataFormatError: If the record is truncated, mistagged or fails its CRC
    """
    if offset < 0 or not is_valid_record(data[offset:], record.size, record.tag):
        raise DataFormatError(f"Invalid {record.name} record at offset {offset}")
    return offset + record.size
