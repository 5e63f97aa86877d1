#!/usr/bin/env python3
"""GENIUS record framing example for divelog.

This example demonstrates:
1. Framing a sample record with tags and a CRC-16
2. Checking records with is_valid_record()
3. Error detection when a record is corrupted in storage
"""

from __future__ import annotations

import struct

from divelog import RecordType, crc16, is_valid_record


def frame(record: RecordType, payload: bytes) -> bytes:
    """Frame a payload as ``tag | payload | crc16 | tag``."""
    tag = struct.pack(">I", record.tag)
    return tag + payload + struct.pack("<H", crc16(payload)) + tag


def main() -> None:
    """Run the framing example."""
    print("=" * 60)
    print("divelog GENIUS Record Framing Example")
    print("=" * 60)
    print()

    print("1. Framing a DPRS sample record...")
    payload = bytearray(RecordType.DPRS.size - 10)
    struct.pack_into("<HxxH", payload, 0, 215, 243)  # 21.5 m, 24.3 C
    record = frame(RecordType.DPRS, bytes(payload))
    print(f"   Record size: {len(record)} bytes (expected {RecordType.DPRS.size})")
    print(f"   CRC-16: 0x{crc16(bytes(payload)):04X}")
    print()

    print("2. Checking the record...")
    valid = is_valid_record(record, RecordType.DPRS.size, RecordType.DPRS.tag)
    print(f"   DPRS record valid: {valid}")
    as_airs = is_valid_record(record, RecordType.AIRS.size, RecordType.AIRS.tag)
    print(f"   Accepted as AIRS: {as_airs}")
    print()

    print("3. Corrupting one payload byte...")
    corrupted = bytearray(record)
    corrupted[6] ^= 0x01
    valid = is_valid_record(bytes(corrupted), RecordType.DPRS.size, RecordType.DPRS.tag)
    print(f"   Corrupted record valid: {valid}")
    print()

    print("=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
