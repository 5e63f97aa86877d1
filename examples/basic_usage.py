#!/usr/bin/env python3
"""Basic usage example for divelog.

This example demonstrates:
1. Building a raw ICON HD dive buffer
2. Reading the dive summary through the parser
3. Walking the sample stream
4. Collecting non-fatal diagnostics
"""

from __future__ import annotations

import struct

from divelog import FieldType, IconHDParser, ModelVariant, ParserConfig, SampleType

HEADER_SIZE = 0x5C


def build_iconhd_dive() -> bytes:
    """Build a nitrox dive with two gas mixes and a switch after 10 s."""
    samples = b"".join(
        struct.pack("<HH", depth, (gasmix << 12) | temperature) + bytes(4)
        for depth, temperature, gasmix in [
            (35, 241, 0),
            (82, 236, 0),
            (121, 229, 1),
            (60, 233, 1),
        ]
    )

    header = bytearray(HEADER_SIZE)
    struct.pack_into("<HH", header, 0, 2, 4)  # nitrox, 4 samples
    p = 4
    struct.pack_into("<H", header, p + 0x00, 121)  # max depth, 1/10 m
    struct.pack_into("<5H", header, p + 0x02, 10, 15, 21, 6, 125)  # 2025-07-21 10:15
    struct.pack_into("<H", header, p + 0x0C, 1 << 10)  # 5 s interval, salt water
    header[p + 0x10 : p + 0x1C] = bytes([32, 0, 0, 0, 50, 0, 0, 0, 0, 0x80, 0, 0])
    struct.pack_into("<hh", header, p + 0x42, 229, 241)  # min/max temperature

    length = 4 + len(samples) + HEADER_SIZE
    return struct.pack("<I", length) + samples + bytes(header)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("divelog Basic Usage Example")
    print("=" * 60)
    print()

    warnings: list[str] = []
    parser = IconHDParser(ModelVariant.ICONHD, ParserConfig(on_warning=warnings.append))

    print("1. Loading a raw dive buffer...")
    data = build_iconhd_dive()
    parser.set_data(data)
    print(f"   {len(data)} bytes")
    print()

    print("2. Reading the dive summary...")
    print(f"   Date/time: {parser.get_datetime()}")
    print(f"   Dive time: {parser.get_field(FieldType.DIVETIME)} s")
    print(f"   Max depth: {parser.get_field(FieldType.MAXDEPTH):.1f} m")
    print(f"   Dive mode: {parser.get_field(FieldType.DIVEMODE).value}")
    ngasmixes = parser.get_field(FieldType.GASMIX_COUNT)
    for i in range(int(ngasmixes)):
        mix = parser.get_field(FieldType.GASMIX, i)
        print(f"   Gas mix {i}: {mix.oxygen:.0%} O2")
    print()

    print("3. Walking the sample stream...")
    for sample_type, sample in parser.iter_samples():
        if sample_type is SampleType.TIME:
            print(f"   t={sample.time:>3} s", end="")
        elif sample_type is SampleType.DEPTH:
            print(f"  {sample.depth:5.1f} m", end="")
        elif sample_type is SampleType.TEMPERATURE:
            print(f"  {sample.temperature:4.1f} C")
        elif sample_type is SampleType.GASMIX:
            print(f"   -> switch to gas mix {sample.gasmix}")
    print()

    print("4. Diagnostics...")
    print(f"   {len(warnings)} warning(s)")
    print()

    print("=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
