"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import struct
from collections.abc import Sequence

import pytest

from divelog.framing.records import RecordType
from divelog.utils.crc import crc16
from divelog.variants import ModelVariant, layout_of

FREEDIVE = 3


class DiveFactory:
    """Builds raw dive buffers for the decoder tests.

    Header field offsets passed in ``fields`` are relative to the header
    pointer, exactly as the decoder addresses them.
    """

    # Standard path ---------------------------------------------------------

    @staticmethod
    def sample(depth: int = 0, temperature: int = 0, gasmix: int = 0, size: int = 8) -> bytes:
        """Standard sample record (depth and temperature in 1/10 units)."""
        word = ((gasmix & 0xF) << 12) | (temperature & 0x0FFF)
        return struct.pack("<HH", depth, word) + bytes(size - 4)

    @staticmethod
    def pressure(value: int) -> bytes:
        """Standard tank pressure record (1/100 bar)."""
        return struct.pack("<H", value) + bytes(6)

    @staticmethod
    def freedive(maxdepth: int, divetime: int, surftime: int) -> bytes:
        return struct.pack("<HHH", maxdepth, divetime, surftime)

    @staticmethod
    def apnea_surface(divetime: int, surftime: int, maxdepth: int = 0) -> bytes:
        return struct.pack("<HHH", maxdepth, divetime, surftime) + bytes(8)

    @staticmethod
    def standard(
        variant: ModelVariant,
        *,
        mode: int = 0,
        nsamples: int = 0,
        samples: bytes = b"",
        settings: int = 0,
        fields: dict[int, bytes] | None = None,
        trailing: bytes = b"",
    ) -> bytes:
        """Build a standard-path dive: length, samples, header (+ ignored trailing bytes)."""
        layout = layout_of(variant)
        headersize, _ = layout.sizes(mode == FREEDIVE)
        header = bytearray(headersize)
        base = 0 if layout.smart_family else 4

        if variant is ModelVariant.SMARTAPNEA:
            settings_offset = 0x1C
        elif mode == FREEDIVE:
            settings_offset = 0x08
        else:
            settings_offset = 0x0C
        struct.pack_into("<H", header, base + settings_offset, settings)

        for offset, value in (fields or {}).items():
            header[base + offset : base + offset + len(value)] = value

        if layout.smart_family:
            trailer = headersize - layout.trailer_size
            struct.pack_into("<HH", header, trailer, nsamples, mode)
        else:
            struct.pack_into("<HH", header, 0, mode, nsamples)

        length = 4 + headersize + len(samples)
        return struct.pack("<I", length) + samples + bytes(header) + trailing

    # GENIUS path -----------------------------------------------------------

    @staticmethod
    def framed(record: RecordType, payload: bytes | None = None) -> bytes:
        """Frame a payload as a tagged, CRC-16 protected record."""
        if payload is None:
            payload = bytes(record.size - 10)
        assert len(payload) == record.size - 10
        tag = struct.pack(">I", record.tag)
        return tag + payload + struct.pack("<H", crc16(payload)) + tag

    @classmethod
    def dprs(
        cls,
        depth: int = 0,
        temperature: int = 0,
        gasmix: int = 0,
        alarms: int = 0,
        decostop: bool = False,
        decodepth: int = 0,
        decotime: int = 0,
    ) -> bytes:
        payload = bytearray(RecordType.DPRS.size - 10)
        struct.pack_into("<H", payload, 0, depth)
        struct.pack_into("<H", payload, 4, temperature)
        struct.pack_into("<H", payload, 0x0A, decotime)
        struct.pack_into("<I", payload, 0x0C, alarms)
        misc = (gasmix << 6) | (int(decostop) << 18) | (decodepth << 19)
        struct.pack_into("<I", payload, 0x14, misc)
        return cls.framed(RecordType.DPRS, bytes(payload))

    @classmethod
    def airs(cls, pressure: int) -> bytes:
        return cls.framed(RecordType.AIRS, struct.pack("<H", pressure) + bytes(4))

    @staticmethod
    def gas_params(o2: int, he: int = 0, n2: int | None = None, state: int = 1) -> int:
        if n2 is None:
            n2 = 100 - o2 - he
        return o2 | (n2 << 7) | (he << 14) | (state << 21)

    @classmethod
    def genius(
        cls,
        *,
        records: Sequence[bytes] = (),
        nsamples: int = 0,
        settings: int = 0,
        slots: Sequence[tuple[int, int, int, int, int]] = (),
        fields: dict[int, bytes] | None = None,
        profile: tuple[int, int, int] = (0, 2, 0),
        dend: bytes | None = None,
        trailing: bytes = b"",
    ) -> bytes:
        """Build a GENIUS dive.

        ``slots`` holds (gas params, begin, end, volume, workpressure) per slot.
        """
        header = bytearray(0xB8)
        struct.pack_into("<HBB", header, 0, 1, 0, 0)
        struct.pack_into("<I", header, 0x0C, settings)
        struct.pack_into("<H", header, 0x20, nsamples)
        for i, slot in enumerate(slots):
            struct.pack_into("<IHHHH", header, 0x54 + i * 20, *slot)
        for offset, value in (fields or {}).items():
            header[offset : offset + len(value)] = value

        body = (
            struct.pack("<HBB", *profile)
            + cls.framed(RecordType.DSTR)
            + cls.framed(RecordType.TISS)
            + b"".join(records)
            + (dend if dend is not None else cls.framed(RecordType.DEND))
        )
        return bytes(header) + body + trailing


@pytest.fixture(scope="session")
def dives() -> DiveFactory:
    """Raw dive buffer builders."""
    return DiveFactory()


@pytest.fixture
def smart_air_dive(dives: DiveFactory) -> bytes:
    """Minimal SMART dive in air mode, no samples, 5 s interval, fresh water."""
    return dives.standard(ModelVariant.SMART, mode=0, settings=(1 << 10) | 0x10)
