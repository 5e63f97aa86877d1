"""Cached dive header snapshot."""

from __future__ import annotations

from pydantic import Field

from .base import BaseRecord

# Dive modes of the standard path (type & 0x3)
ICONHD_AIR = 0
ICONHD_GAUGE = 1
ICONHD_NITROX = 2
ICONHD_FREEDIVE = 3

# Dive modes of the GENIUS path (settings & 0xF)
GENIUS_AIR = 0
GENIUS_NITROX_SINGLE = 1
GENIUS_NITROX_MULTI = 2
GENIUS_TRIMIX = 3
GENIUS_GAUGE = 4
GENIUS_FREEDIVE = 5

# Tank end pressure meaning "no transmitter"
PRESSURE_FULL_SCALE = 36000


class GasMix(BaseRecord):
    """Gas mix as stored in the header, in whole percent."""

    oxygen: int = Field(ge=0, le=0xFF)
    helium: int = Field(default=0, ge=0, le=0xFF)


class Tank(BaseRecord):
    """Tank as stored in the header, in raw device units.

    Pressures are in 1/100 bar; volume and working pressure are in the
    unit system selected by the header metric flag.
    """

    volume: int = Field(ge=0)
    workpressure: int = Field(ge=0)
    beginpressure: int = Field(ge=0)
    endpressure: int = Field(ge=0)

    def is_active(self) -> bool:
        """A tank is active unless both pressures read empty/full-scale."""
        return self.beginpressure != 0 or self.endpressure not in (0, PRESSURE_FULL_SCALE)


class DiveHeader(BaseRecord):
    """Immutable snapshot of everything derived from one header validation.

    Attributes:
        mode: Raw dive mode code
        length: Effective buffer extent (declared length, or the whole
            buffer for GENIUS)
        nsamples: Number of logical samples
        samplesize: Size of one sample record
        headersize: Size of the dive header
        header_offset: Absolute offset of the header fields
        settings: Raw settings bitfield
        interval: Seconds between samples
        samplerate: Samples per second (above 1 only for SMARTAPNEA)
        gasmixes: Active gas mixes, contiguous from index 0
        tanks: Active tanks, contiguous from index 0
    """

    mode: int
    length: int
    nsamples: int
    samplesize: int
    headersize: int
    header_offset: int
    settings: int
    interval: int
    samplerate: int
    gasmixes: tuple[GasMix, ...] = ()
    tanks: tuple[Tank, ...] = ()

    @property
    def ngasmixes(self) -> int:
        return len(self.gasmixes)

    @property
    def ntanks(self) -> int:
        return len(self.tanks)
