"""Named bit ranges of the packed words in the dive log.

Bit positions count from the least significant bit. Each packed word of
the format (settings, GENIUS gas mix parameters, sample misc word,
timestamp) is described by a table of BitField constants so every width
and offset is visible in one place.
"""

from __future__ import annotations

from typing import NamedTuple


class BitField(NamedTuple):
    """A contiguous bit range inside an integer word.

    Example:
        >>> BitField(shift=10, width=2).extract(0x0C00)
        3
    """

    shift: int
    width: int

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def extract(self, value: int) -> int:
        """Return the bits of this range, shifted down to bit 0."""
        return (value >> self.shift) & self.mask


def set_bits(value: int) -> list[int]:
    """Return the indices of all set bits, lowest first."""
    indices = []
    index = 0
    while value:
        if value & 1:
            indices.append(index)
        value >>= 1
        index += 1
    return indices


# Dive type word (standard path)
TYPE_MODE = BitField(shift=0, width=2)

# Settings word (standard path)
SETTINGS_SALINITY_APNEA = BitField(shift=0, width=6)
SETTINGS_FRESH_WATER = BitField(shift=4, width=1)
SETTINGS_METRIC = BitField(shift=8, width=1)
SETTINGS_SAMPLERATE = BitField(shift=9, width=2)
SETTINGS_INTERVAL = BitField(shift=10, width=2)

# Settings word (GENIUS)
GENIUS_MODE = BitField(shift=0, width=4)
GENIUS_SALINITY = BitField(shift=5, width=2)

# GENIUS gas mix parameter word
GASMIX_O2 = BitField(shift=0, width=7)
GASMIX_N2 = BitField(shift=7, width=7)
GASMIX_HE = BitField(shift=14, width=7)
GASMIX_STATE = BitField(shift=21, width=2)
GASMIX_CHANGED = BitField(shift=23, width=1)

# GENIUS sample misc word
MISC_GASMIX = BitField(shift=6, width=4)
MISC_DECOSTOP = BitField(shift=18, width=1)
MISC_DECODEPTH = BitField(shift=19, width=7)

# GENIUS packed timestamp
TIME_HOUR = BitField(shift=0, width=5)
TIME_MINUTE = BitField(shift=5, width=6)
TIME_DAY = BitField(shift=11, width=5)
TIME_MONTH = BitField(shift=16, width=4)
TIME_YEAR = BitField(shift=20, width=12)

# Standard sample record, temperature/gas mix word at +2
SAMPLE_TEMPERATURE = BitField(shift=0, width=12)
SAMPLE_GASMIX = BitField(shift=12, width=4)
