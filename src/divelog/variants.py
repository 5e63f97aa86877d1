"""Model variants and their binary layout constants.

Every branch in the decoder keys off a ModelVariant and the Layout
resolved for it once at parser construction.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .exceptions import InvalidArgumentError


class ModelVariant(enum.IntEnum):
    """Supported dive computer models, valued by their model number."""

    SMART = 0x000010
    SMARTAPNEA = 0x010010
    ICONHD = 0x14
    ICONHDNET = 0x15
    GENIUS = 0x1C
    QUADAIR = 0x23
    SMARTAIR = 0x24

    @classmethod
    def from_model(cls, model: int) -> ModelVariant:
        """Resolve a raw device model number.

        Raises:
            InvalidArgumentError: If the number is not a supported model
        """
        try:
            return cls(model)
        except ValueError as e:
            raise InvalidArgumentError(f"Unsupported model number 0x{model:06X}") from e


@dataclass(frozen=True)
class Layout:
    """Layout constants of one model variant.

    Attributes:
        trailer_size: Bytes before the declared length end that hold the
            dive type and sample count (standard path only)
        header_size: Size of the dive header
        sample_size: Size of one sample record
        freedive_header_size: Header size in freedive mode
        freedive_sample_size: Sample size in freedive mode
        smart_family: Count precedes type and the header has no marker
        air_integrated: Tank pressure records follow every 4th sample
        max_gasmixes: Number of gas mix slots in the header
        max_tanks: Number of tank slots in the header
        tank_offset: Start of the tank block, relative to the header
    """

    trailer_size: int
    header_size: int
    sample_size: int
    freedive_header_size: int
    freedive_sample_size: int
    smart_family: bool = False
    air_integrated: bool = False
    max_gasmixes: int = 3
    max_tanks: int = 0
    tank_offset: int = 0

    def sizes(self, freedive: bool) -> tuple[int, int]:
        """Return (header_size, sample_size) for the dive mode."""
        if freedive:
            return self.freedive_header_size, self.freedive_sample_size
        return self.header_size, self.sample_size


_LAYOUTS: dict[ModelVariant, Layout] = {
    ModelVariant.SMART: Layout(
        trailer_size=4,
        header_size=0x5C,
        sample_size=8,
        freedive_header_size=0x2E,
        freedive_sample_size=6,
        smart_family=True,
    ),
    ModelVariant.SMARTAPNEA: Layout(
        trailer_size=6,
        header_size=0x50,
        sample_size=14,
        freedive_header_size=0x50,
        freedive_sample_size=14,
        smart_family=True,
    ),
    ModelVariant.ICONHD: Layout(
        trailer_size=0x5C,
        header_size=0x5C,
        sample_size=8,
        freedive_header_size=0x5C,
        freedive_sample_size=8,
    ),
    ModelVariant.ICONHDNET: Layout(
        trailer_size=0x80,
        header_size=0x80,
        sample_size=12,
        freedive_header_size=0x80,
        freedive_sample_size=12,
        air_integrated=True,
        max_tanks=3,
        tank_offset=0x58,
    ),
    ModelVariant.QUADAIR: Layout(
        trailer_size=0x84,
        header_size=0x84,
        sample_size=12,
        freedive_header_size=0x84,
        freedive_sample_size=12,
        air_integrated=True,
        max_tanks=3,
        tank_offset=0x5C,
    ),
    ModelVariant.SMARTAIR: Layout(
        trailer_size=4,
        header_size=0x84,
        sample_size=12,
        freedive_header_size=0x84,
        freedive_sample_size=12,
        smart_family=True,
        air_integrated=True,
        max_tanks=3,
        tank_offset=0x5C,
    ),
    ModelVariant.GENIUS: Layout(
        trailer_size=0,
        header_size=0xB8,
        sample_size=34,
        freedive_header_size=0xB8,
        freedive_sample_size=34,
        air_integrated=True,
        max_gasmixes=5,
        max_tanks=5,
    ),
}


def layout_of(variant: ModelVariant) -> Layout:
    """Return the layout constants for a model variant."""
    return _LAYOUTS[variant]
