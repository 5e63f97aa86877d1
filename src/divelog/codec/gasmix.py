"""Gas mix and tank extraction from the dive header.

Active gas mixes and tanks are always stored first. Enumeration stops at
the first inactive slot (standard path) or ignores any slot that does not
extend the active prefix (GENIUS), so indices 0..count-1 are always
active with no gap.
"""

from __future__ import annotations

import logging

from ..config import DEFAULT_CONFIG, ParserConfig
from ..exceptions import DataFormatError
from ..models.header import ICONHD_AIR, ICONHD_FREEDIVE, ICONHD_GAUGE, GasMix, Tank
from ..utils.array import uint8, uint16_le, uint32_le
from ..variants import Layout
from . import bitfield

logger = logging.getLogger(__name__)

AIR = GasMix(oxygen=21, helium=0)

# GENIUS gas mix slot states
GASMIX_OFF = 0
GASMIX_READY = 1
GASMIX_INUSE = 2
GASMIX_IGNRD = 3

GENIUS_SLOT_OFFSET = 0x54
GENIUS_SLOT_SIZE = 20


def standard_gasmixes(
    data: bytes | memoryview, header_offset: int, mode: int, layout: Layout
) -> tuple[GasMix, ...]:
    """Extract the active gas mixes of a standard-path header.

    Gauge and freedive dives have no gas mixes; air dives have a single
    implicit 21% oxygen mix. Otherwise each 4-byte slot at +0x10 holds the
    oxygen percentage, and bit 7 of its second byte marks the slot disabled.
    """
    if mode in (ICONHD_GAUGE, ICONHD_FREEDIVE):
        return ()
    if mode == ICONHD_AIR:
        return (AIR,)

    gasmixes: list[GasMix] = []
    while len(gasmixes) < layout.max_gasmixes:
        slot = header_offset + 0x10 + len(gasmixes) * 4
        if uint8(data, slot + 1) & 0x80:
            break
        gasmixes.append(GasMix(oxygen=uint8(data, slot), helium=0))
    return tuple(gasmixes)


def standard_tanks(data: bytes | memoryview, header_offset: int, layout: Layout) -> tuple[Tank, ...]:
    """Extract the active tanks of an air-integrated standard-path header."""
    if not layout.air_integrated:
        return ()

    base = header_offset + layout.tank_offset
    tanks: list[Tank] = []
    while len(tanks) < layout.max_tanks:
        i = len(tanks)
        tank = Tank(
            volume=uint16_le(data, base + 0x0C + i * 8),
            workpressure=uint16_le(data, base + 0x0C + i * 8 + 2),
            beginpressure=uint16_le(data, base + i * 4),
            endpressure=uint16_le(data, base + i * 4 + 2),
        )
        if not tank.is_active():
            break
        tanks.append(tank)
    return tuple(tanks)


def genius_slots(
    data: bytes | memoryview, layout: Layout, config: ParserConfig = DEFAULT_CONFIG
) -> tuple[tuple[GasMix, ...], tuple[Tank, ...]]:
    """Extract gas mixes and tanks from the five GENIUS header slots.

    Each 20-byte slot holds a packed gas mix parameter word followed by the
    tank begin/end pressure, volume and working pressure. A slot counts
    only if every earlier slot was active as well.

    Raises:
        DataFormatError: If ``config.strict_gas_sum`` is set and a slot
            that is not switched off does not add up to 100%
    """
    gasmixes: list[GasMix] = []
    tanks: list[Tank] = []
    for i in range(layout.max_gasmixes):
        offset = GENIUS_SLOT_OFFSET + i * GENIUS_SLOT_SIZE
        params = uint32_le(data, offset)
        tank = Tank(
            beginpressure=uint16_le(data, offset + 4),
            endpressure=uint16_le(data, offset + 6),
            volume=uint16_le(data, offset + 8),
            workpressure=uint16_le(data, offset + 10),
        )

        o2 = bitfield.GASMIX_O2.extract(params)
        n2 = bitfield.GASMIX_N2.extract(params)
        he = bitfield.GASMIX_HE.extract(params)
        state = bitfield.GASMIX_STATE.extract(params)

        if o2 + n2 + he != 100:
            message = f"Invalid gas mix ({he}% He, {o2}% O2, {n2}% N2)."
            if config.strict_gas_sum and state != GASMIX_OFF:
                raise DataFormatError(message)
            config.warn(logger, message)

        if state != GASMIX_OFF and len(gasmixes) == i:
            gasmixes.append(GasMix(oxygen=o2, helium=he))

        if tank.is_active() and len(tanks) == i:
            tanks.append(tank)

    return tuple(gasmixes), tuple(tanks)
