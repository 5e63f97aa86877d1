"""Unit tests for gas mix and tank extraction."""

from __future__ import annotations

import struct

import pytest
from hypothesis import given
from hypothesis import strategies as st

from divelog.codec.gasmix import genius_slots, standard_gasmixes, standard_tanks
from divelog.config import ParserConfig
from divelog.exceptions import DataFormatError
from divelog.models.header import GasMix, Tank
from divelog.variants import ModelVariant, layout_of

ICONHD = layout_of(ModelVariant.ICONHD)
QUADAIR = layout_of(ModelVariant.QUADAIR)
GENIUS = layout_of(ModelVariant.GENIUS)

NITROX = 2


def _gas_slots(*slots: tuple[int, bool]) -> bytes:
    """Header bytes up to the end of the gas mix slots: (O2, disabled) per slot."""
    header = bytearray(0x1C)
    for i, (oxygen, disabled) in enumerate(slots):
        header[0x10 + i * 4] = oxygen
        header[0x10 + i * 4 + 1] = 0x80 if disabled else 0x00
    return bytes(header)


class TestStandardGasMixes:
    def test_air(self) -> None:
        assert standard_gasmixes(bytes(0x20), 0, 0, ICONHD) == (GasMix(oxygen=21, helium=0),)

    def test_gauge_and_freedive(self) -> None:
        assert standard_gasmixes(bytes(0x20), 0, 1, ICONHD) == ()
        assert standard_gasmixes(bytes(0x20), 0, 3, ICONHD) == ()

    def test_nitrox_stops_at_first_disabled(self) -> None:
        data = _gas_slots((32, False), (50, True), (80, False))
        assert standard_gasmixes(data, 0, NITROX, ICONHD) == (GasMix(oxygen=32),)

    def test_nitrox_all_active(self) -> None:
        data = _gas_slots((21, False), (32, False), (100, False))
        mixes = standard_gasmixes(data, 0, NITROX, ICONHD)
        assert [m.oxygen for m in mixes] == [21, 32, 100]

    def test_header_offset(self) -> None:
        data = bytes(7) + _gas_slots((36, False), (0, True))
        assert standard_gasmixes(data, 7, NITROX, ICONHD) == (GasMix(oxygen=36),)

    @given(disabled=st.lists(st.booleans(), min_size=3, max_size=3))
    def test_active_prefix(self, disabled: list[bool]) -> None:
        """Test no slot after the first disabled one is ever reported."""
        data = _gas_slots(*[(20 + i, d) for i, d in enumerate(disabled)])
        mixes = standard_gasmixes(data, 0, NITROX, ICONHD)

        expected = disabled.index(True) if True in disabled else 3
        assert len(mixes) == expected
        assert [m.oxygen for m in mixes] == [20 + i for i in range(expected)]


class TestStandardTanks:
    def _tank_block(self, *tanks: tuple[int, int, int, int]) -> bytes:
        header = bytearray(0x84)
        for i, (volume, work, begin, end) in enumerate(tanks):
            struct.pack_into("<HH", header, 0x5C + i * 4, begin, end)
            struct.pack_into("<HH", header, 0x5C + 0x0C + i * 8, volume, work)
        return bytes(header)

    def test_not_air_integrated(self) -> None:
        assert standard_tanks(bytes(0x100), 0, ICONHD) == ()

    def test_stops_at_empty(self) -> None:
        data = self._tank_block((12, 232, 20000, 5000), (0, 0, 0, 0), (10, 200, 18000, 0))
        assert standard_tanks(data, 0, QUADAIR) == (
            Tank(volume=12, workpressure=232, beginpressure=20000, endpressure=5000),
        )

    def test_full_scale_end_pressure_is_inactive(self) -> None:
        data = self._tank_block((12, 232, 0, 36000))
        assert standard_tanks(data, 0, QUADAIR) == ()

    def test_end_pressure_only_is_active(self) -> None:
        data = self._tank_block((12, 232, 0, 5000))
        assert len(standard_tanks(data, 0, QUADAIR)) == 1

    def test_three_tanks(self) -> None:
        data = self._tank_block(
            (12, 232, 20000, 5000), (10, 200, 18000, 6000), (7, 200, 19000, 15000)
        )
        tanks = standard_tanks(data, 0, QUADAIR)
        assert [t.volume for t in tanks] == [12, 10, 7]


class TestGeniusSlots:
    def _header(self, *slots: tuple[int, int, int, int, int]) -> bytes:
        header = bytearray(0xB8)
        for i, slot in enumerate(slots):
            struct.pack_into("<IHHHH", header, 0x54 + i * 20, *slot)
        return bytes(header)

    def test_gasmix_and_tank(self, dives) -> None:
        data = self._header(
            (dives.gas_params(18, he=45, state=2), 20000, 5000, 12, 232),
            (dives.gas_params(50, state=1), 0, 36000, 7, 200),
        )
        mixes, tanks = genius_slots(data, GENIUS)
        assert mixes == (GasMix(oxygen=18, helium=45), GasMix(oxygen=50, helium=0))
        assert tanks == (Tank(volume=12, workpressure=232, beginpressure=20000, endpressure=5000),)

    def test_hole_ignores_later_slots(self, dives) -> None:
        data = self._header(
            (dives.gas_params(21, state=1), 0, 0, 0, 0),
            (dives.gas_params(32, state=0), 0, 0, 0, 0),
            (dives.gas_params(50, state=2), 20000, 0, 0, 0),
        )
        mixes, tanks = genius_slots(data, GENIUS)
        assert mixes == (GasMix(oxygen=21),)
        # The tank in slot 2 does not extend the (empty) active prefix.
        assert tanks == ()

    def test_gas_sum_warning(self, dives, caplog: pytest.LogCaptureFixture) -> None:
        warnings: list[str] = []
        data = self._header((dives.gas_params(32, n2=60, state=1), 0, 0, 0, 0))
        mixes, _ = genius_slots(data, GENIUS, ParserConfig(on_warning=warnings.append))

        # The invalid mix is still reported unchanged.
        assert mixes == (GasMix(oxygen=32),)
        assert "Invalid gas mix (0% He, 32% O2, 60% N2)." in warnings
        assert "Invalid gas mix" in caplog.text

    def test_strict_gas_sum(self, dives) -> None:
        data = self._header((dives.gas_params(32, n2=60, state=1), 0, 0, 0, 0))
        with pytest.raises(DataFormatError, match="Invalid gas mix"):
            genius_slots(data, GENIUS, ParserConfig(strict_gas_sum=True))

    def test_strict_gas_sum_ignores_off_slots(self, dives) -> None:
        data = self._header((dives.gas_params(21, state=1), 0, 0, 0, 0))
        mixes, _ = genius_slots(data, GENIUS, ParserConfig(strict_gas_sum=True))
        assert len(mixes) == 1

    @given(
        states=st.lists(st.integers(min_value=0, max_value=3), min_size=5, max_size=5),
        pressures=st.lists(st.sampled_from([0, 5000, 20000]), min_size=5, max_size=5),
    )
    def test_active_prefix(self, states: list[int], pressures: list[int]) -> None:
        """Test an inactive slot hides every later slot, whatever its state."""
        slots = []
        for i, (state, begin) in enumerate(zip(states, pressures)):
            params = (20 + i) | ((80 - i) << 7) | (state << 21)
            slots.append((params, begin, 0, 10, 200))
        mixes, tanks = genius_slots(self._header(*slots), GENIUS)

        active_mixes = states.index(0) if 0 in states else 5
        active_tanks = pressures.index(0) if 0 in pressures else 5
        assert [m.oxygen for m in mixes] == [20 + i for i in range(active_mixes)]
        assert [t.beginpressure for t in tanks] == pressures[:active_tanks]
