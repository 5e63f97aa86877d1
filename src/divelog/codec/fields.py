"""Summary field and date/time decoding.

Numeric header fields are little-endian 16-bit integers whose position
and scale depend on the header kind (GENIUS, SMARTAPNEA, freedive mode or
the default layout). They are described by FIELD_OFFSETS rather than by
per-model branches.
"""

from __future__ import annotations

import enum
from typing import Any, NamedTuple, Union

from ..exceptions import DataFormatError, InvalidArgumentError, UnsupportedError
from ..models.fields import (
    DiveDateTime,
    DiveMode,
    FieldType,
    GasMixFraction,
    Salinity,
    TankInfo,
    TankVolumeType,
    WaterType,
)
from ..models.header import (
    GENIUS_AIR,
    GENIUS_FREEDIVE,
    GENIUS_GAUGE,
    GENIUS_NITROX_MULTI,
    GENIUS_NITROX_SINGLE,
    GENIUS_TRIMIX,
    ICONHD_AIR,
    ICONHD_FREEDIVE,
    ICONHD_GAUGE,
    ICONHD_NITROX,
    DiveHeader,
)
from ..utils.array import int16_le, uint8, uint16_le, uint32_le
from ..variants import ModelVariant
from . import bitfield

# Physical constants (SI)
POUND = 0.45359237
FEET = 0.3048
INCH = 0.0254
GRAVITY = 9.80665
ATM = 101325.0
BAR = 100000.0
MSW = BAR / 10.0
PSI = (POUND * GRAVITY) / (INCH * INCH)
CUFT = FEET * FEET * FEET

# GENIUS salinity codes
WATER_SALT = 0
WATER_FRESH = 1
WATER_EN13319 = 2

GENIUS_METRIC_OFFSET = 0x34

FieldValue = Union[int, float, DiveMode, GasMixFraction, Salinity, TankInfo]


class HeaderKind(enum.Enum):
    """Header field arrangement, by model and dive mode."""

    GENIUS = "genius"
    APNEA = "apnea"
    FREEDIVE = "freedive"
    DEFAULT = "default"


class Scaled(NamedTuple):
    """A numeric header field: offset from the header pointer and divisor."""

    offset: int
    scale: float
    signed: bool = False


FIELD_OFFSETS: dict[tuple[HeaderKind, FieldType], Scaled] = {
    (HeaderKind.GENIUS, FieldType.MAXDEPTH): Scaled(0x22, 10.0),
    (HeaderKind.APNEA, FieldType.MAXDEPTH): Scaled(0x3A, 10.0),
    (HeaderKind.FREEDIVE, FieldType.MAXDEPTH): Scaled(0x1A, 10.0),
    (HeaderKind.DEFAULT, FieldType.MAXDEPTH): Scaled(0x00, 10.0),
    (HeaderKind.GENIUS, FieldType.ATMOSPHERIC): Scaled(0x3E, 1000.0),
    (HeaderKind.APNEA, FieldType.ATMOSPHERIC): Scaled(0x38, 1000.0),
    (HeaderKind.FREEDIVE, FieldType.ATMOSPHERIC): Scaled(0x18, 1000.0),
    (HeaderKind.DEFAULT, FieldType.ATMOSPHERIC): Scaled(0x22, 8000.0),
    (HeaderKind.GENIUS, FieldType.TEMPERATURE_MINIMUM): Scaled(0x28, 10.0, signed=True),
    (HeaderKind.APNEA, FieldType.TEMPERATURE_MINIMUM): Scaled(0x3E, 10.0, signed=True),
    (HeaderKind.FREEDIVE, FieldType.TEMPERATURE_MINIMUM): Scaled(0x1C, 10.0, signed=True),
    (HeaderKind.DEFAULT, FieldType.TEMPERATURE_MINIMUM): Scaled(0x42, 10.0, signed=True),
    (HeaderKind.GENIUS, FieldType.TEMPERATURE_MAXIMUM): Scaled(0x26, 10.0, signed=True),
    (HeaderKind.APNEA, FieldType.TEMPERATURE_MAXIMUM): Scaled(0x3C, 10.0, signed=True),
    (HeaderKind.FREEDIVE, FieldType.TEMPERATURE_MAXIMUM): Scaled(0x1E, 10.0, signed=True),
    (HeaderKind.DEFAULT, FieldType.TEMPERATURE_MAXIMUM): Scaled(0x44, 10.0, signed=True),
}

# Offset of the date/time fields from the header pointer
DATETIME_OFFSETS: dict[HeaderKind, int] = {
    HeaderKind.GENIUS: 0x08,
    HeaderKind.APNEA: 0x40,
    HeaderKind.FREEDIVE: 0x20,
    HeaderKind.DEFAULT: 0x02,
}

DIVEMODES: dict[bool, dict[int, DiveMode]] = {
    True: {
        GENIUS_AIR: DiveMode.OC,
        GENIUS_NITROX_SINGLE: DiveMode.OC,
        GENIUS_NITROX_MULTI: DiveMode.OC,
        GENIUS_TRIMIX: DiveMode.OC,
        GENIUS_GAUGE: DiveMode.GAUGE,
        GENIUS_FREEDIVE: DiveMode.FREEDIVE,
    },
    False: {
        ICONHD_AIR: DiveMode.OC,
        ICONHD_NITROX: DiveMode.OC,
        ICONHD_GAUGE: DiveMode.GAUGE,
        ICONHD_FREEDIVE: DiveMode.FREEDIVE,
    },
}


def header_kind(variant: ModelVariant, header: DiveHeader) -> HeaderKind:
    if variant is ModelVariant.GENIUS:
        return HeaderKind.GENIUS
    if variant is ModelVariant.SMARTAPNEA:
        return HeaderKind.APNEA
    if header.mode == ICONHD_FREEDIVE:
        return HeaderKind.FREEDIVE
    return HeaderKind.DEFAULT


def get_datetime(data: bytes | memoryview, variant: ModelVariant, header: DiveHeader) -> DiveDateTime:
    """Decode the dive start date and time.

    GENIUS packs the timestamp into one 32-bit word; the other models store
    hour, minute, day, month (0-based) and year (since 1900) as 16-bit words.
    """
    p = header.header_offset + DATETIME_OFFSETS[header_kind(variant, header)]
    if variant is ModelVariant.GENIUS:
        timestamp = uint32_le(data, p)
        return DiveDateTime(
            year=bitfield.TIME_YEAR.extract(timestamp),
            month=bitfield.TIME_MONTH.extract(timestamp),
            day=bitfield.TIME_DAY.extract(timestamp),
            hour=bitfield.TIME_HOUR.extract(timestamp),
            minute=bitfield.TIME_MINUTE.extract(timestamp),
        )
    return DiveDateTime(
        hour=uint16_le(data, p),
        minute=uint16_le(data, p + 2),
        day=uint16_le(data, p + 4),
        month=uint16_le(data, p + 6) + 1,
        year=uint16_le(data, p + 8) + 1900,
    )


def get_field(
    data: bytes | memoryview,
    variant: ModelVariant,
    header: DiveHeader,
    field: FieldType,
    index: int = 0,
) -> FieldValue:
    """Decode one summary field.

    Args:
        data: Dive buffer, limited to the effective extent
        variant: Model variant that produced the buffer
        header: Header derived from ``data``
        field: Requested field kind
        index: Gas mix or tank index, for GASMIX and TANK

    Raises:
        DataFormatError: Unrecognized dive mode or salinity code, or an
            imperial tank without working pressure
        UnsupportedError: If the field has no mapping for this model
        InvalidArgumentError: If ``index`` is outside the cached gas mixes/tanks
    """
    kind = header_kind(variant, header)
    p = header.header_offset

    scaled = FIELD_OFFSETS.get((kind, field))
    if scaled is not None:
        read = int16_le if scaled.signed else uint16_le
        return read(data, p + scaled.offset) / scaled.scale

    if field is FieldType.DIVETIME:
        return _divetime(data, kind, header)
    if field is FieldType.GASMIX_COUNT:
        return header.ngasmixes
    if field is FieldType.GASMIX:
        _check_index(index, header.ngasmixes, "gas mix")
        mix = header.gasmixes[index]
        oxygen = mix.oxygen / 100.0
        helium = mix.helium / 100.0
        return GasMixFraction(oxygen=oxygen, helium=helium, nitrogen=1.0 - oxygen - helium)
    if field is FieldType.TANK_COUNT:
        return header.ntanks
    if field is FieldType.TANK:
        _check_index(index, header.ntanks, "tank")
        return _tank(data, variant, header, index)
    if field is FieldType.SALINITY:
        return _salinity(variant, header)
    if field is FieldType.DIVEMODE:
        modes = DIVEMODES[variant is ModelVariant.GENIUS]
        if header.mode not in modes:
            raise DataFormatError(f"Unknown dive mode {header.mode}")
        return modes[header.mode]

    raise UnsupportedError(f"Field {field.value} is not supported by {variant.name}")


def _check_index(index: int, count: int, what: str) -> None:
    if not 0 <= index < count:
        raise InvalidArgumentError(f"Invalid {what} index {index} ({count} available)")


def _divetime(data: bytes | memoryview, kind: HeaderKind, header: DiveHeader) -> int:
    if kind is HeaderKind.APNEA:
        return uint16_le(data, header.header_offset + 0x24)
    if kind is HeaderKind.FREEDIVE:
        # Sum of the dive time of every freedive record.
        offset = 4
        divetime = 0
        for _ in range(header.nsamples):
            divetime += uint16_le(data, offset + 2)
            offset += header.samplesize
        return divetime
    return header.nsamples * header.interval


def _tank(data: bytes | memoryview, variant: ModelVariant, header: DiveHeader, index: int) -> TankInfo:
    tank = header.tanks[index]
    if variant is ModelVariant.GENIUS:
        metric = bool(uint8(data, header.header_offset + GENIUS_METRIC_OFFSET))
    else:
        metric = bool(bitfield.SETTINGS_METRIC.extract(header.settings))

    info: dict[str, Any] = {}
    if metric:
        info.update(
            type=TankVolumeType.METRIC,
            volume=float(tank.volume),
            workpressure=float(tank.workpressure),
        )
    else:
        if tank.workpressure == 0:
            raise DataFormatError(f"Tank {index} has no working pressure")
        info.update(
            type=TankVolumeType.IMPERIAL,
            volume=tank.volume * CUFT * 1000.0 / (tank.workpressure * PSI / ATM),
            workpressure=tank.workpressure * PSI / BAR,
        )

    return TankInfo(
        beginpressure=tank.beginpressure / 100.0,
        endpressure=tank.endpressure / 100.0,
        gasmix=index if index < header.ngasmixes else None,
        **info,
    )


def _salinity(variant: ModelVariant, header: DiveHeader) -> Salinity:
    if variant is ModelVariant.GENIUS:
        code = bitfield.GENIUS_SALINITY.extract(header.settings)
        if code == WATER_FRESH:
            return Salinity(type=WaterType.FRESH, density=0.0)
        if code == WATER_SALT:
            return Salinity(type=WaterType.SALT, density=0.0)
        if code == WATER_EN13319:
            return Salinity(type=WaterType.SALT, density=MSW / GRAVITY)
        raise DataFormatError(f"Unknown salinity code {code}")

    if variant is ModelVariant.SMARTAPNEA:
        salinity = bitfield.SETTINGS_SALINITY_APNEA.extract(header.settings)
        water = WaterType.FRESH if salinity == 0 else WaterType.SALT
        return Salinity(type=water, density=1000.0 + salinity)

    if bitfield.SETTINGS_FRESH_WATER.extract(header.settings):
        return Salinity(type=WaterType.FRESH, density=0.0)
    return Salinity(type=WaterType.SALT, density=0.0)
