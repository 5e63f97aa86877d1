"""Summary field kinds and their decoded value types."""

from __future__ import annotations

import enum
from typing import Optional

from .base import BaseRecord


class FieldType(enum.Enum):
    """Summary fields a caller can request."""

    DIVETIME = "divetime"
    MAXDEPTH = "maxdepth"
    AVGDEPTH = "avgdepth"
    GASMIX_COUNT = "gasmix_count"
    GASMIX = "gasmix"
    SALINITY = "salinity"
    ATMOSPHERIC = "atmospheric"
    TEMPERATURE_SURFACE = "temperature_surface"
    TEMPERATURE_MINIMUM = "temperature_minimum"
    TEMPERATURE_MAXIMUM = "temperature_maximum"
    TANK_COUNT = "tank_count"
    TANK = "tank"
    DIVEMODE = "divemode"


class DiveMode(enum.Enum):
    """Dive mode reported for a dive."""

    OC = "oc"
    GAUGE = "gauge"
    FREEDIVE = "freedive"


class WaterType(enum.Enum):
    FRESH = "fresh"
    SALT = "salt"


class TankVolumeType(enum.Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class GasMixFraction(BaseRecord):
    """Gas mix as fractions of 1."""

    oxygen: float
    helium: float
    nitrogen: float


class Salinity(BaseRecord):
    """Water type and density (kg/m3, 0.0 when unknown)."""

    type: WaterType
    density: float = 0.0


class TankInfo(BaseRecord):
    """Tank summary in metric units.

    Volume is in litres and pressures in bar. For imperial tanks the
    volume is converted from the cubic feet rating at the rated working
    pressure. ``gasmix`` is the index of the gas mix breathed from the
    tank, or None if unknown.
    """

    type: TankVolumeType
    volume: float
    workpressure: float
    beginpressure: float
    endpressure: float
    gasmix: Optional[int] = None


class DiveDateTime(BaseRecord):
    """Dive start date and time, local to the device."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int = 0
    timezone: Optional[int] = None
