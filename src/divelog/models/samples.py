"""Sample event types produced by the sample stream."""

from __future__ import annotations

import enum
from typing import Union

from .base import BaseRecord


class SampleType(enum.Enum):
    """Kind of a sample event."""

    TIME = "time"
    DEPTH = "depth"
    TEMPERATURE = "temperature"
    GASMIX = "gasmix"
    DECO = "deco"
    EVENT = "event"
    PRESSURE = "pressure"


class DecoType(enum.Enum):
    NDL = "ndl"
    DECOSTOP = "decostop"


class EventType(enum.Enum):
    ASCENT = "ascent"
    CEILING = "ceiling"


class TimeSample(BaseRecord):
    """Elapsed dive time in seconds."""

    time: int


class DepthSample(BaseRecord):
    """Depth in metres."""

    depth: float


class TemperatureSample(BaseRecord):
    """Water temperature in degrees Celsius."""

    temperature: float


class GasMixSample(BaseRecord):
    """Switch to the gas mix with this index."""

    gasmix: int


class DecoSample(BaseRecord):
    """Decompression status: stop depth in metres and time in seconds."""

    type: DecoType
    depth: float
    time: int


class EventSample(BaseRecord):
    """Alarm raised by the device."""

    type: EventType
    time: int = 0
    flags: int = 0
    value: int = 0


class PressureSample(BaseRecord):
    """Tank pressure in bar."""

    tank: int
    value: float


Sample = Union[
    TimeSample,
    DepthSample,
    TemperatureSample,
    GasMixSample,
    DecoSample,
    EventSample,
    PressureSample,
]
