"""Decoded value models for divelog."""

from __future__ import annotations

from .base import BaseRecord
from .fields import (
    DiveDateTime,
    DiveMode,
    FieldType,
    GasMixFraction,
    Salinity,
    TankInfo,
    TankVolumeType,
    WaterType,
)
from .header import DiveHeader, GasMix, Tank
from .samples import (
    DecoSample,
    DecoType,
    DepthSample,
    EventSample,
    EventType,
    GasMixSample,
    PressureSample,
    Sample,
    SampleType,
    TemperatureSample,
    TimeSample,
)

__all__ = [
    "BaseRecord",
    # Header
    "DiveHeader",
    "GasMix",
    "Tank",
    # Fields
    "FieldType",
    "DiveMode",
    "DiveDateTime",
    "GasMixFraction",
    "Salinity",
    "TankInfo",
    "TankVolumeType",
    "WaterType",
    # Samples
    "SampleType",
    "Sample",
    "TimeSample",
    "DepthSample",
    "TemperatureSample",
    "GasMixSample",
    "DecoSample",
    "DecoType",
    "EventSample",
    "EventType",
    "PressureSample",
]
