"""divelog: Dive Log Decoder

A Python library for decoding the binary dive logs of the ICONHD family of
dive computers (SMART, SMART APNEA, ICON HD, ICON HD NET READY, GENIUS,
QUAD AIR and SMART AIR).

Key Features:
- One immutable header snapshot per dive, validated once
- Lazy, restartable sample stream (generator)
- CRC-16 verified record framing for the GENIUS format
- Pydantic models for every decoded value

Quick Start:
    >>> from divelog import FieldType, IconHDParser, ModelVariant
    >>>
    >>> parser = IconHDParser(ModelVariant.ICONHD)
    >>> parser.set_data(raw_dive)
    >>> parser.get_field(FieldType.MAXDEPTH)
    >>> for sample_type, sample in parser.iter_samples():
    ...     print(sample_type, sample)
"""

from __future__ import annotations

from .config import ParserConfig
from .exceptions import (
    DataFormatError,
    DivelogError,
    InvalidArgumentError,
    UnsupportedError,
)
from .framing import RecordType, is_valid_record
from .models import (
    DecoSample,
    DecoType,
    DepthSample,
    DiveDateTime,
    DiveHeader,
    DiveMode,
    EventSample,
    EventType,
    FieldType,
    GasMix,
    GasMixFraction,
    GasMixSample,
    PressureSample,
    Salinity,
    Sample,
    SampleType,
    Tank,
    TankInfo,
    TankVolumeType,
    TemperatureSample,
    TimeSample,
    WaterType,
)
from .parser import IconHDParser, create_parser
from .utils import crc16, verify_crc16
from .variants import Layout, ModelVariant, layout_of

__version__ = "0.1.0"

__all__ = [
    # Core API
    "IconHDParser",
    "create_parser",
    "ParserConfig",
    "ModelVariant",
    "Layout",
    "layout_of",
    # Exceptions
    "DivelogError",
    "DataFormatError",
    "UnsupportedError",
    "InvalidArgumentError",
    # Framing
    "RecordType",
    "is_valid_record",
    # CRC
    "crc16",
    "verify_crc16",
    # Models
    "DiveHeader",
    "GasMix",
    "Tank",
    "FieldType",
    "DiveMode",
    "DiveDateTime",
    "GasMixFraction",
    "Salinity",
    "TankInfo",
    "TankVolumeType",
    "WaterType",
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
    # Version
    "__version__",
]
