"""Sample stream decoder.

iter_samples() walks the sample region of a validated dive buffer and
yields (SampleType, sample) pairs in strictly increasing time order. The
walk is a generator: it is lazy, and calling iter_samples() again starts
a fresh walk. Samples yielded before a DataFormatError are not retracted.

Record shapes, selected by model and dive mode:

- SMARTAPNEA: a surface record followed by ``divetime`` raw depth readings
- Freedive (standard path): one record per dive with max depth and times
- Standard: fixed-size depth/temperature/gas mix record per interval
- GENIUS: framed DPRS record with deco status and alarm bitmask

Air-integrated models store a tank pressure record after every 4th sample.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator

from ..config import DEFAULT_CONFIG, ParserConfig
from ..exceptions import DataFormatError
from ..framing.records import TAG_SIZE, RecordType, require_record
from ..models.header import ICONHD_FREEDIVE, DiveHeader
from ..models.samples import (
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
from ..utils.array import uint16_le, uint32_le
from ..variants import ModelVariant, layout_of
from . import bitfield
from .header import PROFILE_TAG_SIZE, check_object_version

logger = logging.getLogger(__name__)

SampleItem = tuple[SampleType, Sample]

# Tank pressure record size of the standard path
PRESSURE_RECORD_SIZE = 8
PRESSURE_INTERVAL = 4


class Alarm(enum.IntEnum):
    """Bit positions of the GENIUS alarm bitmask."""

    NONE = 0
    SLOW_DOWN = 1
    FAST_ASCENT = 2
    UNCONTROLLED_ASCENT = 3
    MOD_REACHED = 4
    CNS_DANGER = 5
    CNS_EXTREME = 6
    MISSED_DECO = 7
    DIVE_VIOLATION_DECO = 8
    LOW_BATTERY = 9
    VERY_LOW_BATTERY = 10
    PROBE_LOW_BATTERY = 11
    LOW_TANK_PRESSURE = 12
    TANK_RESERVE_REACHED = 13
    TANK_LOST_LINK = 14
    MAX_DIVE_DEPTH = 15
    RUN_AWAY_DECO = 16
    TANK_HALF_REACHED = 17
    NODECO_2MIN = 18
    NODECO_DECO = 19
    MULTIGAS_ATANKISLOW = 20
    DIVETIME_HALFTIME = 21
    DIVETIME_FULLTIME = 22
    GAS_SWITCHPOINT = 23
    GAS_IGNORED = 24
    GAS_CHANGED = 25
    GAS_NOTCHANGED = 26
    GAS_ADDED = 27


ALARM_EVENTS: dict[int, EventType] = {
    Alarm.FAST_ASCENT: EventType.ASCENT,
    Alarm.UNCONTROLLED_ASCENT: EventType.ASCENT,
    Alarm.MISSED_DECO: EventType.CEILING,
    Alarm.DIVE_VIOLATION_DECO: EventType.CEILING,
}


def alarm_events(alarms: int) -> list[EventType]:
    """Map an alarm bitmask to events, one per set bit with an event category.

    Example:
        >>> alarm_events((1 << 2) | (1 << 9) | (1 << 7))
        [<EventType.ASCENT: 'ascent'>, <EventType.CEILING: 'ceiling'>]
    """
    return [ALARM_EVENTS[i] for i in bitfield.set_bits(alarms) if i in ALARM_EVENTS]


def iter_samples(
    data: bytes | memoryview,
    variant: ModelVariant,
    header: DiveHeader,
    config: ParserConfig = DEFAULT_CONFIG,
) -> Iterator[SampleItem]:
    """Walk the sample region of a dive buffer.

    Args:
        data: Raw dive buffer, already validated by cache_header()
        variant: Model variant that produced the buffer
        header: Header derived from ``data``
        config: Parser configuration (diagnostics sink)

    Yields:
        (SampleType, sample) pairs in time order

    Raises:
        DataFormatError: On a bad record, an out-of-range gas mix index, a
            read past the buffer end, or a missing GENIUS dive end record
    """
    view = data[: header.length]
    genius = variant is ModelVariant.GENIUS
    air_integrated = layout_of(variant).air_integrated

    if header.samplerate > 1:
        # One second is the smallest time step, so extra readings are dropped.
        config.warn(logger, "Multiple samples per second are not supported!")

    offset = 4
    marker = 0
    if genius:
        check_object_version(view, header.headersize, expected_type=0, expected_version=(2, 0))
        offset = header.headersize + PROFILE_TAG_SIZE
        offset = require_record(view, offset, RecordType.DSTR)
        offset = require_record(view, offset, RecordType.TISS)
        marker = TAG_SIZE

    time = 0
    nsamples = 0
    gasmix_previous: int | None = None
    while nsamples < header.nsamples:
        if variant is ModelVariant.SMARTAPNEA:
            divetime = uint16_le(view, offset + 2)
            surftime = uint16_le(view, offset + 4)

            time += surftime
            yield SampleType.TIME, TimeSample(time=time)
            yield SampleType.DEPTH, DepthSample(depth=0.0)

            offset += header.samplesize
            nsamples += 1

            for _ in range(divetime):
                depth = uint16_le(view, offset)
                time += header.interval
                yield SampleType.TIME, TimeSample(time=time)
                yield SampleType.DEPTH, DepthSample(depth=depth / 10.0)
                offset += 2 * header.samplerate

        elif not genius and header.mode == ICONHD_FREEDIVE:
            maxdepth = uint16_le(view, offset)
            divetime = uint16_le(view, offset + 2)
            surftime = uint16_le(view, offset + 4)

            time += surftime
            yield SampleType.TIME, TimeSample(time=time)
            yield SampleType.DEPTH, DepthSample(depth=0.0)

            time += divetime
            yield SampleType.TIME, TimeSample(time=time)
            yield SampleType.DEPTH, DepthSample(depth=maxdepth / 10.0)

            offset += header.samplesize
            nsamples += 1

        else:
            if genius:
                require_record(view, offset, RecordType.DPRS)
                depth = uint16_le(view, offset + marker)
                temperature = uint16_le(view, offset + marker + 4)
                decotime = uint16_le(view, offset + marker + 0x0A)
                alarms = uint32_le(view, offset + marker + 0x0C)
                misc = uint32_le(view, offset + marker + 0x14)
                gasmix = bitfield.MISC_GASMIX.extract(misc)
            else:
                depth = uint16_le(view, offset)
                word = uint16_le(view, offset + 2)
                temperature = bitfield.SAMPLE_TEMPERATURE.extract(word)
                gasmix = bitfield.SAMPLE_GASMIX.extract(word)

            if header.ngasmixes > 0 and gasmix >= header.ngasmixes:
                raise DataFormatError(
                    f"Invalid gas mix index {gasmix} in sample {nsamples} "
                    f"({header.ngasmixes} gas mixes)"
                )

            time += header.interval
            yield SampleType.TIME, TimeSample(time=time)
            yield SampleType.DEPTH, DepthSample(depth=depth / 10.0)
            yield SampleType.TEMPERATURE, TemperatureSample(temperature=temperature / 10.0)

            if header.ngasmixes > 0 and gasmix != gasmix_previous:
                yield SampleType.GASMIX, GasMixSample(gasmix=gasmix)
                gasmix_previous = gasmix

            if genius:
                yield SampleType.DECO, _deco(misc, decotime)
                for event in alarm_events(alarms):
                    yield SampleType.EVENT, EventSample(type=event)

            offset += header.samplesize
            nsamples += 1

            if air_integrated and nsamples % PRESSURE_INTERVAL == 0:
                if genius:
                    require_record(view, offset, RecordType.AIRS)
                pressure = uint16_le(view, offset + marker)
                if gasmix < header.ntanks:
                    yield SampleType.PRESSURE, PressureSample(tank=gasmix, value=pressure / 100.0)
                elif pressure != 0:
                    config.warn(logger, "Invalid tank with non-zero pressure.")

                offset += RecordType.AIRS.size if genius else PRESSURE_RECORD_SIZE

    if genius:
        require_record(view, offset, RecordType.DEND)


def _deco(misc: int, decotime: int) -> DecoSample:
    """Decode deco stop / NDL status; ``decotime`` is in minutes."""
    if bitfield.MISC_DECOSTOP.extract(misc):
        return DecoSample(
            type=DecoType.DECOSTOP,
            depth=float(bitfield.MISC_DECODEPTH.extract(misc)),
            time=decotime * 60,
        )
    return DecoSample(type=DecoType.NDL, depth=0.0, time=decotime * 60)
