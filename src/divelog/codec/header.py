"""Dive header validation and caching.

cache_header() validates a raw dive buffer once and derives every
header-level value into an immutable DiveHeader. Two layouts exist:

- Standard path (all models but GENIUS): a little-endian declared length
  at offset 0, samples after it and the header stored at the end of the
  declared length. The declared length must match the size recomputed
  from the header exactly.
- GENIUS path: a versioned object header at offset 0 followed by framed,
  checksummed records. The buffer only needs to be large enough for the
  records announced by the header.
"""

from __future__ import annotations

from ..config import DEFAULT_CONFIG, ParserConfig
from ..exceptions import DataFormatError
from ..framing.records import RecordType
from ..models.header import ICONHD_FREEDIVE, DiveHeader
from ..utils.array import uint8, uint16_le, uint32_le
from ..variants import ModelVariant, layout_of
from . import bitfield
from .gasmix import genius_slots, standard_gasmixes, standard_tanks

INTERVALS = (1, 5, 10, 20)

GENIUS_INTERVAL = 5
# Profile object type and version, between the header and the DSTR record
PROFILE_TAG_SIZE = 4


def cache_header(
    data: bytes | memoryview, variant: ModelVariant, config: ParserConfig = DEFAULT_CONFIG
) -> DiveHeader:
    """Validate a dive buffer and derive its header.

    Args:
        data: Raw dive buffer
        variant: Model variant that produced the buffer
        config: Parser configuration (diagnostics sink)

    Returns:
        Immutable header snapshot

    Raises:
        DataFormatError: If the buffer is truncated, sizes are inconsistent
            or the object type/version is not supported
    """
    if len(data) < 4:
        raise DataFormatError(f"Buffer overflow detected: buffer too small ({len(data)} bytes)")

    if variant is ModelVariant.GENIUS:
        return _cache_genius(data, variant, config)
    return _cache_standard(data, variant)


def _cache_standard(data: bytes | memoryview, variant: ModelVariant) -> DiveHeader:
    layout = layout_of(variant)
    size = len(data)

    length = uint32_le(data, 0)
    if length < 4 + layout.trailer_size:
        raise DataFormatError(f"Buffer overflow detected: buffer too small (declared length {length})")
    if length > size:
        raise DataFormatError(
            f"Buffer overflow detected: declared length {length}, buffer is {size} bytes"
        )

    # Dive type and number of samples; the SMART family stores the count first.
    trailer = length - layout.trailer_size
    if layout.smart_family:
        nsamples = uint16_le(data, trailer)
        dive_type = uint16_le(data, trailer + 2)
    else:
        dive_type = uint16_le(data, trailer)
        nsamples = uint16_le(data, trailer + 2)

    mode = bitfield.TYPE_MODE.extract(dive_type)
    headersize, samplesize = layout.sizes(mode == ICONHD_FREEDIVE)

    if length < 4 + headersize:
        raise DataFormatError(
            f"Buffer overflow detected: declared length {length} "
            f"shorter than header ({headersize} bytes)"
        )

    # Header fields; models outside the SMART family prefix them with the type/count marker.
    p = length - headersize
    if not layout.smart_family:
        p += 4

    if variant is ModelVariant.SMARTAPNEA:
        settings = uint16_le(data, p + 0x1C)
    elif mode == ICONHD_FREEDIVE:
        settings = uint16_le(data, p + 0x08)
    else:
        settings = uint16_le(data, p + 0x0C)

    if variant is ModelVariant.SMARTAPNEA:
        interval = 1
        samplerate = 1 << bitfield.SETTINGS_SAMPLERATE.extract(settings)
    else:
        interval = INTERVALS[bitfield.SETTINGS_INTERVAL.extract(settings)]
        samplerate = 1

    nbytes = 4 + headersize + nsamples * samplesize
    if layout.air_integrated:
        nbytes += (nsamples // 4) * 8
    elif variant is ModelVariant.SMARTAPNEA:
        divetime = uint32_le(data, p + 0x24)
        nbytes += divetime * samplerate * 2
    if length != nbytes:
        raise DataFormatError(
            f"Calculated and stored size are not equal ({nbytes} != {length})"
        )

    # Everything past the declared length is ignored from here on.
    view = data[:length]

    return DiveHeader(
        mode=mode,
        length=length,
        nsamples=nsamples,
        samplesize=samplesize,
        headersize=headersize,
        header_offset=p,
        settings=settings,
        interval=interval,
        samplerate=samplerate,
        gasmixes=standard_gasmixes(view, p, mode, layout),
        tanks=standard_tanks(view, p, layout),
    )


def _cache_genius(data: bytes | memoryview, variant: ModelVariant, config: ParserConfig) -> DiveHeader:
    layout = layout_of(variant)
    size = len(data)

    check_object_version(data, 0, expected_type=1, expected_version=(0, 0))

    headersize = layout.header_size
    if headersize > size:
        raise DataFormatError(
            f"Buffer overflow detected: header is {headersize} bytes, buffer is {size} bytes"
        )

    nsamples = uint16_le(data, 0x20)
    settings = uint32_le(data, 0x0C)
    mode = bitfield.GENIUS_MODE.extract(settings)

    # Upper-bound check only; trailing data after the DEND record is allowed.
    nbytes = (
        headersize
        + PROFILE_TAG_SIZE
        + RecordType.DSTR.size
        + RecordType.TISS.size
        + nsamples * RecordType.DPRS.size
        + (nsamples // 4) * RecordType.AIRS.size
        + RecordType.DEND.size
    )
    if nbytes > size:
        raise DataFormatError(
            f"Buffer overflow detected: {nsamples} samples need {nbytes} bytes, "
            f"buffer is {size} bytes"
        )

    gasmixes, tanks = genius_slots(data, layout, config)

    return DiveHeader(
        mode=mode,
        length=size,
        nsamples=nsamples,
        samplesize=RecordType.DPRS.size,
        headersize=headersize,
        header_offset=0,
        settings=settings,
        interval=GENIUS_INTERVAL,
        samplerate=1,
        gasmixes=gasmixes,
        tanks=tanks,
    )


def check_object_version(
    data: bytes | memoryview, offset: int, expected_type: int, expected_version: tuple[int, int]
) -> None:
    """Check a GENIUS object type (u16) and major.minor version bytes.

    Raises:
        DataFormatError: If the type or version differs
    """
    object_type = uint16_le(data, offset)
    major = uint8(data, offset + 2)
    minor = uint8(data, offset + 3)
    if object_type != expected_type or (major, minor) != expected_version:
        raise DataFormatError(
            f"Unsupported object type ({object_type}) or version ({major}.{minor})."
        )
