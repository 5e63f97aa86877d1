"""Dive log parser facade.

IconHDParser ties the decoder together: it owns the buffer for one decode
session, validates the header at most once per buffer and serves summary
fields, the dive date/time and the sample stream from that single header
snapshot.

States: "not cached" (no header yet) and "cached" (one immutable
DiveHeader). set_data() is the only transition back to "not cached".
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Callable, Optional, Union

from .codec.fields import FieldValue, get_datetime, get_field
from .codec.header import cache_header
from .codec.samples import SampleItem, iter_samples
from .config import ParserConfig
from .exceptions import InvalidArgumentError
from .models.fields import DiveDateTime, FieldType
from .models.header import DiveHeader
from .models.samples import Sample, SampleType
from .variants import Layout, ModelVariant, layout_of

logger = logging.getLogger(__name__)

SampleCallback = Callable[[SampleType, Sample], None]


class IconHDParser:
    """Parser for one dive of a supported model.

    Example:
        ```python
        from divelog import FieldType, IconHDParser, ModelVariant

        parser = IconHDParser(ModelVariant.ICONHD)
        parser.set_data(raw_dive)

        print(parser.get_datetime())
        print(parser.get_field(FieldType.MAXDEPTH))

        for sample_type, sample in parser.iter_samples():
            print(sample_type, sample)
        ```
    """

    def __init__(
        self,
        variant: Union[ModelVariant, int, None],
        config: Optional[ParserConfig] = None,
    ) -> None:
        """Initialize a parser for a model variant.

        Args:
            variant: Model variant, or its raw model number
            config: Parser configuration (default: ParserConfig())

        Raises:
            InvalidArgumentError: If the variant is missing or unknown
        """
        if variant is None:
            raise InvalidArgumentError("A model variant is required")
        if not isinstance(variant, ModelVariant):
            variant = ModelVariant.from_model(variant)

        self.variant: ModelVariant = variant
        self.layout: Layout = layout_of(variant)
        self.config = config if config is not None else ParserConfig()
        self._data: memoryview = memoryview(b"")
        self._header: Optional[DiveHeader] = None

    def set_data(self, data: Union[bytes, bytearray, memoryview]) -> None:
        """Replace the input buffer and drop the cached header.

        The buffer is referenced, not copied, and must stay unchanged for
        as long as the parser uses it.
        """
        self._data = memoryview(data).toreadonly()
        self._header = None

    @property
    def cached(self) -> bool:
        return self._header is not None

    def cache(self) -> DiveHeader:
        """Validate the buffer and return its header.

        The header is derived once per buffer; later calls return the same
        snapshot without validating again.

        Raises:
            DataFormatError: If the buffer is malformed
        """
        if self._header is None:
            self._header = cache_header(self._data, self.variant, self.config)
            logger.debug(
                "Cached %s header: %d samples, %d gas mixes, %d tanks",
                self.variant.name,
                self._header.nsamples,
                self._header.ngasmixes,
                self._header.ntanks,
            )
        return self._header

    def _view(self, header: DiveHeader) -> memoryview:
        return self._data[: header.length]

    def get_datetime(self) -> DiveDateTime:
        """Return the dive start date and time."""
        header = self.cache()
        return get_datetime(self._view(header), self.variant, header)

    def get_field(self, field: FieldType, index: int = 0) -> FieldValue:
        """Return one summary field.

        Args:
            field: Requested field kind
            index: Gas mix or tank index for GASMIX and TANK

        Raises:
            DataFormatError: If the buffer or the field value is malformed
            UnsupportedError: If the field is not available for this model
            InvalidArgumentError: If ``index`` is out of range
        """
        header = self.cache()
        return get_field(self._view(header), self.variant, header, field, index)

    def iter_samples(self) -> Iterator[SampleItem]:
        """Return a fresh generator over the (SampleType, sample) stream.

        The header is validated before the generator is returned, so header
        errors are raised here rather than on first iteration.
        """
        header = self.cache()
        return iter_samples(self._data, self.variant, header, self.config)

    def samples_foreach(self, callback: Optional[SampleCallback]) -> None:
        """Walk all samples, calling ``callback(sample_type, sample)`` for each.

        Samples delivered before a DataFormatError are not retracted.
        """
        for sample_type, sample in self.iter_samples():
            if callback is not None:
                callback(sample_type, sample)


def create_parser(
    model: Union[ModelVariant, int],
    data: Union[bytes, bytearray, memoryview, None] = None,
    config: Optional[ParserConfig] = None,
) -> IconHDParser:
    """Create a parser from a raw model number, optionally loading a buffer.

    Raises:
        InvalidArgumentError: If the model number is not supported
    """
    parser = IconHDParser(model, config)
    if data is not None:
        parser.set_data(data)
    return parser
