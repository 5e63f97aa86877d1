"""Configuration for dive log parsers.

This module provides the configuration dataclass accepted by IconHDParser.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .exceptions import InvalidArgumentError

WarningSink = Callable[[str], None]


@dataclass
class ParserConfig:
    """Configuration for a dive log parser.

    Attributes:
        on_warning: Optional callable receiving every non-fatal diagnostic
            (gas mix not summing to 100%, dropped sub-second apnea readings,
            pressure on an inactive tank). Diagnostics are always logged
            through the ``divelog`` logger as well.
        strict_gas_sum: Treat a GENIUS gas mix slot that is not switched
            off and whose O2, N2 and He do not add up to 100% as a
            DataFormatError instead of a warning (default False).

    Examples:
        ```python
        from divelog import IconHDParser, ModelVariant, ParserConfig

        warnings: list[str] = []
        config = ParserConfig(on_warning=warnings.append)
        parser = IconHDParser(ModelVariant.GENIUS, config)
        ```
    """

    on_warning: Optional[WarningSink] = None
    strict_gas_sum: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.on_warning is not None and not callable(self.on_warning):
            raise InvalidArgumentError(
                f"on_warning must be callable or None, got {type(self.on_warning).__name__}"
            )

    def warn(self, logger: logging.Logger, message: str) -> None:
        """Report a non-fatal diagnostic."""
        logger.warning(message)
        if self.on_warning is not None:
            self.on_warning(message)


DEFAULT_CONFIG = ParserConfig()
