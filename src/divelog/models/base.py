"""Base record class and divelog-specific Pydantic configuration.

All decoded values (header snapshot, summary fields, sample events) are
immutable Pydantic models deriving from BaseRecord.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseRecord(BaseModel):
    """Base class for all decoded divelog values.

    Instances are frozen: once the decoder has produced a value, nothing
    downstream can change it.

    Example:
        >>> class Reading(BaseRecord):
        ...     depth: float
        >>> Reading(depth=12.3).depth
        12.3
    """

    model_config = ConfigDict(
        # Decoded values never change after construction
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )
