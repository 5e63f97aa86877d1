"""Dive log codec for divelog.

This module provides header validation, summary field decoding and the
sample stream for the supported dive log formats.
"""

from __future__ import annotations

from .fields import get_datetime, get_field
from .header import cache_header
from .samples import Alarm, iter_samples

__all__ = [
    "cache_header",
    "get_datetime",
    "get_field",
    "iter_samples",
    "Alarm",
]
