"""Dive dump CLI command."""

from __future__ import annotations

import enum
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from ..exceptions import InvalidArgumentError, UnsupportedError
from ..models.fields import FieldType
from ..parser import IconHDParser
from ..variants import ModelVariant

SUMMARY_FIELDS = (
    FieldType.DIVETIME,
    FieldType.MAXDEPTH,
    FieldType.ATMOSPHERIC,
    FieldType.TEMPERATURE_MINIMUM,
    FieldType.TEMPERATURE_MAXIMUM,
    FieldType.SALINITY,
    FieldType.DIVEMODE,
)


def parse_model(value: str) -> ModelVariant:
    """Resolve a model given by name (``genius``) or number (``0x1C``)."""
    try:
        return ModelVariant[value.upper()]
    except KeyError:
        pass
    try:
        number = int(value, 0)
    except ValueError as e:
        names = ", ".join(v.name.lower() for v in ModelVariant)
        raise InvalidArgumentError(f"Unknown model {value!r} (expected one of: {names})") from e
    return ModelVariant.from_model(number)


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, enum.Enum):
        return value.value
    return value


def dump_summary(parser: IconHDParser) -> dict[str, Any]:
    """Collect date/time, summary fields, gas mixes and tanks of a dive."""
    summary: dict[str, Any] = {"datetime": parser.get_datetime().model_dump(mode="json")}
    for field in SUMMARY_FIELDS:
        try:
            summary[field.value] = _plain(parser.get_field(field))
        except UnsupportedError:
            continue

    ngasmixes = parser.get_field(FieldType.GASMIX_COUNT)
    summary["gasmixes"] = [
        _plain(parser.get_field(FieldType.GASMIX, i)) for i in range(int(ngasmixes))
    ]
    ntanks = parser.get_field(FieldType.TANK_COUNT)
    summary["tanks"] = [_plain(parser.get_field(FieldType.TANK, i)) for i in range(int(ntanks))]
    return summary


def dump_file(
    file_path: Path, model: ModelVariant, samples: bool = False, as_json: bool = False
) -> None:
    """Decode a raw dive file and print its contents.

    Args:
        file_path: Path to the raw dive buffer
        model: Model variant that produced the dive
        samples: Also print the sample stream
        as_json: Print one JSON document instead of text
    """
    parser = IconHDParser(model)
    parser.set_data(file_path.read_bytes())

    summary = dump_summary(parser)
    events: list[dict[str, Any]] = []
    if samples:
        for sample_type, sample in parser.iter_samples():
            events.append({"sample": sample_type.value, **sample.model_dump(mode="json")})

    if as_json:
        document = dict(summary)
        if samples:
            document["samples"] = events
        print(json.dumps(document, indent=2))
        return

    print(f"{'=' * 19} {model.name}: {file_path.name} {'=' * 19}")
    for key, value in summary.items():
        if isinstance(value, list):
            print(f"{key}:")
            for i, item in enumerate(value):
                print(f"    {i}. {item}")
        else:
            print(f"{key}{'.' * max(1, 24 - len(key))}{value}")

    if samples:
        print()
        print(f"{'-' * 27} Samples {'-' * 27}")
        for event in events:
            kind = event.pop("sample")
            print(f"{kind:<12} {event}")
