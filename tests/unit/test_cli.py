"""Tests for CLI tool."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from divelog.cli.dump import parse_model
from divelog.cli.main import main
from divelog.exceptions import InvalidArgumentError
from divelog.variants import ModelVariant


@pytest.fixture
def dive_file(tmp_path: Path, dives) -> Path:
    """ICON HD air dive with two samples written to disk."""
    path = tmp_path / "dive.bin"
    path.write_bytes(
        dives.standard(
            ModelVariant.ICONHD,
            nsamples=2,
            samples=dives.sample(100, 250) + dives.sample(120, 245),
            settings=(1 << 10) | 0x10,
        )
    )
    return path


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = subprocess.run(
        [sys.executable, "-m", "divelog.cli.main", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "divelog: Dive Log Decoder" in result.stdout
    assert "--samples" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = subprocess.run(
        [sys.executable, "-m", "divelog.cli.main", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "divelog 0.1.0" in result.stdout


def test_cli_no_args(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI with no arguments (should show help)."""
    assert main([]) == 0
    assert "divelog: Dive Log Decoder" in capsys.readouterr().out


def test_cli_summary(dive_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the text summary of a dive file."""
    assert main([str(dive_file), "--model", "iconhd"]) == 0

    out = capsys.readouterr().out
    assert "ICONHD: dive.bin" in out
    assert "divetime" in out
    assert "gasmixes:" in out


def test_cli_json_with_samples(dive_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the JSON document includes the summary and the sample stream."""
    assert main([str(dive_file), "--model", "0x14", "--json", "--samples"]) == 0

    document = json.loads(capsys.readouterr().out)
    assert document["divetime"] == 10
    assert document["maxdepth"] == 0.0
    assert document["salinity"] == {"type": "fresh", "density": 0.0}
    assert document["divemode"] == "oc"
    assert document["gasmixes"][0]["oxygen"] == pytest.approx(0.21)
    assert document["tanks"] == []
    assert document["samples"][:3] == [
        {"sample": "time", "time": 5},
        {"sample": "depth", "depth": 10.0},
        {"sample": "temperature", "temperature": 25.0},
    ]


def test_cli_missing_model(dive_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI without --model."""
    assert main([str(dive_file)]) == 1
    assert "--model is required" in capsys.readouterr().err


def test_cli_missing_file(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI with missing file."""
    assert main(["nonexistent.bin", "--model", "genius"]) == 1
    assert "not found" in capsys.readouterr().err.lower()


def test_cli_unknown_model(dive_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI with an unknown model name."""
    assert main([str(dive_file), "--model", "puck"]) == 1
    assert "Unknown model 'puck'" in capsys.readouterr().err


def test_cli_malformed_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI with a truncated dive."""
    path = tmp_path / "short.bin"
    path.write_bytes(b"\x10\x00\x00")
    assert main([str(path), "--model", "smart"]) == 1
    assert "Error decoding file" in capsys.readouterr().err


def test_parse_model() -> None:
    """Test model names and numbers are both accepted."""
    assert parse_model("genius") is ModelVariant.GENIUS
    assert parse_model("SmartAir") is ModelVariant.SMARTAIR
    assert parse_model("0x23") is ModelVariant.QUADAIR
    assert parse_model("20") is ModelVariant.ICONHD
    with pytest.raises(InvalidArgumentError, match="Unsupported model"):
        parse_model("0x99")
