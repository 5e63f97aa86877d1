"""Main CLI entry point for divelog."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..exceptions import DivelogError
from .dump import dump_file, parse_model


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the divelog CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="divelog: Dive Log Decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  divelog dive.bin --model iconhd            Print the dive summary
  divelog dive.bin --model 0x1C --samples    Include the sample stream
  divelog dive.bin --model genius --json     Print JSON
        """,
    )

    parser.add_argument("file", metavar="FILE", nargs="?", help="Raw dive buffer")
    parser.add_argument(
        "--model",
        metavar="MODEL",
        type=str,
        help="Model name (smart, smartapnea, iconhd, iconhdnet, genius, quadair, smartair) "
        "or model number",
    )
    parser.add_argument("--samples", action="store_true", help="Print the sample stream")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics")
    parser.add_argument(
        "--version",
        action="version",
        version=f"divelog {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # If no file specified, show help
    if not args.file:
        parser.print_help()
        return 0

    if not args.model:
        print("Error: --model is required", file=sys.stderr)
        return 1

    file_path = Path(args.file)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    try:
        model = parse_model(args.model)
        dump_file(file_path, model, samples=args.samples, as_json=args.json)
        return 0
    except DivelogError as e:
        print(f"Error decoding file: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
