#!/usr/bin/env python3
"""Convert an EID error pattern between G.192, byte and compact (bit) layouts.

Usage:
    python tools/convert_eid.py ber.g192 ber.bit --to bit
    python tools/convert_eid.py fer.bit fer.byte --to byte --type fer
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from eid.errors import ByteSwappedStreamError, EIDError  # noqa: E402
from eid.labels import class_label, format_label, parse_class, parse_format  # noqa: E402
from eid.patterns import load_pattern  # noqa: E402
from eid.structs import HOST_BYTEORDER  # noqa: E402

EXIT_BYTE_SWAPPED = 8


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Convert EID error-pattern files.")
    parser.add_argument("input", type=Path, help="Error pattern to read")
    parser.add_argument("output", type=Path, help="Where to write the converted pattern")
    parser.add_argument(
        "--to", dest="to_format", type=parse_format, required=True,
        help="Output layout: g192, byte or bit",
    )
    parser.add_argument(
        "--from", dest="from_format", type=parse_format, default=None,
        help="Input layout (default: detect from the first word)",
    )
    parser.add_argument(
        "--type", dest="disturbance", type=parse_class, default=None,
        help="Disturbance type (ber, fer, bfer); required for compact input",
    )
    parser.add_argument(
        "-n", "--count", type=int, default=None,
        help="Number of events to convert (default: whole file)",
    )
    parser.add_argument(
        "--byteorder", choices=("little", "big"), default=HOST_BYTEORDER,
        help="Byte order of G.192 words on both sides (default: host order)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input.exists():
        parser.error(f"input not found: {args.input}")

    try:
        pattern = load_pattern(
            args.input,
            n=args.count,
            fmt=args.from_format,
            disturbance=args.disturbance,
            byteorder=args.byteorder,
        )
        written = pattern.save(args.output, args.to_format, args.byteorder)
    except ByteSwappedStreamError as err:
        print(str(err), file=sys.stderr)
        return EXIT_BYTE_SWAPPED
    except (EIDError, ValueError) as err:
        print(f"ERROR: {err}", file=sys.stderr)
        return 1

    print(
        f"{args.input} ({format_label(pattern.format)}/"
        f"{class_label(pattern.resolved_class()) or '?'}) -> "
        f"{args.output} ({format_label(args.to_format)}): {written} events"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
