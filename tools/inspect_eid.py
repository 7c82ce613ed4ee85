#!/usr/bin/env python3
"""Report layout, disturbance type and error rate of EID error-pattern files."""

from __future__ import annotations

import argparse
import glob
import logging
from pathlib import Path
import sys
from typing import Iterable, List

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from eid.detect import detect_format  # noqa: E402
from eid.errors import ByteSwappedStreamError, EIDError  # noqa: E402
from eid.labels import class_label, format_label, parse_class  # noqa: E402
from eid.patterns import ErrorPattern  # noqa: E402
from eid.structs import HOST_BYTEORDER, DisturbanceClass, Format  # noqa: E402

EXIT_BYTE_SWAPPED = 8


def expand_paths(patterns: Iterable[str]) -> List[Path]:
    """Expand globs, keep literal paths that exist, drop repeats."""

    found: dict[Path, Path] = {}
    for pattern in patterns:
        for match in sorted(glob.glob(pattern, recursive=True)) or [pattern]:
            path = Path(match)
            if path.is_file():
                found.setdefault(path.resolve(), path)
    return list(found.values())


def inspect_file(
    path: Path, disturbance: DisturbanceClass | None, byteorder: str
) -> list[str]:
    with path.open("rb") as fh:
        detection = detect_format(fh, str(path), byteorder)
        if disturbance is None:
            disturbance = detection.disturbance
        # Hard bits of a compact file do not depend on the class used to read them.
        read_as = disturbance
        if read_as is None and detection.format is Format.COMPACT:
            read_as = DisturbanceClass.BER
        pattern = ErrorPattern.read(
            fh, fmt=detection.format, disturbance=read_as, byteorder=byteorder, name=str(path)
        )

    translation = pattern.translate()
    events = len(pattern)
    disturbed = int(translation.hard.sum())
    rate = disturbed / events if events else 0.0
    return [
        str(path),
        format_label(detection.format),
        class_label(disturbance) or "?",
        str(events),
        str(disturbed),
        f"{rate:.6f}",
        str(translation.unexpected),
    ]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Show format, disturbance type and error rate of EID pattern files."
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="File paths or glob patterns (quotes recommended for wildcards).",
    )
    parser.add_argument(
        "--type",
        dest="disturbance",
        type=parse_class,
        default=None,
        help="Disturbance type (ber, fer, bfer) when it cannot be detected.",
    )
    parser.add_argument(
        "--byteorder",
        choices=("little", "big"),
        default=HOST_BYTEORDER,
        help="Byte order of G.192 words (default: host order).",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    targets = expand_paths(args.paths)
    if not targets:
        parser.error("No files matched the provided paths/patterns.")

    status = 0
    rows = []
    for path in targets:
        try:
            rows.append(inspect_file(path, args.disturbance, args.byteorder))
        except ByteSwappedStreamError as err:
            print(str(err), file=sys.stderr)
            rows.append([str(path), "ERR", "byte-swapped", "", "", "", ""])
            status = EXIT_BYTE_SWAPPED
        except (EIDError, ValueError) as err:
            rows.append([str(path), "ERR", str(err), "", "", "", ""])
            status = status or 1

    header = ["File", "Format", "Type", "Events", "Disturbed", "Rate", "Unexpected"]
    widths = [
        max(len(row[i]) for row in ([header] + rows))
        for i in range(len(header))
    ]

    def fmt_row(row: list[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()

    print(fmt_row(header))
    print("  ".join("-" * w for w in widths))
    for row in rows:
        print(fmt_row(row))

    return status


if __name__ == "__main__":
    raise SystemExit(main())
