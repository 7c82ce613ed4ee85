from __future__ import annotations

from .structs import DisturbanceClass, Format

FORMAT_LABELS = {
    Format.G192: "g192",
    Format.BYTE: "byte",
    Format.COMPACT: "bit",
}

CLASS_LABELS = {
    DisturbanceClass.BER: "BER",
    DisturbanceClass.FER: "FER",
}

# Command-line spellings; BFER patterns are stored exactly like FER ones.
_CLASS_ALIASES = {
    "ber": DisturbanceClass.BER,
    "fer": DisturbanceClass.FER,
    "bfer": DisturbanceClass.FER,
}

_FORMAT_ALIASES = {
    "g192": Format.G192,
    "byte": Format.BYTE,
    "bit": Format.COMPACT,
    "compact": Format.COMPACT,
}


def format_label(fmt: object) -> str:
    """Return "g192", "byte" or "bit"; "" for anything else."""

    if isinstance(fmt, Format):
        return FORMAT_LABELS[fmt]
    return ""


def class_label(disturbance: object) -> str:
    """Return "BER" or "FER"; "" for anything else, including None."""

    if isinstance(disturbance, DisturbanceClass):
        return CLASS_LABELS[disturbance]
    return ""


def parse_format(label: str) -> Format:
    try:
        return _FORMAT_ALIASES[label.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown pattern format {label!r}") from None


def parse_class(label: str) -> DisturbanceClass:
    try:
        return _CLASS_ALIASES[label.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown disturbance type {label!r}") from None
