"""Small parsing and formatting helpers shared by rules."""

from typing import NamedTuple


class Size(NamedTuple):
    width: float
    height: float


def parse_size(value: str) -> Size:
    """Parse ``"375x812"`` into a Size.

    Raises:
        ValueError: the value is not two numbers separated by ``x``.
    """
    parts = value.split("x")
    if len(parts) != 2:
        raise ValueError(f"Invalid size '{value}'")
    try:
        return Size(float(parts[0]), float(parts[1]))
    except ValueError:
        raise ValueError(f"Invalid size '{value}'") from None


def format_number(value: float) -> str:
    """Render 375.0 as ``375`` and 37.5 as ``37.5``."""
    return str(int(value)) if float(value).is_integer() else str(value)


def font_family(font_name: str) -> str:
    """Family part of a PostScript name: ``SFProText-Bold`` → ``SFProText``."""
    return font_name.split("-")[0]
