"""Appibilities: accessibility and style rules for design documents."""

__version__ = "1.0.0"
