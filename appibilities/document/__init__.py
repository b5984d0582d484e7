"""Document model and loader.

Usage:
    from appibilities.document import load_document

    document = load_document(contents_json)
"""

from appibilities.document.loader import load_document
from appibilities.document.models import (
    Artboard,
    Document,
    Group,
    Layer,
    Page,
    Rect,
    SymbolInstance,
    SymbolMaster,
    Text,
)

__all__ = [
    "load_document",
    "Artboard",
    "Document",
    "Group",
    "Layer",
    "Page",
    "Rect",
    "SymbolInstance",
    "SymbolMaster",
    "Text",
]
