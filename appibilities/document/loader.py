"""Document loader — validates raw document contents into the typed model.

Accepts either a bare document (``{"pages": [...]}``) or the full contents
shape that wraps it (``{"document": {"pages": [...]}, "meta": ...}``), as a
dict or a JSON string.
"""

import json
from typing import Union

import structlog
from pydantic import ValidationError

from appibilities.document.models import LAYER_MODELS, Document
from appibilities.errors import DocumentMalformed

logger = structlog.get_logger()

_UNION_TAGS = set(LAYER_MODELS) | {"layer"}


def _pointer(loc: tuple) -> str:
    """Render a pydantic error location as a JSON pointer."""
    # tagged-union branches show up as extra path segments
    parts = [str(p) for p in loc if p not in _UNION_TAGS]
    return "/" + "/".join(parts)


def load_document(data: Union[dict, str, bytes]) -> Document:
    """Parse and validate document contents.

    Raises:
        DocumentMalformed: the input is not JSON, not an object, or any node
            lacks required fields (kind, id, frame geometry).
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise DocumentMalformed(f"Cannot parse document JSON: {e}") from e

    if not isinstance(data, dict):
        raise DocumentMalformed(f"Document must be a JSON object, got {type(data).__name__}")

    if "document" in data and "pages" not in data:
        data = data["document"]
        if not isinstance(data, dict):
            raise DocumentMalformed("'document' must be a JSON object", pointer="/document")

    try:
        document = Document.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        logger.warning("document_malformed", errors=e.error_count(), first_error=first["msg"])
        raise DocumentMalformed(
            f"{e.error_count()} invalid field(s); first: {first['msg']}",
            pointer=_pointer(first["loc"]),
        ) from e

    return document
