"""Object index — every document node grouped by kind, built in one traversal.

Rules query ``index[ObjectKind.TEXT]`` instead of walking the tree themselves,
so a run walks the document once no matter how many rules are active.
"""

from enum import Enum
from typing import Optional, Union

from appibilities.document.models import Document, Layer
from appibilities.errors import DocumentMalformed


class ObjectKind(str, Enum):
    """Closed set of collections exposed to rules."""

    PAGE = "page"
    ARTBOARD = "artboard"
    GROUP = "group"
    SHAPE_GROUP = "shape_group"
    SYMBOL_MASTER = "symbol_master"
    SYMBOL_INSTANCE = "symbol_instance"
    TEXT = "text"
    RECTANGLE = "rectangle"
    OVAL = "oval"
    SHAPE_PATH = "shape_path"
    BITMAP = "bitmap"
    SLICE = "slice"
    HOTSPOT = "hotspot"

    # Generic collections; a node also appears in its specific kind
    ANY_LAYER = "any_layer"
    ANY_GROUP = "any_group"


# _class value → specific kind
CLASS_KINDS: dict[str, ObjectKind] = {
    "page": ObjectKind.PAGE,
    "artboard": ObjectKind.ARTBOARD,
    "group": ObjectKind.GROUP,
    "shapeGroup": ObjectKind.SHAPE_GROUP,
    "symbolMaster": ObjectKind.SYMBOL_MASTER,
    "symbolInstance": ObjectKind.SYMBOL_INSTANCE,
    "text": ObjectKind.TEXT,
    "rectangle": ObjectKind.RECTANGLE,
    "oval": ObjectKind.OVAL,
    "shapePath": ObjectKind.SHAPE_PATH,
    "bitmap": ObjectKind.BITMAP,
    "slice": ObjectKind.SLICE,
    "MSImmutableHotspotLayer": ObjectKind.HOTSPOT,
}

GROUP_CLASSES = {"artboard", "group", "shapeGroup", "symbolMaster"}


class ObjectIndex:
    """Read-only mapping of kind → nodes in document (pre-order) order."""

    def __init__(self, collections: dict[ObjectKind, tuple[Layer, ...]], pointers: dict[str, str]):
        self._collections = collections
        self._pointers = pointers

    @classmethod
    def build(cls, document: Document) -> "ObjectIndex":
        """Walk the document once and bucket every node.

        Raises:
            DocumentMalformed: a node lacks its kind, id or frame, or two
                nodes share an id.
        """
        buckets: dict[ObjectKind, list[Layer]] = {kind: [] for kind in ObjectKind}
        pointers: dict[str, str] = {}

        pages = getattr(document, "pages", None)
        if pages is None:
            raise DocumentMalformed("Document has no 'pages'")

        stack = [(page, f"/pages/{i}") for i, page in enumerate(pages)]
        stack.reverse()

        while stack:
            node, pointer = stack.pop()
            layer_class = cls._check_node(node, pointer)

            if node.object_id in pointers:
                raise DocumentMalformed(
                    f"Duplicate object id '{node.object_id}' (first seen at {pointers[node.object_id]})",
                    pointer=pointer,
                )
            pointers[node.object_id] = pointer

            kind = CLASS_KINDS.get(layer_class)
            if kind is not None:
                buckets[kind].append(node)
            if layer_class != "page":
                buckets[ObjectKind.ANY_LAYER].append(node)
                if layer_class in GROUP_CLASSES:
                    buckets[ObjectKind.ANY_GROUP].append(node)

            children = node.children
            for i in range(len(children) - 1, -1, -1):
                stack.append((children[i], f"{pointer}/layers/{i}"))

        return cls({kind: tuple(nodes) for kind, nodes in buckets.items()}, pointers)

    @staticmethod
    def _check_node(node: Layer, pointer: str) -> str:
        layer_class = getattr(node, "class_", None)
        if not layer_class:
            raise DocumentMalformed("Node has no '_class'", pointer=pointer)
        if not getattr(node, "object_id", None):
            raise DocumentMalformed("Node has no 'do_objectID'", pointer=pointer)
        frame = getattr(node, "frame", None)
        if frame is None or frame.width < 0 or frame.height < 0:
            raise DocumentMalformed("Node has no valid 'frame'", pointer=pointer)
        return layer_class

    def __getitem__(self, kind: Union[ObjectKind, str]) -> tuple[Layer, ...]:
        try:
            kind = ObjectKind(kind)
        except ValueError:
            return ()
        return self._collections.get(kind, ())

    def pointer_of(self, node: Layer) -> Optional[str]:
        """JSON pointer of ``node`` in the document, if it was indexed."""
        return self._pointers.get(node.object_id)

    def __len__(self) -> int:
        """Total number of indexed nodes, pages included."""
        return len(self._pointers)

    def counts(self) -> dict[str, int]:
        return {kind.value: len(nodes) for kind, nodes in self._collections.items() if nodes}
