"""Document model — typed, immutable layer tree of a design document.

Field aliases follow the design file's JSON (``_class``, ``do_objectID``,
``attributedString``...) so raw document contents validate directly, while
Python code reads snake_case attributes.

Unknown layer classes fall back to the generic ``Layer`` model, so every
layer in a document is representable even when no rule cares about its kind.
"""

from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Rect(_Node):
    """Layer geometry in its parent's coordinate space."""

    x: float = 0.0
    y: float = 0.0
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class FlowConnection(_Node):
    """Prototyping link. Its presence marks the layer as interactive."""

    destination_artboard_id: str = Field(alias="destinationArtboardID")
    animation_type: Optional[int] = Field(default=None, alias="animationType")


class FontAttributes(_Node):
    name: str
    size: float


class FontAttribute(_Node):
    attributes: FontAttributes


class EncodedAttributes(_Node):
    font: Optional[FontAttribute] = Field(default=None, alias="MSAttributedStringFontAttribute")


class TextStyle(_Node):
    encoded_attributes: EncodedAttributes = Field(alias="encodedAttributes")


class Style(_Node):
    text_style: Optional[TextStyle] = Field(default=None, alias="textStyle")


class AttributedString(_Node):
    string: str = ""


class Layer(_Node):
    """Any layer in the document tree."""

    class_: str = Field(alias="_class", min_length=1)
    object_id: str = Field(alias="do_objectID", min_length=1)
    name: str = ""
    frame: Rect
    is_visible: bool = Field(default=True, alias="isVisible")
    flow: Optional[FlowConnection] = None
    style: Optional[Style] = None

    @property
    def children(self) -> tuple["Layer", ...]:
        return ()

    @property
    def is_interactive(self) -> bool:
        return self.flow is not None


class Text(Layer):
    attributed_string: AttributedString = Field(
        default_factory=AttributedString, alias="attributedString"
    )

    @property
    def text(self) -> str:
        return self.attributed_string.string

    def _font(self) -> Optional[FontAttributes]:
        if self.style is None or self.style.text_style is None:
            return None
        font = self.style.text_style.encoded_attributes.font
        return font.attributes if font else None

    @property
    def font_name(self) -> Optional[str]:
        """PostScript font name, e.g. ``SFProText-Regular``."""
        font = self._font()
        return font.name if font else None

    @property
    def font_size(self) -> Optional[float]:
        font = self._font()
        return font.size if font else None


class SymbolInstance(Layer):
    symbol_id: str = Field(default="", alias="symbolID")


class Group(Layer):
    layers: list["AnyLayer"] = Field(default_factory=list)

    @property
    def children(self) -> tuple[Layer, ...]:
        return tuple(self.layers)


class ShapeGroup(Group):
    pass


class Artboard(Group):
    pass


class SymbolMaster(Group):
    symbol_id: str = Field(default="", alias="symbolID")


class Page(Group):
    pass


# _class values with a dedicated model; everything else validates as Layer
LAYER_MODELS: dict[str, type[Layer]] = {
    "artboard": Artboard,
    "group": Group,
    "shapeGroup": ShapeGroup,
    "symbolMaster": SymbolMaster,
    "symbolInstance": SymbolInstance,
    "text": Text,
}


def _layer_tag(value: Any) -> str:
    if isinstance(value, dict):
        layer_class = value.get("_class", value.get("class_"))
    else:
        layer_class = getattr(value, "class_", None)
    return layer_class if layer_class in LAYER_MODELS else "layer"


AnyLayer = Annotated[
    Union[
        Annotated[Artboard, Tag("artboard")],
        Annotated[Group, Tag("group")],
        Annotated[ShapeGroup, Tag("shapeGroup")],
        Annotated[SymbolMaster, Tag("symbolMaster")],
        Annotated[SymbolInstance, Tag("symbolInstance")],
        Annotated[Text, Tag("text")],
        Annotated[Layer, Tag("layer")],
    ],
    Discriminator(_layer_tag),
]

for _model in (Group, ShapeGroup, Artboard, SymbolMaster, Page):
    _model.model_rebuild()


class Document(_Node):
    """Root of a design document: an ordered list of pages."""

    object_id: str = Field(default="", alias="do_objectID")
    pages: list[Page] = Field(default_factory=list)
