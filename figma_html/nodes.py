"""
Design node model — typed view over the Figma REST node JSON.

Nodes are parsed once per generation pass. Optional data is grouped into
small capability structs (bounds, paints, typography, effects, padding) so
classifiers can check for exactly what they need.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

SHAPE_TYPES = ("RECTANGLE", "FRAME")


def _num(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _str(value) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass
class Bounds:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_dict(cls, data) -> Optional["Bounds"]:
        if not isinstance(data, dict):
            return None
        values = [_num(data.get(k)) for k in ("x", "y", "width", "height")]
        if any(v is None for v in values):
            return None
        return cls(*values)


@dataclass
class Color:
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: Optional[float] = None

    @classmethod
    def from_dict(cls, data) -> Optional["Color"]:
        if not isinstance(data, dict):
            return None
        return cls(
            r=_num(data.get("r")) or 0.0,
            g=_num(data.get("g")) or 0.0,
            b=_num(data.get("b")) or 0.0,
            a=_num(data.get("a")),
        )


@dataclass
class Paint:
    type: str
    color: Optional[Color] = None
    opacity: Optional[float] = None
    image_ref: Optional[str] = None
    visible: bool = True

    @classmethod
    def from_dict(cls, data) -> Optional["Paint"]:
        if not isinstance(data, dict) or not _str(data.get("type")):
            return None
        return cls(
            type=data["type"],
            color=Color.from_dict(data.get("color")),
            opacity=_num(data.get("opacity")),
            image_ref=_str(data.get("imageRef")),
            visible=data.get("visible", True) is not False,
        )


@dataclass
class TypeStyle:
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[float] = None
    italic: bool = False
    line_height_px: Optional[float] = None
    line_height_percent: Optional[float] = None
    line_height_unit: Optional[str] = None
    letter_spacing: Optional[float] = None
    text_align_horizontal: Optional[str] = None
    text_align_vertical: Optional[str] = None
    text_decoration: Optional[str] = None
    text_case: Optional[str] = None

    @classmethod
    def from_dict(cls, data) -> Optional["TypeStyle"]:
        if not isinstance(data, dict):
            return None
        return cls(
            font_family=_str(data.get("fontFamily")),
            font_size=_num(data.get("fontSize")),
            font_weight=_num(data.get("fontWeight")),
            italic=data.get("italic") is True,
            line_height_px=_num(data.get("lineHeightPx")),
            line_height_percent=_num(data.get("lineHeightPercentFontSize")),
            line_height_unit=_str(data.get("lineHeightUnit")),
            letter_spacing=_num(data.get("letterSpacing")),
            text_align_horizontal=_str(data.get("textAlignHorizontal")),
            text_align_vertical=_str(data.get("textAlignVertical")),
            text_decoration=_str(data.get("textDecoration")),
            text_case=_str(data.get("textCase")),
        )


@dataclass
class Effect:
    type: str
    color: Optional[Color] = None
    offset_x: float = 0.0
    offset_y: float = 0.0
    radius: float = 0.0
    spread: float = 0.0
    visible: bool = True

    @classmethod
    def from_dict(cls, data) -> Optional["Effect"]:
        if not isinstance(data, dict) or not _str(data.get("type")):
            return None
        offset = data.get("offset") if isinstance(data.get("offset"), dict) else {}
        return cls(
            type=data["type"],
            color=Color.from_dict(data.get("color")),
            offset_x=_num(offset.get("x")) or 0.0,
            offset_y=_num(offset.get("y")) or 0.0,
            radius=_num(data.get("radius")) or 0.0,
            spread=_num(data.get("spread")) or 0.0,
            visible=data.get("visible", True) is not False,
        )


@dataclass
class Padding:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> Optional["Padding"]:
        keys = ("paddingTop", "paddingRight", "paddingBottom", "paddingLeft")
        values = [_num(data.get(k)) for k in keys]
        if all(v is None for v in values):
            return None
        return cls(*[v or 0.0 for v in values])

    def is_zero(self) -> bool:
        return not any((self.top, self.right, self.bottom, self.left))


def _paints(items) -> List[Paint]:
    if not isinstance(items, list):
        return []
    return [p for p in (Paint.from_dict(i) for i in items) if p is not None]


@dataclass
class DesignNode:
    id: str
    type: str
    name: str = ""
    characters: Optional[str] = None
    bounds: Optional[Bounds] = None
    fills: List[Paint] = field(default_factory=list)
    strokes: List[Paint] = field(default_factory=list)
    stroke_weight: Optional[float] = None
    corner_radius: Optional[float] = None
    style: Optional[TypeStyle] = None
    effects: List[Effect] = field(default_factory=list)
    padding: Optional[Padding] = None
    children: List["DesignNode"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "DesignNode":
        """Parse one API node (recursively). Malformed fields are dropped."""
        node_type = _str(data.get("type")) or "FRAME"
        children = data.get("children")
        effects = data.get("effects") if isinstance(data.get("effects"), list) else []
        return cls(
            id=_str(data.get("id")) or "",
            type=node_type,
            name=_str(data.get("name")) or "",
            characters=_str(data.get("characters")) if node_type == "TEXT" else None,
            bounds=Bounds.from_dict(data.get("absoluteBoundingBox")),
            fills=_paints(data.get("fills")),
            strokes=_paints(data.get("strokes")),
            stroke_weight=_num(data.get("strokeWeight")),
            corner_radius=_num(data.get("cornerRadius")),
            style=TypeStyle.from_dict(data.get("style")),
            effects=[e for e in (Effect.from_dict(i) for i in effects) if e is not None],
            padding=Padding.from_dict(data),
            children=[cls.from_dict(c) for c in children if isinstance(c, dict)]
            if isinstance(children, list) else [],
        )

    @property
    def text(self) -> str:
        """Text content; empty for anything that is not a TEXT node."""
        if self.type != "TEXT":
            return ""
        return self.characters or ""

    @property
    def is_text(self) -> bool:
        return self.type == "TEXT"

    @property
    def first_fill(self) -> Optional[Paint]:
        return self.fills[0] if self.fills else None

    def has_image_fill(self) -> bool:
        return any(p.type == "IMAGE" for p in self.fills)

    def image_ref(self) -> Optional[str]:
        for paint in self.fills:
            if paint.type == "IMAGE" and paint.image_ref:
                return paint.image_ref
        return None

    def walk(self) -> Iterator["DesignNode"]:
        yield self
        for child in self.children:
            yield from child.walk()


def flatten_nodes(roots: Iterable[DesignNode]) -> List[DesignNode]:
    """Depth-first pre-order list of every node under ``roots``."""
    flat: List[DesignNode] = []
    for root in roots:
        flat.extend(root.walk())
    return flat


class NodeTree:
    """Index over one generation pass: flat order plus the parent of each node."""

    def __init__(self, roots: Iterable[DesignNode]):
        self.roots = list(roots)
        self.flat = flatten_nodes(self.roots)
        self._parent: Dict[int, DesignNode] = {}
        for node in self.flat:
            for child in node.children:
                self._parent[id(child)] = node

    def parent_of(self, node: DesignNode) -> Optional[DesignNode]:
        return self._parent.get(id(node))
