"""
Retained-mode host rendering surface.

A `Surface` is addressed by a selector string and holds the scene roots
attached to it. Scenes are trees of lightweight `Element` primitives
(``svg``, ``g``, ``circle``, ``line``, ``text``...) that the reconciler
creates, updates and removes by key, and that can be exported as SVG.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .config import GraphStyle

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)

_MISSING = object()


class SurfaceNotFoundError(LookupError):
    """Raised when no surface is registered under a selector."""


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.4f}".rstrip("0").rstrip(".")
    return str(value)


class Element:
    """
    A visual primitive in a scene tree.

    Attributes:
        tag: Primitive kind (``circle``, ``line``, ``text``, ``g``...)
        key: Identity used by the reconciler, ``None`` for anonymous parts
        attrs: Presentation attributes in insertion order
        classes: Class names in insertion order
        text: Text content for ``text``/``title`` primitives
    """

    def __init__(self, tag: str, key: Optional[str] = None, classes: Tuple[str, ...] = (), **attrs: Any):
        self.tag = tag
        self.key = key
        self.attrs: Dict[str, Any] = {}
        self.classes: List[str] = []
        self.text: Optional[str] = None
        self.children: List[Element] = []
        self.parent: Optional[Element] = None
        for c in classes:
            self.classed(c, True)
        for name, value in attrs.items():
            self.attr(name.replace("_", "-"), value)

    # ----- tree -----
    def append(self, tag: str, key: Optional[str] = None, classes: Tuple[str, ...] = (), **attrs: Any) -> "Element":
        child = Element(tag, key=key, classes=classes, **attrs)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> None:
        """Detach this element from its parent."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def keyed_children(self) -> Dict[str, "Element"]:
        return {c.key: c for c in self.children if c.key is not None}

    def iter(self) -> Iterator["Element"]:
        yield self
        for c in self.children:
            yield from c.iter()

    def select(self, cls: str) -> Optional["Element"]:
        """First descendant (excluding self) carrying class `cls`."""
        for el in self.iter():
            if el is not self and cls in el.classes:
                return el
        return None

    def select_all(self, cls: str) -> List["Element"]:
        return [el for el in self.iter() if el is not self and cls in el.classes]

    def find_tag(self, tag: str) -> Optional["Element"]:
        for c in self.children:
            if c.tag == tag:
                return c
        return None

    # ----- attributes -----
    def attr(self, name: str, value: Any = _MISSING) -> Any:
        """Get an attribute, or set it when `value` is given (returns self)."""
        if value is _MISSING:
            return self.attrs.get(name)
        self.attrs[name] = value
        return self

    def classed(self, name: str, on: bool = True) -> "Element":
        if on and name not in self.classes:
            self.classes.append(name)
        elif not on and name in self.classes:
            self.classes.remove(name)
        return self

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def set_text(self, text: Optional[str]) -> "Element":
        self.text = text
        return self

    # ----- export -----
    def snapshot(self) -> Tuple:
        """Hashable structural snapshot, used to compare rendered output."""
        return (
            self.tag,
            self.key,
            tuple(self.classes),
            tuple((k, _fmt(v)) for k, v in self.attrs.items()),
            self.text,
            tuple(c.snapshot() for c in self.children),
        )

    def to_etree(self) -> ET.Element:
        node = ET.Element(f"{{{SVG_NS}}}{self.tag}")
        if self.classes:
            node.set("class", " ".join(self.classes))
        if self.key is not None:
            node.set("data-key", self.key)
        for k, v in self.attrs.items():
            if v is not None:
                node.set(k, _fmt(v))
        if self.text:
            node.text = self.text
        for c in self.children:
            node.append(c.to_etree())
        return node

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, key={self.key!r}, classes={self.classes!r})"


class Scene:
    """
    The SVG-like root a `Graph` renders into.

    Layout: ``svg > defs > marker#arrowhead`` followed by
    ``svg > g > g.links`` and ``svg > g > g.nodes``.
    """

    def __init__(self, width: float = 800, height: float = 600, style: Optional[GraphStyle] = None):
        style = style or GraphStyle()
        self.width = width
        self.height = height
        self.root = Element(
            "svg",
            width=width,
            height=height,
            viewBox=f"{_fmt(-width / 2)} {_fmt(-height / 2)} {_fmt(width)} {_fmt(height)}",
        )
        marker = self.root.append("defs").append(
            "marker",
            id="arrowhead",
            viewBox="-0 -5 10 10",
            refX=style.arrow_length,
            refY=0,
            orient="auto",
            markerWidth=6,
            markerHeight=6,
        )
        marker.append("path", d="M 0,-5 L 10 ,0 L 0,5", fill="#999")
        self.g = self.root.append("g")
        self.links = self.g.append("g", classes=("links",))
        self.nodes = self.g.append("g", classes=("nodes",))

    def to_svg(self) -> str:
        return ET.tostring(self.root.to_etree(), encoding="unicode")


class Surface:
    """A render target addressed by a selector; tracks attached scene roots."""

    def __init__(self, selector: str):
        self.selector = selector
        self._attached: List[Tuple[Element, Any]] = []

    @property
    def children(self) -> List[Element]:
        return [root for root, _ in self._attached]

    @property
    def owners(self) -> List[Any]:
        return [owner for _, owner in self._attached]

    def clear(self) -> None:
        self._attached.clear()

    def attach(self, root: Element, owner: Any = None) -> None:
        if not self.is_attached(root):
            self._attached.append((root, owner))

    def detach(self, root: Element) -> bool:
        for i, (r, _) in enumerate(self._attached):
            if r is root:
                del self._attached[i]
                return True
        return False

    def is_attached(self, root: Element) -> bool:
        return any(r is root for r, _ in self._attached)

    def to_svg(self) -> str:
        """SVG markup of every attached root, concatenated."""
        return "".join(ET.tostring(r.to_etree(), encoding="unicode") for r in self.children)

    def __repr__(self) -> str:
        return f"Surface({self.selector!r}, attached={len(self._attached)})"


_SURFACES: Dict[str, Surface] = {}


def register_surface(selector: str) -> Surface:
    """Create (or return the existing) surface for `selector`."""
    surface = _SURFACES.get(selector)
    if surface is None:
        surface = Surface(selector)
        _SURFACES[selector] = surface
    return surface


def get_surface(selector: str) -> Surface:
    try:
        return _SURFACES[selector]
    except KeyError:
        raise SurfaceNotFoundError(f"Element {selector} not found") from None


def unregister_surface(selector: str) -> None:
    _SURFACES.pop(selector, None)
