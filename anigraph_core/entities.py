"""
Entity model for anigraph diagrams.

This module defines the passive data holders rendered by a `Graph`:
- Label: static text or a computed label evaluated against its owner
- Node: identified vertex with an optional layout position
- Edge: connection between two node references
- ById / ByEntity: tagged references accepted wherever an entity is looked up
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Union

from .enums import Direction

NodeId = str


class Label(ABC):
    """Display text attached to a node or edge."""

    @abstractmethod
    def resolve(self, owner: Any) -> str:
        """Return the text to display for `owner`."""


@dataclass(frozen=True)
class StaticLabel(Label):
    text: str = ""

    def resolve(self, owner: Any) -> str:
        return self.text


@dataclass(frozen=True)
class ComputedLabel(Label):
    """
    Label produced by calling `fn(owner)` at render time.

    The owner is passed in so the text can follow the entity's other mutable
    fields (position, name, ...). Clones share the same callable.
    """

    fn: Callable[[Any], Any]

    def resolve(self, owner: Any) -> str:
        value = self.fn(owner)
        return "" if value is None else str(value)


LabelLike = Union[Label, str, Callable[[Any], Any], None]


def make_label(value: LabelLike) -> Label:
    """Wrap a string, callable or existing label into a `Label`."""
    if isinstance(value, Label):
        return value
    if value is None:
        return StaticLabel("")
    if callable(value):
        return ComputedLabel(value)
    return StaticLabel(str(value))


class Node:
    """
    A vertex of the diagram.

    Attributes:
        id: Unique, immutable identifier within a graph
        name: Optional display name (shown inside the marker)
        x, y: Layout position; ``None`` until assigned by the layout engine
    """

    def __init__(
        self,
        id: NodeId,
        name: Optional[str] = None,
        label: LabelLike = "",
        x: Optional[float] = None,
        y: Optional[float] = None,
    ):
        self._id = str(id)
        self.name = name
        self._label = make_label(label)
        self.x = x
        self.y = y

    @property
    def id(self) -> NodeId:
        return self._id

    @property
    def label(self) -> str:
        """Resolved display label."""
        return self._label.resolve(self)

    @label.setter
    def label(self, value: LabelLike) -> None:
        self._label = make_label(value)

    @property
    def label_source(self) -> Label:
        """The stored label object, unresolved."""
        return self._label

    @property
    def is_placed(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        if not self.is_placed:
            return None
        return (float(self.x), float(self.y))

    def move_to(self, x: float, y: float) -> "Node":
        self.x = x
        self.y = y
        return self

    def clone(self) -> "Node":
        return Node(self._id, self.name, self._label, self.x, self.y)

    def __repr__(self) -> str:
        return f"Node(id={self._id!r}, name={self.name!r}, x={self.x!r}, y={self.y!r})"


Endpoint = Union[NodeId, Node]


def endpoint_id(endpoint: Endpoint) -> NodeId:
    """Return the node id an edge endpoint refers to."""
    if isinstance(endpoint, Node):
        return endpoint.id
    return str(endpoint)


class Edge:
    """
    A connection between two nodes.

    Endpoints may be node ids or `Node` objects; they are resolved against the
    owning graph at render time. The default id is ``"<source>-<target>"``.
    """

    def __init__(
        self,
        source: Endpoint,
        target: Endpoint,
        direction: Union[Direction, str] = Direction.DIRECTED,
        type: str = "default",
        label: LabelLike = "",
        id: Optional[str] = None,
    ):
        self.source = source
        self.target = target
        self.direction = Direction.parse(direction)
        self.type = type
        self._label = make_label(label)
        self.id = id if id is not None else f"{endpoint_id(source)}-{endpoint_id(target)}"

    @property
    def source_id(self) -> NodeId:
        return endpoint_id(self.source)

    @property
    def target_id(self) -> NodeId:
        return endpoint_id(self.target)

    @property
    def key(self) -> str:
        """Reconciliation key: ``source_id-target_id``."""
        return f"{self.source_id}-{self.target_id}"

    @property
    def directed(self) -> bool:
        return self.direction is Direction.DIRECTED

    @property
    def label(self) -> str:
        return self._label.resolve(self)

    @label.setter
    def label(self, value: LabelLike) -> None:
        self._label = make_label(value)

    @property
    def label_source(self) -> Label:
        return self._label

    def clone(self, source: Optional[Endpoint] = None, target: Optional[Endpoint] = None) -> "Edge":
        """Copy this edge, optionally rebinding its endpoints."""
        return Edge(
            self.source if source is None else source,
            self.target if target is None else target,
            direction=self.direction,
            type=self.type,
            label=self._label,
            id=self.id,
        )

    def __repr__(self) -> str:
        return f"Edge(id={self.id!r}, {self.source_id!r} -> {self.target_id!r}, {self.direction.value}, type={self.type!r})"


# ----- entity references -----

@dataclass(frozen=True)
class ById:
    """Reference by identifier; may match a node, an edge, or both."""

    id: str


@dataclass(frozen=True, eq=False)
class ByEntity:
    """Reference to a concrete `Node` or `Edge` object."""

    entity: Union[Node, Edge]


EntityRef = Union[ById, ByEntity]
RefLike = Union[EntityRef, Node, Edge, str]


def as_ref(value: RefLike) -> EntityRef:
    """Coerce an id string, entity or existing reference into an `EntityRef`."""
    if isinstance(value, (ById, ByEntity)):
        return value
    if isinstance(value, (Node, Edge)):
        return ByEntity(value)
    if isinstance(value, str):
        return ById(value)
    raise TypeError(f"Cannot reference {value!r}; expected a node, edge or id string")
