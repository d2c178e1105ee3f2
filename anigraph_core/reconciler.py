"""
Keyed reconciliation of graph entities onto scene elements.

Every pass maps the current node and edge sequences onto the elements of a
`Scene`, keeping elements whose key survives and classifying each key as
entering, updating or exiting:

- Nodes are keyed by node id.
- Edges are keyed by ``source_id-target_id``; repeated pairs get an
  occurrence suffix (``a-b#1``).
- Derived geometry (transforms, edge endpoints, label text) and the
  ``highlighted`` class are recomputed on every pass, never cached, so a
  pass is idempotent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Optional, Sequence

from .config import GraphStyle
from .entities import Edge, Node
from .enums import Direction, Phase
from .geometry import edge_points, midpoint
from .surface import Element, Scene

logger = logging.getLogger(__name__)

HIGHLIGHT_CLASS = "highlighted"
NAME_DY = 4
LABEL_PADDING = 6


@dataclass
class KindDelta:
    """Keys classified during one pass for a single entity kind."""

    entered: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    exited: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    """Edge ids left unrendered because an endpoint did not resolve."""

    def phase_of(self, key: str) -> Optional[Phase]:
        if key in self.entered:
            return Phase.ENTER
        if key in self.updated:
            return Phase.UPDATE
        if key in self.exited:
            return Phase.EXIT
        return None


@dataclass
class ReconcileResult:
    nodes: KindDelta = field(default_factory=KindDelta)
    edges: KindDelta = field(default_factory=KindDelta)

    @property
    def structural_change(self) -> bool:
        """True when any element entered or exited."""
        return bool(self.nodes.entered or self.nodes.exited or self.edges.entered or self.edges.exited)


class Reconciler:
    """Synchronizes a `Scene` with node/edge collections."""

    def __init__(self, scene: Scene, style: Optional[GraphStyle] = None):
        self.scene = scene
        self.style = style or GraphStyle()

    def reconcile(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        highlighted_nodes: AbstractSet[str] = frozenset(),
        highlighted_edges: AbstractSet[str] = frozenset(),
    ) -> ReconcileResult:
        result = ReconcileResult()
        by_id: Dict[str, Node] = {}
        for n in nodes:
            by_id.setdefault(n.id, n)
        self._reconcile_edges(edges, by_id, highlighted_edges, result.edges)
        self._reconcile_nodes(nodes, highlighted_nodes, result.nodes)
        return result

    # ----- edges -----
    def _reconcile_edges(
        self,
        edges: Sequence[Edge],
        by_id: Dict[str, Node],
        highlighted: AbstractSet[str],
        delta: KindDelta,
    ) -> None:
        group = self.scene.links
        existing = group.keyed_children()

        wanted: Dict[str, tuple] = {}
        seen: Dict[str, int] = {}
        for e in edges:
            base = e.key
            n = seen.get(base, 0)
            seen[base] = n + 1
            key = base if n == 0 else f"{base}#{n}"
            source = by_id.get(e.source_id)
            target = by_id.get(e.target_id)
            if source is None or target is None:
                logger.debug("Skipping edge %s: unresolved endpoint", e.id)
                delta.skipped.append(e.id)
                continue
            wanted[key] = (e, source, target)

        for key, el in existing.items():
            if key not in wanted:
                el.remove()
                delta.exited.append(key)

        for key, (e, source, target) in wanted.items():
            el = existing.get(key)
            if el is None:
                el = self._enter_edge(group, key)
                delta.entered.append(key)
            else:
                delta.updated.append(key)
            self._update_edge(el, e, source, target, highlighted)

    def _enter_edge(self, group: Element, key: str) -> Element:
        el = group.append("g", key=key, classes=("g_edge",))
        el.append("line", classes=("edge-line",))
        el.append("text", classes=("edge-label",), dy=-NAME_DY)
        return el

    def _update_edge(self, el: Element, e: Edge, source: Node, target: Node, highlighted: AbstractSet[str]) -> None:
        for d in Direction:
            el.classed(d.value, e.direction is d)
        type_class = f"type-{e.type}"
        for c in [c for c in el.classes if c.startswith("type-") and c != type_class]:
            el.classed(c, False)
        el.classed(type_class, True)
        el.attr("data-edge-id", e.id)
        el.classed(HIGHLIGHT_CLASS, e.id in highlighted)

        x1, y1, x2, y2 = edge_points(
            _xy(source), _xy(target), self.style.node_radius, self.style.arrow_offset
        )
        line = el.select("edge-line")
        line.attr("x1", x1).attr("y1", y1).attr("x2", x2).attr("y2", y2)
        line.attr("marker-end", "url(#arrowhead)" if e.directed else None)

        mx, my = midpoint(x1, y1, x2, y2)
        el.select("edge-label").attr("x", mx).attr("y", my).set_text(e.label)

    # ----- nodes -----
    def _reconcile_nodes(self, nodes: Sequence[Node], highlighted: AbstractSet[str], delta: KindDelta) -> None:
        group = self.scene.nodes
        existing = group.keyed_children()

        wanted: Dict[str, Node] = {}
        for n in nodes:
            wanted.setdefault(n.id, n)

        for key, el in existing.items():
            if key not in wanted:
                el.remove()
                delta.exited.append(key)

        for key, n in wanted.items():
            el = existing.get(key)
            if el is None:
                el = self._enter_node(group, key)
                delta.entered.append(key)
            else:
                delta.updated.append(key)
            self._update_node(el, n, highlighted)

    def _enter_node(self, group: Element, key: str) -> Element:
        r = self.style.node_radius
        el = group.append("g", key=key, classes=("g_node",))
        el.append("circle", r=r)
        el.append("text", classes=("name",), dy=NAME_DY)
        el.append("text", classes=("label",), y=-(r + LABEL_PADDING))
        return el

    def _update_node(self, el: Element, n: Node, highlighted: AbstractSet[str]) -> None:
        x, y = _xy(n)
        el.attr("transform", f"translate({_num(x)},{_num(y)})")
        el.select("name").set_text(n.name if n.name is not None else n.id)
        el.select("label").set_text(n.label)
        el.classed(HIGHLIGHT_CLASS, n.id in highlighted)


def _xy(n: Node) -> tuple:
    return (float(n.x or 0.0), float(n.y or 0.0))


def _num(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else repr(float(v))
