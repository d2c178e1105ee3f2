"""
Graph controller for anigraph diagrams.

A `Graph` owns the node and edge sequences and the highlight sets of one
diagram, places new nodes with the layout engine and reconciles its `Scene`
after every mutation. Its scene is attached to (or detached from) the host
`Surface` named by its selector through `activate` / `deactivate`.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from .config import GraphStyle, load_style
from .entities import (
    ById,
    ByEntity,
    Edge,
    Endpoint,
    LabelLike,
    Node,
    RefLike,
    as_ref,
    endpoint_id,
)
from .enums import Direction
from .layout import find_free_position, placement_after, placement_before
from .reconciler import Reconciler, ReconcileResult
from .surface import Scene, Surface, get_surface

try:
    import networkx as nx

    HAS_NETWORKX = True
except ImportError:
    HAS_NETWORKX = False

logger = logging.getLogger(__name__)

NodeRefs = Union[RefLike, Sequence[RefLike]]


class Graph:
    """
    A mutable, rendered diagram bound to a host surface.

    Attributes:
        selector: Selector of the host surface this graph renders into
        width, height: Scene dimensions
        nodes: Insertion-ordered nodes (unique ids)
        edges: Insertion-ordered edges (duplicates allowed)
        highlighted_nodes: Ids of nodes flagged for emphasis
        highlighted_edges: Ids of edges flagged for emphasis
        style: Geometry resolved once at construction
    """

    def __init__(
        self,
        selector: str,
        width: float = 800,
        height: float = 600,
        style: Optional[GraphStyle] = None,
        attach: bool = True,
    ):
        """
        Bind a new, empty graph to the surface registered under `selector`.

        Args:
            selector: Host surface selector
            width, height: Scene size
            style: Explicit style; resolved with `load_style()` when omitted
            attach: Attach the scene to the surface immediately (replacing
                whatever is attached there)

        Raises:
            SurfaceNotFoundError: If no surface is registered for `selector`
        """
        self.selector = selector
        self.surface: Surface = get_surface(selector)
        self.width = width
        self.height = height
        self.style = style if style is not None else load_style()

        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.highlighted_nodes: Set[str] = set()
        self.highlighted_edges: Set[str] = set()

        self.scene = Scene(width, height, self.style)
        self._reconciler = Reconciler(self.scene, self.style)

        if attach:
            self.activate()
        else:
            self.update()

    # ----- rendering -----
    def update(self) -> ReconcileResult:
        """Reconcile the scene with the current nodes, edges and highlights."""
        return self._reconciler.reconcile(
            self.nodes, self.edges, self.highlighted_nodes, self.highlighted_edges
        )

    def activate(self) -> ReconcileResult:
        """Attach this graph's scene to the surface, replacing any other."""
        self.surface.clear()
        self.surface.attach(self.scene.root, owner=self)
        return self.update()

    def deactivate(self) -> None:
        """Detach this graph's scene from the surface."""
        self.surface.detach(self.scene.root)

    @property
    def is_active(self) -> bool:
        return self.surface.is_attached(self.scene.root)

    def to_svg(self) -> str:
        return self.scene.to_svg()

    # ----- lookups -----
    def get_node(self, ref: RefLike) -> Optional[Node]:
        """
        Resolve a reference to the node this graph stores.

        A `Node` reference matches by id, so an equal-id stand-in finds the
        stored node rather than itself.
        """
        r = as_ref(ref)
        if isinstance(r, ByEntity):
            if not isinstance(r.entity, Node):
                return None
            node_id = r.entity.id
        else:
            node_id = r.id
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def get_edges(self, ref: RefLike) -> List[Edge]:
        """All edges matching a reference (edge ids need not be unique)."""
        r = as_ref(ref)
        if isinstance(r, ByEntity):
            return [r.entity] if isinstance(r.entity, Edge) else []
        return [e for e in self.edges if e.id == r.id]

    def has_node(self, node_id: str) -> bool:
        return any(n.id == node_id for n in self.nodes)

    def _resolve(self, ref: RefLike) -> Tuple[List[str], List[str]]:
        """Node ids and edge ids a reference designates.

        An id string is looked up in both identity spaces.
        """
        r = as_ref(ref)
        if isinstance(r, ByEntity):
            if isinstance(r.entity, Node):
                return [r.entity.id], []
            return [], [r.entity.id]
        node_ids = [r.id] if self.has_node(r.id) else []
        edge_ids = [r.id] if any(e.id == r.id for e in self.edges) else []
        return node_ids, edge_ids

    # ----- node mutations -----
    def insert_node(self, node: Node) -> bool:
        """
        Append a node, placing it first if it has no position.

        Returns:
            False (with a warning) if a node with the same id already exists
        """
        if self.has_node(node.id):
            logger.warning("Node with id %s already exists.", node.id)
            return False

        if not node.is_placed:
            node.move_to(*find_free_position(0, 0, self._positions(), self.style))

        self.nodes.append(node)
        self.update()
        return True

    def insert_node_after(self, node: Node, after: NodeRefs) -> bool:
        """Insert `node` one level right of `after` and link each ref -> node."""
        refs = _as_list(after)
        start = placement_after(self._ref_positions(refs), self.style)
        return self._insert_placed(node, start, refs, after=True)

    def insert_node_before(self, node: Node, before: NodeRefs) -> bool:
        """Insert `node` one level left of `before` and link node -> each ref."""
        refs = _as_list(before)
        start = placement_before(self._ref_positions(refs), self.style)
        return self._insert_placed(node, start, refs, after=False)

    def insert_nodes_after(self, nodes: Iterable[Node], after: NodeRefs) -> None:
        for n in nodes:
            self.insert_node_after(n, after)

    def insert_nodes_before(self, nodes: Iterable[Node], before: NodeRefs) -> None:
        for n in nodes:
            self.insert_node_before(n, before)

    def _insert_placed(self, node: Node, start: Tuple[float, float], refs: List[RefLike], after: bool) -> bool:
        # A rejected duplicate keeps its position; edges go to the stored node
        stored = self.get_node(node.id)
        if stored is None and not node.is_placed:
            node.move_to(*find_free_position(start[0], start[1], self._positions(), self.style))
        inserted = self.insert_node(node)
        target = node if inserted else stored
        for ref in refs:
            other = _endpoint(ref)
            if after:
                self.insert_edge(other, target)
            else:
                self.insert_edge(target, other)
        return inserted

    def remove_node(self, ref: RefLike, drop_edges: bool = True) -> bool:
        """
        Remove a node and, by default, every edge touching it.

        With ``drop_edges=False`` incident edges stay in the model and simply
        stop rendering until a node with that id reappears.
        """
        node = self.get_node(ref)
        if node is None:
            return False
        self.nodes.remove(node)
        self.highlighted_nodes.discard(node.id)
        if drop_edges:
            for e in [e for e in self.edges if node.id in (e.source_id, e.target_id)]:
                self.edges.remove(e)
                self.highlighted_edges.discard(e.id)
        self.update()
        return True

    def label(self, node: RefLike, text: LabelLike) -> bool:
        """Replace a node's label (static text or callable) and re-render."""
        n = self.get_node(node)
        if n is None:
            return False
        n.label = text
        self.update()
        return True

    # ----- edge mutations -----
    def insert_edge(
        self,
        source: Union[Endpoint, ById],
        target: Union[Endpoint, ById],
        direction: Union[Direction, str] = Direction.DIRECTED,
        type: str = "default",
        label: LabelLike = "",
        id: Optional[str] = None,
    ) -> Edge:
        """Append a new edge; no duplicate check is made."""
        edge = Edge(_endpoint(source), _endpoint(target), direction=direction, type=type, label=label, id=id)
        self.edges.append(edge)
        self.update()
        return edge

    def remove_edge(self, ref: RefLike) -> int:
        """Remove every edge matching `ref`; returns how many were removed."""
        doomed = self.get_edges(ref)
        kept = [e for e in self.edges if not any(e is d for d in doomed)]
        removed = len(self.edges) - len(kept)
        self.edges = kept
        for e in doomed:
            if not any(o.id == e.id for o in kept):
                self.highlighted_edges.discard(e.id)
        if removed:
            self.update()
        return removed

    # ----- highlights -----
    def highlight(self, ref: RefLike) -> None:
        """Flag a node, an edge, or every node/edge sharing an id string."""
        node_ids, edge_ids = self._resolve(ref)
        self.highlighted_nodes.update(node_ids)
        self.highlighted_edges.update(edge_ids)
        self.update()

    def remove_highlight(self, ref: RefLike) -> None:
        node_ids, edge_ids = self._resolve(ref)
        self.highlighted_nodes.difference_update(node_ids)
        self.highlighted_edges.difference_update(edge_ids)
        self.update()

    def clear_highlights(self) -> None:
        self.highlighted_nodes.clear()
        self.highlighted_edges.clear()
        self.update()

    def is_highlighted(self, ref: RefLike) -> bool:
        node_ids, edge_ids = self._resolve(ref)
        return any(i in self.highlighted_nodes for i in node_ids) or any(
            i in self.highlighted_edges for i in edge_ids
        )

    # ----- copies and views -----
    def clone(self, deep: bool = False) -> "Graph":
        """
        Copy this graph onto the same selector without attaching it.

        ``deep=False`` shares node and edge objects with this graph (the
        lists themselves are new). ``deep=True`` copies nodes and edges;
        edge endpoints given as `Node` objects are rebound to the copies.
        Highlight sets are always copied.
        """
        graph = Graph(self.selector, self.width, self.height, style=self.style, attach=False)
        if deep:
            copies = {id(n): n.clone() for n in self.nodes}
            graph.nodes = [copies[id(n)] for n in self.nodes]
            graph.edges = [
                e.clone(
                    source=_rebind(e.source, copies),
                    target=_rebind(e.target, copies),
                )
                for e in self.edges
            ]
        else:
            graph.nodes = list(self.nodes)
            graph.edges = list(self.edges)
        graph.highlighted_nodes = set(self.highlighted_nodes)
        graph.highlighted_edges = set(self.highlighted_edges)
        graph.update()
        return graph

    def to_networkx(self) -> "nx.MultiDiGraph":
        """
        Convert the diagram to a NetworkX MultiDiGraph for analysis.

        Undirected edges are added in both directions. Dangling edges are
        left out, as they are when rendering.

        Raises:
            ImportError: If NetworkX is not available
        """
        if not HAS_NETWORKX:
            raise ImportError(
                "NetworkX is required for graph conversion. Install with: pip install networkx"
            )

        G = nx.MultiDiGraph()
        for n in self.nodes:
            G.add_node(
                n.id,
                name=n.name,
                label=n.label,
                x=n.x,
                y=n.y,
                highlighted=n.id in self.highlighted_nodes,
            )
        for e in self.edges:
            if not (G.has_node(e.source_id) and G.has_node(e.target_id)):
                continue
            attrs = {
                "id": e.id,
                "type": e.type,
                "direction": e.direction.value,
                "label": e.label,
                "highlighted": e.id in self.highlighted_edges,
            }
            G.add_edge(e.source_id, e.target_id, key=e.id, **attrs)
            if not e.directed:
                G.add_edge(e.target_id, e.source_id, key=e.id, **attrs)
        return G

    # ----- helpers -----
    def _positions(self) -> List[Optional[Tuple[float, float]]]:
        return [n.position for n in self.nodes]

    def _ref_positions(self, refs: Iterable[RefLike]) -> List[Optional[Tuple[float, float]]]:
        positions = []
        for ref in refs:
            n = self.get_node(ref)
            positions.append(n.position if n is not None else None)
        return positions

    def __repr__(self) -> str:
        return f"Graph({self.selector!r}, nodes={len(self.nodes)}, edges={len(self.edges)})"


def _as_list(refs: NodeRefs) -> List[RefLike]:
    if isinstance(refs, (list, tuple)):
        return list(refs)
    return [refs]


def _endpoint(ref: Union[Endpoint, ById, ByEntity]) -> Endpoint:
    r = as_ref(ref)
    if isinstance(r, ByEntity):
        if not isinstance(r.entity, Node):
            raise TypeError(f"Edge endpoints must be nodes or node ids, got {r.entity!r}")
        return r.entity
    return r.id


def _rebind(endpoint: Endpoint, copies: dict) -> Endpoint:
    if isinstance(endpoint, Node):
        copy = copies.get(id(endpoint))
        return copy if copy is not None else endpoint.clone()
    return endpoint_id(endpoint)
