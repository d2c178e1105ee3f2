"""
Ready-made animations used by the CLI, the Streamlit app and the Manim scene.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import networkx as nx

from .animator import Animator
from .config import GraphStyle
from .entities import Node
from .graph import Graph

DEMOS = ("bfs", "chain")


def build_tree_graph(selector: str, style: Optional[GraphStyle] = None) -> Graph:
    """A small two-level tree laid out with insert-after placement."""
    g = Graph(selector, style=style)
    g.insert_node(Node("a", name="A"))
    g.insert_nodes_after([Node("b", name="B"), Node("c", name="C")], "a")
    g.insert_node_after(Node("d", name="D"), "b")
    g.insert_node_after(Node("e", name="E"), ["b", "c"])
    g.insert_node_after(Node("f", name="F"), "c")
    g.insert_node_after(Node("g", name="G"), ["d", "e", "f"])
    return g


def build_bfs_animator(selector: str, source: str = "a", style: Optional[GraphStyle] = None) -> Animator:
    """
    Record a breadth-first walk over the demo tree.

    Frame 0 is the untouched graph; every later frame highlights one more
    discovered node and the edge it was reached by, and labels nodes with
    their BFS depth.
    """
    g = build_tree_graph(selector, style=style)
    animator = Animator()
    animator.snap(g)

    depth: Dict[str, int] = {source: 0}
    g.label(source, "d=0")
    g.highlight(source)
    animator.snap(g)

    for u, v in nx.bfs_edges(g.to_networkx(), source):
        depth[v] = depth[u] + 1
        g.label(v, f"d={depth[v]}")
        g.highlight(v)
        for e in g.edges:
            if e.source_id == u and e.target_id == v:
                g.highlight(e)
        animator.snap(g)

    g.deactivate()
    return animator


def build_chain_animator(selector: str, length: int = 5, style: Optional[GraphStyle] = None) -> Animator:
    """Grow a chain one node per frame; labels show each node's position."""
    g = Graph(selector, style=style)
    animator = Animator()
    prev: Optional[str] = None
    for i in range(length):
        node = Node(f"n{i}", name=str(i), label=lambda n: f"({n.x:.0f}, {n.y:.0f})")
        if prev is None:
            g.insert_node(node)
        else:
            g.insert_node_after(node, prev)
        prev = node.id
        animator.snap(g)
    g.deactivate()
    return animator


def build_demo(name: str, selector: str, style: Optional[GraphStyle] = None) -> Animator:
    if name == "bfs":
        return build_bfs_animator(selector, style=style)
    if name == "chain":
        return build_chain_animator(selector, style=style)
    raise ValueError(f"Unknown demo: {name} (choose from {', '.join(DEMOS)})")


def frame_statistics(animator: Animator) -> List[Dict[str, object]]:
    """Per-frame structure summary computed with NetworkX."""
    stats = []
    for i, frame in enumerate(animator.frames):
        G = frame.to_networkx()
        stats.append({
            "frame": i,
            "nodes": G.number_of_nodes(),
            "edges": len(frame.edges),
            "components": nx.number_weakly_connected_components(G) if G.number_of_nodes() else 0,
            "highlighted_nodes": sorted(frame.highlighted_nodes),
            "highlighted_edges": sorted(frame.highlighted_edges),
        })
    return stats
