"""
Lightweight visualization utilities decoupled from Streamlit to enable testing.
"""

from __future__ import annotations

from typing import Any, Dict, List

from anigraph_core.graph import Graph

HIGHLIGHT_COLOR = "#F59E0B"
NODE_COLOR = "#60A5FA"


def build_cytoscape_elements(graph: Graph) -> List[Dict[str, Any]]:
    """Convert a Graph into Cytoscape-compatible elements.

    Nodes carry their layout position and a ``highlighted`` class when
    flagged. Edges with an unresolved endpoint are left out, matching the
    rendered scene.
    """
    elements: List[Dict[str, Any]] = []
    node_ids = set()

    for n in graph.nodes:
        highlighted = n.id in graph.highlighted_nodes
        node: Dict[str, Any] = {
            "data": {
                "id": n.id,
                "name": n.name if n.name is not None else n.id,
                "label": n.label,
                "color": HIGHLIGHT_COLOR if highlighted else NODE_COLOR,
                "size": int(graph.style.node_radius * 2),
            },
            "classes": "highlighted" if highlighted else "",
        }
        if n.is_placed:
            node["position"] = {"x": float(n.x), "y": float(n.y)}
        elements.append(node)
        node_ids.add(n.id)

    for e in graph.edges:
        if e.source_id not in node_ids or e.target_id not in node_ids:
            continue
        highlighted = e.id in graph.highlighted_edges
        classes = [e.direction.value]
        if highlighted:
            classes.append("highlighted")
        elements.append({
            "data": {
                "id": e.id,
                "source": e.source_id,
                "target": e.target_id,
                "label": e.label,
                "edgeType": e.type,
            },
            "classes": " ".join(classes),
        })

    return elements
