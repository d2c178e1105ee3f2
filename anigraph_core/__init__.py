"""
anigraph core package.

Renders a mutable labeled graph into a retained-mode scene and replays
recorded graph snapshots as an animation:

- Entity model (Node, Edge, labels, references)
- Collision-avoiding layout for nodes inserted without a position
- Keyed reconciliation of entities onto scene elements
- Graph controller bound to a host surface
- Animator with frame navigation and change notification
"""

__version__ = "0.1.0"

from .animator import Animator
from .config import GraphStyle, load_style
from .entities import ById, ByEntity, ComputedLabel, Edge, Node, StaticLabel, as_ref, make_label
from .enums import Direction, Phase
from .geometry import edge_points
from .graph import Graph
from .layout import find_free_position, placement_after, placement_before
from .reconciler import Reconciler, ReconcileResult
from .surface import (
    Element,
    Scene,
    Surface,
    SurfaceNotFoundError,
    get_surface,
    register_surface,
    unregister_surface,
)
