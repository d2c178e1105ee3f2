"""
Core enumerations for anigraph.

Defines edge directions and the reconciliation phases reported after every
render pass.
"""

from enum import Enum


class Direction(Enum):
    """
    Orientation of an edge.

    The value doubles as the CSS-style class tagged on the rendered edge.
    """

    DIRECTED = "directed"
    """Drawn with an arrowhead at the target end."""

    UNDIRECTED = "undirected"
    """Drawn as a plain line."""

    @classmethod
    def parse(cls, value) -> "Direction":
        """Accept either a `Direction` or its string value."""
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


class Phase(Enum):
    """Classification of an element during a reconciliation pass."""

    ENTER = "enter"
    """Key appeared; a new element was created."""

    UPDATE = "update"
    """Key survived; the existing element was refreshed."""

    EXIT = "exit"
    """Key disappeared; the element was removed."""
