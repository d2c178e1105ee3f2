"""
Style configuration for rendered graphs.

Exposes the tunable geometry used by layout, reconciliation and edge drawing
so diagrams can be restyled without editing core logic. Values resolve from
the built-in defaults, an optional YAML file and `AG_*` environment variables,
in that order of increasing priority.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

ENV_VARS = {
    "node_radius": "AG_NODE_RADIUS",
    "node_gap": "AG_NODE_GAP",
    "level_width": "AG_LEVEL_WIDTH",
    "arrow_length": "AG_ARROW_LENGTH",
    "arrow_offset": "AG_ARROW_OFFSET",
    "label_allowance": "AG_LABEL_ALLOWANCE",
    "max_probes": "AG_MAX_PROBES",
}

STYLE_FILE_VAR = "AG_STYLE_FILE"


@dataclass
class GraphStyle:
    """
    Geometry shared by the layout engine and the reconciler.

    The first five values mirror the classic diagram defaults; the last two
    control the layout search.
    """

    node_radius: float = 15.0
    """Radius of the circular node marker."""

    node_gap: float = 10.0
    """Minimum empty space between two node markers."""

    level_width: float = 100.0
    """Horizontal step used by insert-after / insert-before placement."""

    arrow_length: float = 10.0
    """Reference offset of the arrowhead marker on directed edges."""

    arrow_offset: float = 2.0
    """Extra gap kept between an edge end and the target marker."""

    # Extra vertical room reserved for a label drawn above the marker.
    label_allowance: float = 0.0

    # Upper bound on collision probes per layout search.
    max_probes: int = 10000

    @property
    def clearance(self) -> float:
        """Minimum centre-to-centre distance between two node markers."""
        return 2 * self.node_radius + self.node_gap + self.label_allowance

    def merged(self, overrides: Mapping[str, Any]) -> "GraphStyle":
        """Return a copy with recognised, parseable overrides applied."""
        changes: Dict[str, Any] = {}
        for f in fields(self):
            if f.name not in overrides:
                continue
            value = _coerce(f.name, overrides[f.name], getattr(self, f.name))
            if value is not None:
                changes[f.name] = value
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, base: Optional["GraphStyle"] = None) -> "GraphStyle":
        """Apply `AG_*` environment overrides on top of `base` (or defaults)."""
        env = os.environ if environ is None else environ
        style = base or cls()
        overrides = {}
        for name, var in ENV_VARS.items():
            raw = env.get(var, "")
            if raw.strip():
                overrides[name] = raw.strip()
        return style.merged(overrides)

    @classmethod
    def from_yaml(cls, path: str, base: Optional["GraphStyle"] = None) -> "GraphStyle":
        """Load overrides from a YAML mapping such as ``node_radius: 20``."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Style file {path} must contain a mapping, got {type(data).__name__}")
        # Allow an optional top-level `style:` section
        if isinstance(data.get("style"), dict):
            data = data["style"]
        return (base or cls()).merged(data)


def _coerce(name: str, raw: Any, default: Any) -> Any:
    try:
        if isinstance(default, int) and not isinstance(default, bool):
            return int(float(raw))
        return float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid style value %s=%r", name, raw)
        return None


def load_style(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> GraphStyle:
    """
    Resolve the effective style: defaults, then YAML file, then environment.

    Args:
        path: Optional YAML style file; falls back to ``$AG_STYLE_FILE``.
        environ: Environment mapping, defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    style = GraphStyle()
    path = path or env.get(STYLE_FILE_VAR) or None
    if path:
        style = GraphStyle.from_yaml(path, base=style)
    return GraphStyle.from_env(env, base=style)
