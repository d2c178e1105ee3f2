"""
Tests for the Manim backend: scene-to-mobject conversion and frame transitions.
"""

import pytest

pytest.importorskip("manim")

from anigraph_core.config import GraphStyle  # noqa: E402
from anigraph_core.entities import Node  # noqa: E402
from anigraph_core.graph import Graph  # noqa: E402

from .conftest import SELECTOR  # noqa: E402


def _skip_if_text_unavailable():
    from manim import Text

    try:
        _ = Text("ok", font_size=12)
    except (
        ImportError,
        RuntimeError,
        OSError,
    ) as exc:  # pragma: no cover - environment-dependent
        pytest.skip(f"Skipping Manim Text-based tests: {exc}")


def test_parse_translate_and_point_conversion():
    """Test transform parsing and scene-to-Manim coordinate mapping."""
    from anigraph_anim.utils.mobjects import parse_translate, to_manim_point

    assert parse_translate("translate(10,-20.5)") == (10.0, -20.5)
    assert parse_translate(None) == (0.0, 0.0)
    assert to_manim_point(50, 100, scale=50) == (1.0, -2.0, 0.0)


def test_scene_to_mobjects_keys_and_arrow_types(surface):
    """Test directed edges become arrows and undirected ones lines."""
    from manim import Arrow, Line

    from anigraph_anim.utils.mobjects import scene_to_mobjects

    _skip_if_text_unavailable()

    g = Graph(SELECTOR, style=GraphStyle())
    g.insert_node(Node("a", name="A"))
    g.insert_node_after(Node("b"), "a")
    g.insert_edge("b", "a", direction="undirected")

    mobs = scene_to_mobjects(g.scene, g.style.node_radius)
    assert set(mobs) == {"node:a", "node:b", "edge:a-b", "edge:b-a"}
    assert isinstance(mobs["edge:a-b"][0], Arrow)
    line = mobs["edge:b-a"][0]
    assert isinstance(line, Line) and not isinstance(line, Arrow)


def test_frame_transitions_classify_keys():
    """Test kept, new and removed keys map to Transform, FadeIn and FadeOut."""
    from manim import Circle, FadeIn, FadeOut, Transform

    from anigraph_anim.scenes.animator_scene import AnimatorScene

    scene = AnimatorScene.__new__(AnimatorScene)
    current = {"node:a": Circle(), "node:b": Circle()}
    incoming = {"node:a": Circle(), "node:c": Circle()}
    anims = scene.frame_transitions(current, incoming)
    kinds = sorted(type(a).__name__ for a in anims)
    assert kinds == sorted([Transform.__name__, FadeIn.__name__, FadeOut.__name__])
