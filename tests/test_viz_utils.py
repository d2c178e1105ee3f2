"""
Tests for viz.utils.build_cytoscape_elements and the Slider binding.
"""

from anigraph_core.animator import Animator
from anigraph_core.config import GraphStyle
from anigraph_core.entities import Node
from anigraph_core.graph import Graph
from viz.slider import Slider
from viz.utils import HIGHLIGHT_COLOR, build_cytoscape_elements

from .conftest import SELECTOR


def test_builder_basic_nodes_and_edges(surface):
    """Test Cytoscape elements for nodes, highlights and edges."""
    g = Graph(SELECTOR, style=GraphStyle())
    g.insert_node(Node("a", name="Alpha", label="top"))
    g.insert_node_after(Node("b"), "a")
    g.insert_edge("b", "ghost")
    g.highlight("a")

    els = build_cytoscape_elements(g)
    nodes = [e for e in els if "source" not in e["data"]]
    edges = [e for e in els if "source" in e["data"]]

    assert [n["data"]["id"] for n in nodes] == ["a", "b"]
    assert len(edges) == 1

    node_a = nodes[0]
    assert node_a["data"]["name"] == "Alpha"
    assert node_a["data"]["label"] == "top"
    assert node_a["data"]["color"] == HIGHLIGHT_COLOR
    assert node_a["classes"] == "highlighted"
    assert node_a["position"] == {"x": 0.0, "y": 0.0}

    edge = edges[0]
    assert edge["data"]["source"] == "a"
    assert edge["data"]["target"] == "b"
    assert edge["classes"] == "directed"


class TestSlider:
    """Test the Slider binding to an Animator."""
    def frames(self):
        return [Graph(SELECTOR, style=GraphStyle(), attach=False) for _ in range(3)]

    def test_initial_state(self, surface):
        """Test the initial range, value and label."""
        slider = Slider(Animator(self.frames()))
        assert (slider.min, slider.max, slider.value) == (0, 2, 0)
        assert slider.label == "Step: 0 / 2"

    def test_input_moves_animator(self, surface):
        """Test input moves the animator and the label follows."""
        anim = Animator(self.frames())
        slider = Slider(anim)
        assert slider.on_input("2") is True
        assert anim.step == 2
        assert slider.value == 2
        assert slider.label == "Step: 2 / 2"

    def test_tracks_new_frames(self, surface):
        """Test the range grows as frames are inserted."""
        anim = Animator()
        slider = Slider(anim)
        assert slider.max == 0
        anim.insert(Graph(SELECTOR, attach=False))
        anim.insert(Graph(SELECTOR, attach=False))
        assert slider.max == 1
        assert slider.label == "Step: 0 / 1"

    def test_out_of_range_input_ignored(self, surface):
        """Test out-of-range input leaves the value unchanged."""
        anim = Animator(self.frames())
        slider = Slider(anim)
        assert slider.on_input(7) is False
        assert slider.value == 0

    def test_dispose_stops_tracking(self, surface):
        """Test dispose unsubscribes and is safe to repeat."""
        anim = Animator(self.frames())
        slider = Slider(anim)
        slider.dispose()
        anim.goto(2)
        assert slider.value == 0
        slider.dispose()
