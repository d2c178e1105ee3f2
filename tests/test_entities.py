"""
Tests for nodes, edges, labels and entity references.
"""

import pytest

from anigraph_core.entities import (
    ById,
    ByEntity,
    ComputedLabel,
    Edge,
    Node,
    StaticLabel,
    as_ref,
    make_label,
)
from anigraph_core.enums import Direction


class TestLabels:
    """Test static and computed label resolution."""
    def test_static_label_returned_verbatim(self):
        """Test a static label is returned as given."""
        n = Node("a", label="hello")
        assert n.label == "hello"
        assert isinstance(n.label_source, StaticLabel)

    def test_computed_label_sees_owner_fields(self):
        """Test a computed label reads the owning node's current fields."""
        n = Node("a", name="A", label=lambda node: f"{node.name}@{node.x}")
        n.x = 10
        assert n.label == "A@10"
        n.name = "Alpha"
        assert n.label == "Alpha@10"
        assert isinstance(n.label_source, ComputedLabel)

    def test_setting_label_rewraps(self):
        """Test assigning a string or callable replaces the label source."""
        n = Node("a")
        n.label = lambda node: node.id.upper()
        assert n.label == "A"
        n.label = "plain"
        assert n.label == "plain"

    def test_make_label_none_and_numbers(self):
        """Test make_label handles None and non-string values."""
        assert make_label(None).resolve(object()) == ""
        assert make_label(3).resolve(object()) == "3"

    def test_computed_label_none_result_is_empty(self):
        """Test a computed label returning None renders as empty text."""
        assert ComputedLabel(lambda _: None).resolve(object()) == ""


class TestNode:
    """Test Node initialization and copying."""
    def test_defaults_unplaced(self):
        """Test a new Node has no position and empty label."""
        n = Node("a")
        assert n.position is None
        assert not n.is_placed
        assert n.name is None

    def test_clone_is_value_independent_and_shares_callable(self):
        """Test Node.clone copies values but keeps the label callable."""
        fn = lambda node: node.id  # noqa: E731
        n = Node("a", name="A", label=fn, x=1, y=2)
        c = n.clone()
        assert c is not n
        assert (c.id, c.name, c.x, c.y) == ("a", "A", 1, 2)
        assert c.label_source.fn is fn
        c.x = 50
        assert n.x == 1

    def test_id_is_read_only(self):
        """Test a node id cannot be reassigned."""
        n = Node("a")
        with pytest.raises(AttributeError):
            n.id = "b"


class TestEdge:
    """Test Edge identity, endpoints and copying."""
    def test_default_id_and_key(self):
        """Test the default edge id and key are source-target."""
        e = Edge("a", "b")
        assert e.id == "a-b"
        assert e.key == "a-b"
        assert e.direction is Direction.DIRECTED

    def test_node_endpoints_resolve_to_ids(self):
        """Test Node endpoints resolve to their ids."""
        a, b = Node("a"), Node("b")
        e = Edge(a, b, direction="undirected", type="tree")
        assert (e.source_id, e.target_id) == ("a", "b")
        assert not e.directed
        assert e.type == "tree"

    def test_explicit_id_kept_but_key_from_endpoints(self):
        """Test an explicit id does not change the render key."""
        e = Edge("a", "b", id="custom")
        assert e.id == "custom"
        assert e.key == "a-b"

    def test_invalid_direction(self):
        """Test an unknown direction string raises ValueError."""
        with pytest.raises(ValueError):
            Edge("a", "b", direction="sideways")

    def test_clone_rebinds_endpoints(self):
        """Test Edge.clone can swap in new endpoints."""
        e = Edge("a", "b", label="w=1")
        c = e.clone(source="x")
        assert c.source_id == "x"
        assert c.target_id == "b"
        assert c.id == "a-b"
        assert c.label == "w=1"


class TestRefs:
    """Test coercion of values into entity references."""
    def test_as_ref_dispatch(self):
        """Test as_ref maps ids, entities and refs to the right tag."""
        n = Node("a")
        e = Edge("a", "b")
        assert as_ref("a") == ById("a")
        assert isinstance(as_ref(n), ByEntity) and as_ref(n).entity is n
        assert as_ref(e).entity is e
        r = ById("z")
        assert as_ref(r) is r

    def test_as_ref_rejects_other_types(self):
        """Test as_ref raises TypeError for unsupported values."""
        with pytest.raises(TypeError):
            as_ref(42)
