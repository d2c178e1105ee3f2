"""
Tests for the Animator frame state machine and change notification.
"""

import pytest

from anigraph_core.animator import Animator
from anigraph_core.config import GraphStyle
from anigraph_core.entities import Node
from anigraph_core.graph import Graph

from .conftest import SELECTOR


def make_graph(*node_ids, attach=False):
    g = Graph(SELECTOR, style=GraphStyle(), attach=attach)
    for nid in node_ids:
        g.insert_node(Node(nid))
    return g


@pytest.fixture
def calls():
    return []


@pytest.fixture
def frames(surface):
    return [make_graph("a"), make_graph("a", "b"), make_graph("a", "b", "c")]


def record(calls):
    def _listener(step, total):
        calls.append((step, total))
    return _listener


class TestConstruction:
    """Test Animator construction with and without frames."""
    def test_first_frame_render_ready_but_not_active(self, surface):
        """Test the first frame is reconciled but not attached."""
        g = Graph(SELECTOR, style=GraphStyle(), attach=False)
        g.nodes.append(Node("late", x=0, y=0))
        anim = Animator([g])
        assert list(g.scene.nodes.keyed_children()) == ["late"]
        assert not g.is_active
        assert anim.step == 0
        assert anim.steps() == 1

    def test_empty(self):
        """Test an empty animator has no steps and no current frame."""
        anim = Animator()
        assert anim.steps() == 0
        assert anim.current is None


class TestGoto:
    """Test cursor navigation and frame activation."""
    def test_scenario_first_on_single_frame(self, surface, calls):
        """Test first() on a single frame activates it and notifies once."""
        g0 = make_graph("a")
        anim = Animator([g0])
        anim.subscribe(record(calls))
        assert anim.first() is True
        assert anim.step == 0
        assert calls == [(0, 1)]
        assert g0.is_active

    def test_scenario_next_on_empty(self, calls):
        """Test next() on an empty animator returns False silently."""
        anim = Animator([])
        anim.subscribe(record(calls))
        assert anim.next() is False
        assert calls == []

    @pytest.mark.parametrize("target", [-1, 3, 100])
    def test_out_of_range_changes_nothing(self, frames, calls, target):
        """Test out-of-range goto leaves cursor, surface and listeners untouched."""
        anim = Animator(frames)
        anim.goto(1)
        anim.subscribe(record(calls))
        assert anim.goto(target) is False
        assert anim.step == 1
        assert frames[1].is_active
        assert calls == []

    def test_valid_goto_activates_and_notifies_once(self, surface, frames, calls):
        """Test a valid goto activates the frame and notifies with (step, total)."""
        anim = Animator(frames)
        anim.subscribe(record(calls))
        assert anim.goto(2) is True
        assert anim.step == 2
        assert frames[2].is_active
        assert calls == [(2, 3)]
        assert surface.children == [frames[2].scene.root]

    def test_outgoing_frame_is_deactivated(self, surface, frames):
        """Test the previous frame is detached when moving away from it."""
        anim = Animator(frames)
        anim.goto(0)
        # Attach a second frame behind the animator's back
        surface.attach(frames[1].scene.root, owner=frames[1])
        anim.goto(2)
        assert not frames[0].is_active
        assert surface.children == [frames[2].scene.root]

    def test_wrappers(self, frames):
        """Test next, prev, first and last delegate to goto."""
        anim = Animator(frames)
        assert anim.last() is True and anim.step == 2
        assert anim.next() is False and anim.step == 2
        assert anim.prev() is True and anim.step == 1
        assert anim.first() is True and anim.step == 0
        assert anim.prev() is False and anim.step == 0

    def test_regoto_same_frame_stays_active(self, frames):
        """Test going to the current step keeps the frame attached."""
        anim = Animator(frames)
        anim.goto(1)
        anim.goto(1)
        assert frames[1].is_active


class TestRecording:
    """Test insert versus snap frame recording."""
    def test_insert_aliases_live_graph(self, surface, calls):
        """Test insert keeps the live graph so later mutations show up."""
        g = make_graph("a")
        anim = Animator()
        anim.subscribe(record(calls))
        anim.insert(g)
        g.insert_node(Node("b"))
        assert anim.frames[0] is g
        assert [n.id for n in anim.frames[0].nodes] == ["a", "b"]
        assert calls == [(0, 1)]

    def test_snap_isolates_frame(self, surface, calls):
        """Test snap stores a deep copy unaffected by later mutations."""
        g = make_graph("a", attach=True)
        anim = Animator()
        anim.subscribe(record(calls))
        frame = anim.snap(g)
        g.insert_node(Node("b"))
        g.get_node("a").move_to(500, 500)
        g.label("a", "changed")
        assert frame is anim.frames[0]
        assert [n.id for n in frame.nodes] == ["a"]
        assert frame.nodes[0].x == 0
        assert frame.nodes[0].label == ""
        assert calls == [(0, 1)]

    def test_snap_does_not_steal_surface(self, surface):
        """Test snapping leaves the source graph attached."""
        g = make_graph("a", attach=True)
        Animator().snap(g)
        assert g.is_active


class TestObservers:
    """Test listener subscription and notification fan-out."""
    def test_subscription_order_and_unsubscribe(self, frames):
        """Test listeners run in subscription order and can unsubscribe."""
        anim = Animator(frames)
        seen = []
        anim.subscribe(lambda s, t: seen.append(("first", s)))
        unsubscribe = anim.subscribe(lambda s, t: seen.append(("second", s)))
        anim.goto(1)
        assert seen == [("first", 1), ("second", 1)]
        unsubscribe()
        anim.goto(2)
        assert seen[-1] == ("first", 2)
        assert len(seen) == 3

    def test_unsubscribe_unknown_listener(self):
        """Test unsubscribing an unknown listener returns False."""
        assert Animator().unsubscribe(lambda s, t: None) is False

    def test_reentrant_listener(self, frames):
        """Test a listener may navigate the animator from inside a notification."""
        anim = Animator(frames)
        seen = []

        def advance(step, total):
            seen.append(step)
            if step < total - 1:
                anim.next()

        anim.subscribe(advance)
        anim.first()
        assert seen == [0, 1, 2]
        assert anim.step == 2
