"""
Frame-by-frame playback of graph snapshots.

An `Animator` keeps an append-only list of `Graph` frames and a cursor.
Moving the cursor detaches the outgoing frame, attaches the incoming one and
notifies every subscriber with ``(step, total)``.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from .graph import Graph

logger = logging.getLogger(__name__)

Listener = Callable[[int, int], None]


class Animator:
    """
    Stores graph frames and navigates between them.

    Attributes:
        frames: Ordered frames; `insert` keeps live references, `snap` stores
            deep copies
        step: Cursor into `frames`
    """

    def __init__(self, frames: Optional[Iterable[Graph]] = None):
        self.frames: List[Graph] = list(frames or [])
        self.step = 0
        self._listeners: List[Listener] = []

        # Make the first frame render-ready without attaching it
        if self.frames:
            self.frames[0].update()

    def steps(self) -> int:
        """Number of frames."""
        return len(self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    def get_step(self) -> int:
        return self.step

    @property
    def current(self) -> Optional[Graph]:
        if not self.frames:
            return None
        return self.frames[self.step]

    # ----- recording -----
    def insert(self, graph: Graph) -> None:
        """Append `graph` itself; later mutations of it show up in this frame."""
        self.frames.append(graph)
        self.notify()

    def snap(self, graph: Graph) -> Graph:
        """Append a deep copy of `graph`'s current state and return it."""
        frame = graph.clone(deep=True)
        self.frames.append(frame)
        self.notify()
        return frame

    # ----- navigation -----
    def goto(self, step: int) -> bool:
        """
        Move the cursor to `step`.

        Returns:
            False, with no state change or notification, if `step` is outside
            ``[0, len(frames))``; True otherwise.
        """
        if not 0 <= step < len(self.frames):
            logger.debug("Ignoring goto(%s): %d frame(s)", step, len(self.frames))
            return False

        outgoing = self.frames[self.step] if self.step < len(self.frames) else None
        incoming = self.frames[step]
        if outgoing is not None and outgoing is not incoming:
            outgoing.deactivate()

        self.step = step
        incoming.activate()
        self.notify()
        return True

    def next(self) -> bool:
        return self.goto(self.step + 1)

    def prev(self) -> bool:
        return self.goto(self.step - 1)

    def first(self) -> bool:
        return self.goto(0)

    def last(self) -> bool:
        return self.goto(len(self.frames) - 1)

    # ----- observers -----
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener(step, total)`; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: Listener) -> bool:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def notify(self) -> None:
        """Call every listener, in subscription order, with ``(step, total)``."""
        total = len(self.frames)
        for listener in list(self._listeners):
            listener(self.step, total)
