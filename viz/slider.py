"""
Range-input binding for an `Animator`.

The slider is UI-toolkit agnostic: it holds the state a range input needs
(min, max, value, label text) and keeps it in sync with the animator through
`subscribe`. Front-ends call `on_input` when the user drags the handle.
"""

from __future__ import annotations

from typing import Optional

from anigraph_core.animator import Animator


class Slider:
    def __init__(self, animator: Animator, selector: Optional[str] = None):
        self.animator = animator
        self.selector = selector
        self.min = 0
        self.max = max(0, animator.steps() - 1)
        self.value = animator.get_step()
        self.label = ""
        self._update_label()
        self._unsubscribe = animator.subscribe(self._on_change)

    def on_input(self, value) -> bool:
        """Handle a user-driven value change; the subscription refreshes state."""
        return self.animator.goto(int(value))

    def _on_change(self, step: int, total: int) -> None:
        self.max = max(0, total - 1)
        self.value = step
        self._update_label()

    def _update_label(self) -> None:
        self.label = f"Step: {self.animator.get_step()} / {self.animator.steps() - 1}"

    def dispose(self) -> None:
        """Stop tracking the animator."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
