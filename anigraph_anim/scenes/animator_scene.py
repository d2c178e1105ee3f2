from __future__ import annotations

from typing import Dict, List

from manim import Animation, FadeIn, FadeOut, MovingCameraScene, Transform, VGroup

from anigraph_core.animator import Animator
from anigraph_core.demos import build_demo
from anigraph_core.surface import register_surface

from anigraph_anim.utils.mobjects import UNIT_SCALE, scene_to_mobjects

SELECTOR = "#manim"


class AnimatorScene(MovingCameraScene):
    """Plays each frame of an `Animator`, morphing surviving elements."""

    def construct(self):
        animator: Animator | None = getattr(self, "_animator", None)
        if animator is None:
            register_surface(SELECTOR)
            animator = build_demo(getattr(self, "_demo", "bfs"), SELECTOR)
        time_scale = float(getattr(self, "_time_scale", 1.0))
        self.play_animator(animator, step_duration=0.8 * time_scale)

    def frame_transitions(self, current: Dict[str, VGroup], incoming: Dict[str, VGroup]) -> List[Animation]:
        anims: List[Animation] = []
        for key, mob in incoming.items():
            if key in current:
                anims.append(Transform(current[key], mob))
            else:
                anims.append(FadeIn(mob))
        for key, mob in current.items():
            if key not in incoming:
                anims.append(FadeOut(mob))
        return anims

    def play_animator(self, animator: Animator, step_duration: float = 0.8) -> None:
        shown: Dict[str, VGroup] = {}
        for i in range(animator.steps()):
            animator.goto(i)
            frame = animator.current
            incoming = scene_to_mobjects(frame.scene, frame.style.node_radius, UNIT_SCALE)
            anims = self.frame_transitions(shown, incoming)
            if anims:
                self.play(*anims, run_time=step_duration)
            else:
                self.wait(step_duration)
            # Transform keeps the on-screen mobject; new keys become on-screen as-is
            shown = {key: shown.get(key, mob) for key, mob in incoming.items()}
