from __future__ import annotations

import argparse
from typing import Type

from manim import config as manim_config

from anigraph_core.demos import DEMOS, build_demo
from anigraph_core.surface import register_surface

from anigraph_anim.scenes.animator_scene import SELECTOR, AnimatorScene


def render_scene(scene_cls: Type[AnimatorScene], demo: str = "bfs", quality: str = "ql", preview: bool = True, time_scale: float = 1.0):
    register_surface(SELECTOR)
    animator = build_demo(demo, SELECTOR)

    # Configure manim (quality shortcuts)
    if quality == "ql":
        manim_config.quality = "low_quality"
    elif quality == "qh":
        manim_config.quality = "high_quality"
    else:
        manim_config.quality = quality
    manim_config.preview = preview

    scene = scene_cls()
    setattr(scene, "_animator", animator)
    setattr(scene, "_time_scale", float(time_scale))
    scene.render()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render an anigraph animation with Manim")
    parser.add_argument("--demo", default="bfs", choices=DEMOS)
    parser.add_argument("--quality", default="ql", help="manim quality: ql/qh")
    parser.add_argument("--preview", action="store_true")
    parser.add_argument("--time-scale", type=float, default=1.0)
    args = parser.parse_args(argv)

    render_scene(AnimatorScene, args.demo, quality=args.quality, preview=args.preview, time_scale=args.time_scale)


if __name__ == "__main__":  # pragma: no cover
    main()
