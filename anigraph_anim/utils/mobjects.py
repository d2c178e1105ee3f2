from __future__ import annotations

import re
from typing import Dict, Tuple

from manim import Arrow, Circle, Line, Text, VGroup, WHITE, YELLOW, GREY_B

from anigraph_core.surface import Element, Scene

# Scene units per Manim unit; scene y grows downward
UNIT_SCALE = 50.0

_TRANSLATE = re.compile(r"translate\(\s*([-+\d.eE]+)\s*,\s*([-+\d.eE]+)\s*\)")


def to_manim_point(x: float, y: float, scale: float = UNIT_SCALE) -> Tuple[float, float, float]:
    return (float(x) / scale, -float(y) / scale, 0.0)


def parse_translate(transform: str | None) -> Tuple[float, float]:
    if not transform:
        return (0.0, 0.0)
    m = _TRANSLATE.search(transform)
    if m is None:
        return (0.0, 0.0)
    return (float(m.group(1)), float(m.group(2)))


def node_mobject(el: Element, radius: float, scale: float = UNIT_SCALE) -> VGroup:
    x, y = parse_translate(el.attr("transform"))
    center = to_manim_point(x, y, scale)
    color = YELLOW if el.has_class("highlighted") else WHITE
    r = radius / scale

    shape = Circle(radius=r, color=color, stroke_width=3)
    shape.move_to(center)
    group = VGroup(shape)

    name = el.select("name")
    if name is not None and name.text:
        text = Text(name.text, font_size=14, color=color)
        text.move_to(center)
        group.add(text)

    label = el.select("label")
    if label is not None and label.text:
        lbl = Text(label.text, font_size=12, color=GREY_B)
        lbl.next_to(shape, direction=(0, 1, 0), buff=0.05)
        group.add(lbl)
    return group


def edge_mobject(el: Element, scale: float = UNIT_SCALE) -> VGroup:
    line = el.select("edge-line")
    start = to_manim_point(line.attr("x1"), line.attr("y1"), scale)
    end = to_manim_point(line.attr("x2"), line.attr("y2"), scale)
    color = YELLOW if el.has_class("highlighted") else GREY_B

    if el.has_class("directed"):
        mob = Arrow(start, end, buff=0.0, stroke_width=2, color=color, tip_length=0.12)
    else:
        mob = Line(start, end, stroke_width=2, color=color)
    group = VGroup(mob)

    label = el.select("edge-label")
    if label is not None and label.text:
        txt = Text(label.text, font_size=10, color=color)
        txt.move_to(to_manim_point(label.attr("x"), label.attr("y"), scale))
        group.add(txt)
    return group


def scene_to_mobjects(scene: Scene, radius: float, scale: float = UNIT_SCALE) -> Dict[str, VGroup]:
    """Map every keyed element of a reconciled scene to a mobject.

    Keys are prefixed with ``edge:`` or ``node:`` so both spaces can share
    one dict.
    """
    mobs: Dict[str, VGroup] = {}
    for key, el in scene.links.keyed_children().items():
        mobs[f"edge:{key}"] = edge_mobject(el, scale)
    for key, el in scene.nodes.keyed_children().items():
        mobs[f"node:{key}"] = node_mobject(el, radius, scale)
    return mobs
