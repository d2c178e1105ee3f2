#!/usr/bin/env python3
"""
anigraph CLI

Usage modes:
- Default run: build a demo animation and print a per-frame summary
- Frames: write every frame as an SVG file (--out-dir)
- Stats: per-frame structure statistics computed with NetworkX
- Utility: list demos, show version, print the resolved style
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List

# Allow running as `python scripts/anigraph_cli.py` from the repo root
_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from anigraph_core.config import load_style  # noqa: E402
from anigraph_core.demos import DEMOS, build_demo, frame_statistics  # noqa: E402
from anigraph_core.surface import register_surface, unregister_surface  # noqa: E402

SELECTOR = "#cli"


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Build an anigraph demo animation and dump its frames",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")
    p.add_argument("--list-demos", action="store_true", help="List bundled demos and exit")
    p.add_argument("--show-style", action="store_true", help="Print the resolved style and exit")

    # Input
    p.add_argument("--demo", default="bfs", choices=DEMOS, help="Demo animation to build")
    p.add_argument("--style", type=str, default="", help="Optional YAML style file")

    # Output
    p.add_argument("--out-dir", type=str, default="", help="Write frame_NNN.svg files here")
    p.add_argument("--stats", action="store_true", help="Print per-frame statistics")

    return p.parse_args(argv)


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def write_frames(animator, out_dir: str) -> List[str]:
    os.makedirs(out_dir, exist_ok=True)
    paths = []
    for i, frame in enumerate(animator.frames):
        path = os.path.join(out_dir, f"frame_{i:03d}.svg")
        with open(path, "w", encoding="utf-8") as f:
            f.write(frame.to_svg())
        paths.append(path)
    return paths


def main(argv: List[str] | None = None) -> int:
    from anigraph_core import __version__ as anigraph_version

    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(anigraph_version)
        return 0

    if args.list_demos:
        print(json.dumps(list(DEMOS), indent=2))
        return 0

    style = load_style(args.style or None)
    if args.show_style:
        print(json.dumps(asdict(style), indent=2))
        return 0

    register_surface(SELECTOR)
    try:
        logging.info("Building demo %s", args.demo)
        animator = build_demo(args.demo, SELECTOR, style=style)

        if args.stats:
            print(json.dumps(frame_statistics(animator), indent=2))
            return 0

        summary: Dict[str, Any] = {
            "demo": args.demo,
            "frames": animator.steps(),
        }
        if args.out_dir:
            logging.info("Writing %d frame(s) to %s", animator.steps(), args.out_dir)
            summary["files"] = write_frames(animator, args.out_dir)
        print(json.dumps(summary, indent=2))
        return 0
    finally:
        unregister_surface(SELECTOR)


if __name__ == "__main__":
    raise SystemExit(main())
