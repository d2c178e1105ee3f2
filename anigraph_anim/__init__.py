"""
anigraph + Manim integration package.

This package provides:
- Conversion of reconciled scenes into Manim mobjects
- A scene that plays every frame of an `Animator` with transforms
- A small render runner for the bundled demos
"""

__all__ = [
    # Subpackages will be imported lazily by users
]
