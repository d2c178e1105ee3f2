"""
Tests Package.

This package contains test suites for the anigraph implementation, covering
the entity model, layout engine, reconciliation, the graph controller, the
animator state machine, the viz bindings and the optional Manim backend.
"""

# Tests Package
