"""
Shared fixtures: a registered host surface per test and a clean style env.
"""

import pytest

from anigraph_core.config import ENV_VARS, STYLE_FILE_VAR, GraphStyle
from anigraph_core.surface import register_surface, unregister_surface

SELECTOR = "#test-graph"


@pytest.fixture(autouse=True)
def clean_style_env(monkeypatch):
    for var in list(ENV_VARS.values()) + [STYLE_FILE_VAR]:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def surface():
    s = register_surface(SELECTOR)
    s.clear()
    yield s
    unregister_surface(SELECTOR)


@pytest.fixture
def style():
    return GraphStyle()
