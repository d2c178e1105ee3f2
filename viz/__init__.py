"""
Visualization Package.

This package binds anigraph animations to interactive front-ends: a
toolkit-agnostic slider binding, a Cytoscape element builder and a Streamlit
demo that steps through a recorded graph walk.
"""

# Visualization Package
