"""
Streamlit playback interface for anigraph animations.

Pick a demo, then scrub through its frames with the timeline slider or the
step buttons. The active frame is rendered from its reconciled scene as SVG,
and the sidebar lists which nodes and edges are highlighted in that frame.

Run with: ``streamlit run viz/app_streamlit.py``
"""

import os
import sys

# Add project root to Python path BEFORE any imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import streamlit as st

from anigraph_core.demos import DEMOS, build_demo
from anigraph_core.surface import get_surface, register_surface
from viz.slider import Slider

SELECTOR = "#streamlit-graph"

st.set_page_config(layout="wide", page_title="anigraph Demo")


def load_animation(demo: str):
    """Build a fresh animator for `demo` and bind a slider to it."""
    register_surface(SELECTOR)
    animator = build_demo(demo, SELECTOR)
    slider = Slider(animator, selector=SELECTOR)
    animator.first()
    return animator, slider


with st.sidebar:
    st.header("Animation")
    demo = st.selectbox("Demo", DEMOS, index=0)
    if st.session_state.get("demo") != demo or "animator" not in st.session_state:
        st.session_state.animator, st.session_state.slider = load_animation(demo)
        st.session_state.demo = demo

animator = st.session_state.animator
slider = st.session_state.slider

cols = st.columns(4)
if cols[0].button("First"):
    animator.first()
if cols[1].button("Prev"):
    animator.prev()
if cols[2].button("Next"):
    animator.next()
if cols[3].button("Last"):
    animator.last()

if slider.max > 0:
    picked = st.slider("Timeline", slider.min, slider.max, slider.value)
    if picked != slider.value:
        slider.on_input(picked)

st.caption(slider.label)
st.markdown(get_surface(SELECTOR).to_svg(), unsafe_allow_html=True)

frame = animator.current
if frame is not None:
    with st.sidebar:
        st.subheader("Highlighted")
        st.write({"nodes": sorted(frame.highlighted_nodes), "edges": sorted(frame.highlighted_edges)})
