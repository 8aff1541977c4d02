from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, List

import streamlit as st

WORKSPACE_ROOT = Path(__file__).resolve().parent
if str(WORKSPACE_ROOT) not in sys.path:
    sys.path.insert(0, str(WORKSPACE_ROOT))

from collage.state import LayoutConfig
from collage.workflow import CollageSession, initialize_state
from placement_engine import DEFAULT_MARGIN, DEFAULT_MAX_ATTEMPTS, OVERSIZE_POLICIES


INPUT_ROOT = WORKSPACE_ROOT / "input"
OUTPUT_ROOT = WORKSPACE_ROOT / "output_collage"


def _list_item_folders() -> List[str]:
    if not INPUT_ROOT.exists():
        return []
    return sorted(p.name for p in INPUT_ROOT.iterdir() if p.is_dir())


def _sidebar_controls() -> Dict[str, object]:
    with st.sidebar:
        st.header("Container")
        col1, col2 = st.columns([1, 1])
        with col1:
            width = st.number_input("Width", min_value=0, max_value=8000, value=1200)
        with col2:
            height = st.number_input("Height", min_value=0, max_value=8000, value=800)

        st.header("Placement")
        margin = st.slider("Margin", min_value=0.0, max_value=200.0, value=float(DEFAULT_MARGIN), step=1.0)
        max_attempts = st.slider("Max attempts", min_value=1, max_value=500, value=DEFAULT_MAX_ATTEMPTS)
        oversize = st.radio("Oversize images", options=list(OVERSIZE_POLICIES), index=0)
        scale = st.slider("Image scale", min_value=0.05, max_value=2.0, value=1.0, step=0.05)
        seed_text = st.text_input("Seed", value="", help="Leave empty for a fresh random layout.")
        background = st.text_input("Background colour", value="#ffffff")
    seed = int(seed_text) if seed_text.strip().lstrip("-").isdigit() else None
    return {
        "size": (float(width), float(height)),
        "config": LayoutConfig(
            margin=margin,
            max_attempts=int(max_attempts),
            oversize=oversize,
            scale=scale,
            seed=seed,
            background=background.strip() or "#ffffff",
        ),
    }


def _display_pass(session: CollageSession) -> None:
    state = session.state
    st.subheader(f"Pass {state.generation:02d} ({state.trigger})")
    if state.current_composite_path and state.current_composite_path.exists():
        st.image(str(state.current_composite_path), caption=state.current_composite_path.name)
    for message in state.warnings:
        st.warning(message)
    if state.current_layout_path and state.current_layout_path.exists():
        with st.expander("Placements JSON"):
            st.json(json.loads(state.current_layout_path.read_text(encoding="utf-8")), expanded=False)
    css_path = state.get_pass_dir() / "collage.css"
    if css_path.exists():
        with st.expander("Collage CSS"):
            st.code(css_path.read_text(encoding="utf-8"), language="css")


def main() -> None:
    st.set_page_config(page_title="Collage Layout", layout="wide")
    st.title("Collage Layout")

    folders = _list_item_folders()
    if not folders:
        st.error("No image folders found in 'input/' directory.")
        return

    controls = _sidebar_controls()
    selected = st.selectbox("Image folder", folders)

    session: CollageSession | None = st.session_state.get("session")
    run_col, resize_col = st.columns([1, 1])
    with run_col:
        if st.button("Lay out"):
            try:
                state = initialize_state(
                    INPUT_ROOT / selected,
                    OUTPUT_ROOT,
                    controls["size"],
                    config=controls["config"],
                )
                session = CollageSession(state)
                session.on_ready()
                st.session_state["session"] = session
            except Exception as exc:
                st.error(f"Layout failed: {exc}")
    with resize_col:
        if st.button("Apply container size", disabled=session is None):
            try:
                session.state.config = controls["config"]
                session.on_resize(*controls["size"])
            except Exception as exc:
                st.error(f"Re-layout failed: {exc}")

    if session is not None:
        _display_pass(session)
    else:
        st.info("Pick a folder and click 'Lay out'.")


if __name__ == "__main__":
    main()
