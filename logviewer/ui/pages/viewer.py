
import datetime
import hashlib
import os
import anyio
import streamlit as st
from humanize import naturalsize

from logviewer.core.errors import LogViewerError
from logviewer.core.host import CANCEL, PROCEED
from logviewer.core.pipeline import DecodePipeline
from logviewer.services import sources_service
from logviewer.ui.components import detail_panel
from logviewer.ui.state import AppState
from logviewer.ui.streamlit_host import StreamlitHost

ANSWERS_KEY = "consent_answers"
SELECTED_KEY = "selected_artifact_path"
HASH_KEY = "hash_artifact_path"


def render(app_state: AppState):
    st.title("Viewer")

    settings = app_state.settings
    browse_dir = settings.browse_dir

    if not browse_dir:
        st.warning("`paths.browse_dir` is not configured.")
        return

    if not os.path.exists(browse_dir):
        st.error(f"Browse directory not found: `{browse_dir}`")
        return

    with st.sidebar:
        st.subheader("Filter")
        search_term = st.text_input("Search files", placeholder="filename...")

    artifacts = sources_service.list_artifacts(browse_dir, search_term)

    if not artifacts:
        st.info("No .xz or .tar.xz files found.")
        return

    col_list, col_view = st.columns([2, 5])

    # --- Left: List ---
    with col_list:
        st.caption(f"Found {len(artifacts)} items")
        for art in artifacts:
            safe_key = hashlib.md5(art.path.encode("utf-8")).hexdigest()
            modified = datetime.datetime.fromtimestamp(art.mtime).isoformat(timespec="seconds")
            st.markdown(f"**{art.name}**  \n{art.kind} | {naturalsize(art.size, binary=True)} | {modified}")
            if st.button("Open", key=f"open_{safe_key}"):
                st.session_state[SELECTED_KEY] = art.path
                st.session_state[ANSWERS_KEY] = {}
            st.divider()

    # --- Right: Document ---
    with col_view:
        selected = st.session_state.get(SELECTED_KEY)
        if not selected:
            st.info("Select a file to open it.")
            return
        _render_details(selected)
        _open(app_state, selected)


def _open(app_state: AppState, path: str):
    answers = st.session_state.setdefault(ANSWERS_KEY, {})
    host = StreamlitHost(answers)
    pipeline = DecodePipeline(host, app_state.settings, registry=app_state.registry)

    try:
        with st.spinner(f"Decompressing {os.path.basename(path)}..."):
            result = anyio.run(pipeline.open, path)
    except LogViewerError:
        # StreamlitHost.notify_error already rendered the message
        return

    if result.output_path:
        # Done; a rerun must not offload (or prompt to overwrite) again
        st.session_state.pop(SELECTED_KEY, None)
        st.session_state[ANSWERS_KEY] = {}
    elif result.cancelled and host.pending:
        _render_prompt(host.pending[0])
    elif result.cancelled:
        st.info("Cancelled.")


def _render_prompt(message: str):
    st.warning(message)
    c1, c2 = st.columns(2)
    if c1.button(PROCEED, type="primary"):
        st.session_state[ANSWERS_KEY][message] = PROCEED
        st.rerun()
    if c2.button(CANCEL):
        st.session_state.pop(SELECTED_KEY, None)
        st.session_state[ANSWERS_KEY] = {}
        st.rerun()


def details_summary(details) -> dict:
    summary = {
        "name": details.name,
        "path": details.path,
        "kind": details.kind,
        "size": naturalsize(details.size, binary=True),
        "modified": datetime.datetime.fromtimestamp(details.mtime).isoformat(timespec="seconds"),
    }
    if details.hash:
        summary["sha256"] = details.hash
    return summary


def _render_details(path: str):
    with st.expander("File details"):
        compute_hash = st.session_state.get(HASH_KEY) == path
        if not compute_hash and st.button("Compute SHA-256"):
            st.session_state[HASH_KEY] = path
            compute_hash = True
        try:
            details = sources_service.get_artifact_details(path, compute_hash=compute_hash)
        except OSError as e:
            st.error(f"Cannot read {path}: {e}")
            return
        detail_panel.render(details_summary(details), title=details.name)
