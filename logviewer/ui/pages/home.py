
import streamlit as st
from humanize import naturalsize
from logviewer.ui.state import AppState
from logviewer.ui.components import detail_panel


def render(app_state: AppState):
    st.title("XZ Log Viewer")

    # --- Status Section ---
    st.header("System Status")

    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Environment", app_state.env)

    with col2:
        cfg_status = app_state.config.get("status", "UNKNOWN")
        st.metric("Config", cfg_status)
        if cfg_status == "ERROR":
            st.error(f"Config Error: {app_state.config.get('error')}")

    with col3:
        st.metric("Open views", app_state.registry.live_count())

    st.divider()

    settings = app_state.settings
    detail_panel.render({
        "Config file": app_state.config.get("config_path"),
        "Config source": app_state.config.get("source"),
        "Offload threshold": f"{settings.threshold_bytes} bytes ({naturalsize(settings.threshold_bytes, binary=True)})",
        "Binary entries": settings.binary_entries.value,
        "Browse directory": settings.browse_dir,
        "Logs directory": settings.logs_dir,
    }, "Viewer Settings")
