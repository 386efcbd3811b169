
import streamlit as st
from logviewer.core.bindings import ViewBindingRegistry
from logviewer.core.config_loader import load_config
from logviewer.core.settings import ViewerSettings


@st.cache_resource
def get_registry() -> ViewBindingRegistry:
    """
    One binding registry per process, shared by every session.
    """
    return ViewBindingRegistry()


class AppState:
    def __init__(self):
        # Load config only once per session
        if "app_config" not in st.session_state:
            st.session_state.app_config = load_config()

        self.config = st.session_state.app_config
        self.registry = get_registry()

    @property
    def env(self) -> str:
        return self.config.get("env", "UNKNOWN")

    @property
    def settings(self) -> ViewerSettings:
        return self.config.get("settings") or ViewerSettings()


def init_app_state() -> AppState:
    return AppState()
