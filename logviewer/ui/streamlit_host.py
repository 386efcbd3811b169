
import uuid
import streamlit as st
from typing import Dict, List, Optional, Sequence

from logviewer.core.host import HostSurface


class StreamlitHost(HostSurface):
    """
    Host surface for the Streamlit viewer page.

    Streamlit cannot block on a prompt, so confirm() answers from the
    choices already stored in st.session_state and otherwise records the
    prompt as pending and returns None (cancel). The page renders pending
    prompts as buttons; clicking one stores the answer and reruns.
    """

    def __init__(self, answers: Optional[Dict[str, str]] = None):
        self.answers = answers if answers is not None else {}
        self.pending: List[str] = []

    async def show(self, title: str, text: str) -> str:
        st.markdown(f"### {title}")
        st.code(text, language=None)
        return f"streamlit:{uuid.uuid4().hex[:8]}"

    async def confirm(self, message: str, options: Sequence[str]) -> Optional[str]:
        answer = self.answers.get(message)
        if answer is None:
            self.pending.append(message)
        return answer

    async def notify(self, message: str) -> None:
        st.success(message)

    async def notify_error(self, message: str) -> None:
        st.error(message)
