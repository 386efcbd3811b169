
from abc import ABC, abstractmethod
from typing import Optional, Sequence

PROCEED = "Proceed"
CANCEL = "Cancel"


class HostSurface(ABC):
    """
    What the decode pipeline needs from whoever renders it (terminal, Streamlit, tests).
    Rendering and prompt UI live entirely on the host side.
    """

    @abstractmethod
    async def show(self, title: str, text: str) -> str:
        """
        Render text as a read-only document.
        Returns an identifier for the opened view.
        """

    @abstractmethod
    async def confirm(self, message: str, options: Sequence[str]) -> Optional[str]:
        """
        Ask the user to pick one of options.
        Anything other than PROCEED (including None) means cancel.
        """

    async def notify(self, message: str) -> None:
        pass

    async def notify_error(self, message: str) -> None:
        pass
