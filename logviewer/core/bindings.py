
import enum
import logging
import threading
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Optional

from logviewer.core.errors import BindingBusyError

logger = logging.getLogger(__name__)


class BindingStatus(str, enum.Enum):
    PENDING = "pending"
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class ViewBinding:
    source_path: str
    view_id: Optional[str] = None
    status: BindingStatus = BindingStatus.PENDING

    @property
    def is_live(self) -> bool:
        return self.status is not BindingStatus.CLOSED


class ViewBindingRegistry:
    """
    Keyed lookup of the live view per source path.
    At most one binding per path is non-closed at any time; a second
    registration for a busy path is rejected rather than coalesced.
    """

    def __init__(self):
        self._bindings: Dict[str, ViewBinding] = {}
        # Streamlit reruns scripts on worker threads, so guard with a real lock
        self._lock = threading.Lock()

    def register(self, source_path: str) -> ViewBinding:
        with self._lock:
            current = self._bindings.get(source_path)
            if current is not None and current.is_live:
                raise BindingBusyError(source_path)
            binding = ViewBinding(source_path=source_path)
            self._bindings[source_path] = binding
        logger.debug(f"Binding registered: {source_path}")
        return binding

    def mark_open(self, binding: ViewBinding, view_id: str):
        with self._lock:
            if binding.status is BindingStatus.CLOSED:
                raise ValueError(f"Binding for {binding.source_path} is already closed")
            binding.view_id = view_id
            binding.status = BindingStatus.OPEN

    def close(self, binding: ViewBinding):
        with self._lock:
            binding.status = BindingStatus.CLOSED
            if self._bindings.get(binding.source_path) is binding:
                del self._bindings[binding.source_path]
        logger.debug(f"Binding closed: {binding.source_path}")

    def get(self, source_path: str) -> Optional[ViewBinding]:
        with self._lock:
            return self._bindings.get(source_path)

    def is_live(self, source_path: str) -> bool:
        binding = self.get(source_path)
        return binding is not None and binding.is_live

    def live_count(self) -> int:
        with self._lock:
            return sum(1 for b in self._bindings.values() if b.is_live)

    @asynccontextmanager
    async def bind(self, source_path: str) -> AsyncIterator[ViewBinding]:
        """
        Holds a binding for the duration of one decode invocation.
        Closed on every exit path: success, cancellation or error.
        """
        binding = self.register(source_path)
        try:
            yield binding
        finally:
            self.close(binding)
