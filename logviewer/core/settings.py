
from dataclasses import dataclass
from typing import Any, Dict, Optional

from logviewer.core.decoders.models import BinaryEntryPolicy
from logviewer.core.materialization import DEFAULT_THRESHOLD_BYTES


@dataclass(frozen=True)
class ViewerSettings:
    threshold_bytes: int = DEFAULT_THRESHOLD_BYTES
    binary_entries: BinaryEntryPolicy = BinaryEntryPolicy.CONCAT
    browse_dir: Optional[str] = None
    logs_dir: Optional[str] = None

    @classmethod
    def from_config(cls, data: Optional[Dict[str, Any]]) -> "ViewerSettings":
        """
        Builds settings from the loaded YAML dict (the 'data' key of load_config()).
        Missing keys fall back to defaults; validation is ConfigValidator's job.
        """
        data = data or {}
        viewer = data.get("viewer") or {}
        paths = data.get("paths") or {}
        return cls(
            threshold_bytes=viewer.get("threshold_bytes", DEFAULT_THRESHOLD_BYTES),
            binary_entries=BinaryEntryPolicy(viewer.get("binary_entries", BinaryEntryPolicy.CONCAT.value)),
            browse_dir=paths.get("browse_dir"),
            logs_dir=paths.get("logs_dir"),
        )
