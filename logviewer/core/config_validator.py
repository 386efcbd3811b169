
from pathlib import Path
from typing import Dict, Any, List
import logging

from logviewer.core.decoders.models import BinaryEntryPolicy

logger = logging.getLogger(__name__)


class ConfigValidator:
    """
    Validates configuration structure and types.
    Returns a list of human readable errors, empty when the config is usable.
    """

    @staticmethod
    def validate(config: Dict[str, Any]) -> List[str]:
        errors = []

        # 1. Top-Level Sections
        if "viewer" not in config:
            errors.append("Missing required section: 'viewer'")

        # 2. Viewer checks
        viewer = config.get("viewer", {})
        if not isinstance(viewer, dict):
            errors.append("'viewer' must be a dictionary")
        else:
            threshold = viewer.get("threshold_bytes")
            if threshold is not None:
                # bool is an int subclass, reject it explicitly
                if isinstance(threshold, bool) or not isinstance(threshold, int):
                    errors.append(f"Field 'threshold_bytes' must be integer, got {type(threshold).__name__}")
                elif threshold <= 0:
                    errors.append(f"Field 'threshold_bytes' must be positive, got {threshold}")

            policy = viewer.get("binary_entries")
            allowed = [p.value for p in BinaryEntryPolicy]
            if policy is not None and policy not in allowed:
                errors.append(f"Field 'binary_entries' must be one of {allowed}, got {policy!r}")

        # 3. Paths checks (optional section)
        paths = config.get("paths", {})
        if not isinstance(paths, dict):
            errors.append("'paths' must be a dictionary")
        else:
            for p in ["browse_dir", "logs_dir"]:
                if p not in paths:
                    continue
                val = paths[p]
                if not isinstance(val, str):
                    errors.append(f"'paths.{p}' must be a string")
                    continue

                if p == "logs_dir":
                    try:
                        path_obj = Path(val)
                        if not path_obj.exists():
                            path_obj.mkdir(parents=True, exist_ok=True)
                    except OSError as e:
                        errors.append(f"Path 'paths.{p}' ({val}) is invalid or not creatable: {e}")

        if errors:
            logger.error(f"Config Validation Failed: {errors}")
        else:
            logger.info("Config OK: viewer=%s", viewer)

        return errors
