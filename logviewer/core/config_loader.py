
import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any

from logviewer.core.config_validator import ConfigValidator
from logviewer.core.settings import ViewerSettings

logger = logging.getLogger(__name__)


def load_config() -> Dict[str, Any]:
    """
    Loads configuration from YAML files and environment variables.
    Returns a dictionary with configuration and status metadata; never raises.
    """
    config_status = {
        "status": "OK",
        "error": None,
        "env": get_env(),
        "config_path": None,
        "data": {},
        "settings": ViewerSettings(),
    }

    # --- 1. Read Overrides from ENV ---
    env_override_file = os.environ.get("LOG_VIEWER_CONFIG_FILE")
    env_override_dir = os.environ.get("LOG_VIEWER_CONFIG_DIR")
    env = config_status["env"]

    # --- 2. Determine Config Directory and Files ---
    if env_override_file:
        config_path = Path(env_override_file)
        config_dir = config_path.parent
        files_to_load = [config_path]
        config_status["config_path"] = str(config_path)
        config_status["source"] = "ENV_FILE (LOG_VIEWER_CONFIG_FILE)"
    elif env_override_dir:
        config_dir = Path(env_override_dir)
        files_to_load = [
            config_dir / "general.yaml",
            config_dir / f"{env.lower()}.yaml"
        ]
        config_status["source"] = "ENV_DIR (LOG_VIEWER_CONFIG_DIR)"
    else:
        project_root = Path(__file__).parent.parent.parent
        config_dir = project_root / "config"
        files_to_load = [
            config_dir / "general.yaml",
            config_dir / f"{env.lower()}.yaml"
        ]
        config_status["source"] = "DEFAULT (repo/site-packages)"

    # --- 3. Load Configs ---
    loaded_config = {}
    files_found = 0

    try:
        for file_path in files_to_load:
            if file_path.exists():
                files_found += 1
                if not env_override_file:
                    config_status["config_path"] = str(file_path)

                with open(file_path, "r", encoding="utf-8") as f:
                    loaded_config.update(yaml.safe_load(f) or {})

        if files_found == 0:
            config_status["status"] = "ERROR"
            config_status["error"] = f"No config files found in {config_dir} (tried: {[str(f) for f in files_to_load]})"
            return config_status

        # --- 3b. Backward Compatibility ---
        # Top-level 'threshold_bytes' moves to 'viewer.threshold_bytes' unless that is set.
        if "threshold_bytes" in loaded_config:
            val = loaded_config.pop("threshold_bytes")
            viewer = loaded_config.setdefault("viewer", {})
            if isinstance(viewer, dict) and "threshold_bytes" not in viewer:
                viewer["threshold_bytes"] = val
                logger.warning("DEPRECATED: Top-level 'threshold_bytes' found. Mapped to 'viewer.threshold_bytes'.")
            else:
                logger.info("Ignoring top-level 'threshold_bytes' because 'viewer.threshold_bytes' is set.")

        # --- 3c. Resolve relative paths against the config dir ---
        paths = loaded_config.get("paths")
        if isinstance(paths, dict):
            for key in ("browse_dir", "logs_dir"):
                raw = paths.get(key)
                if isinstance(raw, str) and raw and not Path(raw).is_absolute():
                    paths[key] = str(config_dir / raw)

        # --- 4. Validation ---
        validation_errors = ConfigValidator.validate(loaded_config)
        config_status["data"] = loaded_config
        if validation_errors:
            config_status["status"] = "ERROR"
            config_status["error"] = "Invalid Configuration:\n" + "\n".join(validation_errors)
            return config_status

        config_status["settings"] = ViewerSettings.from_config(loaded_config)
        settings = config_status["settings"]
        logger.info(f"Config Loaded: threshold_bytes={settings.threshold_bytes}, binary_entries={settings.binary_entries.value}")

    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        config_status["status"] = "ERROR"
        config_status["error"] = str(e)

    return config_status


def get_env() -> str:
    """
    Detects the current environment.
    Checks LOG_VIEWER_ENV, defaults to DEV.
    """
    return os.environ.get("LOG_VIEWER_ENV", "DEV").upper()
