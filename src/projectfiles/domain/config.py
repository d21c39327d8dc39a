from __future__ import annotations

"""
Configuration Domain Management.

Generation settings are a flat JSON dictionary. A project may keep one in
a 'projectfiles.json' beside its manifest; explicit CLI flags override it.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from projectfiles.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_CONFIG_FILE_NAME

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Empty paths are resolved later: the output directory against the
    project, the solution through discovery.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "project_file": "",
        "solution_file": "",
        "output_dir": "",
        "build_options_file": "",

        # Host settings (None: take the value from the build options or manifest)
        "implicit_usings": None,
        "language_version": "",

        # Output
        "generate_paths": True,
        "print_output": False,

        # Diagnostics
        "log_file": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config(path: str) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    Args:
        path: JSON file to read.

    Returns:
        Dict[str, Any]: The merged configuration, or defaults when the file
                        is missing or unreadable.
    """
    config = get_default_config()

    if not os.path.exists(path):
        logger.debug(f"Config file not found: {path}. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config {path}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file {path}. Using defaults.")
        return config

    data.pop("version", None)
    config.update(data)
    return config


def save_config(config: Dict[str, Any], path: str) -> bool:
    """
    Persist a configuration to disk, stamped with the schema version.

    Args:
        config: The configuration dictionary to save.
        path: Destination JSON file.

    Returns:
        bool: True if the file was written.
    """
    payload = dict(config)
    payload["version"] = CURRENT_CONFIG_VERSION
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False


def find_config_file(project_dir: str) -> Optional[str]:
    """Return the project-local config file, if there is one."""
    candidate = os.path.join(project_dir, DEFAULT_CONFIG_FILE_NAME)
    return candidate if os.path.isfile(candidate) else None
