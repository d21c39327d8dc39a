from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper for the generation pipeline: coerces the raw configuration
dictionary (from a JSON file or CLI overrides) into strictly typed values
and fills missing keys with domain defaults.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from projectfiles.domain.config import get_default_config
from projectfiles.domain.generation_models import language_major_version

logger = logging.getLogger(__name__)

_TRUE_WORDS = ("true", "1", "yes", "y", "on", "enable")
_FALSE_WORDS = ("false", "0", "no", "n", "off", "disable")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise TypeError on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = [
        "project_file", "solution_file", "output_dir", "build_options_file",
        "language_version", "log_file",
    ]
    bool_fields = ["generate_paths", "print_output"]

    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    merged["implicit_usings"] = _as_optional_bool(
        merged.get("implicit_usings"), "implicit_usings", warnings, strict
    )

    version = merged["language_version"]
    if version and language_major_version(version) == -1:
        warnings.append(
            f"Unrecognized language_version '{version}'; generation will be refused."
        )

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in _TRUE_WORDS:
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in _FALSE_WORDS:
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_bool(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[bool]:
    """Like _as_bool, but None (and blank strings) stay unset."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return _as_bool(value, None, field, warnings, strict)  # type: ignore[arg-type]
