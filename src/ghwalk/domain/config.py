from __future__ import annotations

"""
Walk Configuration Management.

Builds the dict-based session configuration from defaults, an optional
JSON file and environment variables, validates untrusted values coming
from the CLI, and converts the clean result into WalkOptions.
"""

import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ghwalk.domain.constants import (
    DEFAULT_API_URL,
    ENV_API_URL,
    ENV_REF,
    ENV_TOKEN,
    ENV_TOKEN_FALLBACK,
)
from ghwalk.domain.walk_models import WalkOptions

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Schema
# -----------------------------------------------------------------------------
_OPTIONAL_STR_FIELDS: Tuple[str, ...] = ("token", "ref")
_BOOL_FIELDS: Tuple[str, ...] = ("enable_file_detail", "reverse")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default walk configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Authentication & Addressing
        "token": None,
        "ref": None,
        "api_url": DEFAULT_API_URL,

        # Traversal
        "enable_file_detail": False,
        "reverse": False,

        # Runtime Constraints
        "timeout": None,
    }

# -----------------------------------------------------------------------------
# Sources
# -----------------------------------------------------------------------------

def load_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Read configuration overrides from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        Dict[str, Any]: Only the keys that were set.
    """
    env = os.environ if environ is None else environ
    out: Dict[str, Any] = {}

    token = env.get(ENV_TOKEN) or env.get(ENV_TOKEN_FALLBACK)
    if token:
        out["token"] = token
    if env.get(ENV_REF):
        out["ref"] = env[ENV_REF]
    if env.get(ENV_API_URL):
        out["api_url"] = env[ENV_API_URL]
    return out


def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load a JSON configuration file.

    Args:
        path: Filesystem path of the JSON document.

    Returns:
        Dict[str, Any]: Parsed object, or an empty dict if unreadable.
    """
    if not os.path.exists(path):
        logger.debug(f"Config file not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{path}': {e}. Ignoring it.")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Config file '{path}' does not hold a JSON object. Ignoring it.")
        return {}
    return data


def merge_config(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known, non-None override values into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def validate_config(config: Any, *, strict: bool = False) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a raw configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of coercing or falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    unknown = sorted(k for k in config if k not in defaults)
    for k in unknown:
        warnings.append(f"Unknown config key '{k}' discarded.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in _OPTIONAL_STR_FIELDS:
        merged[field] = _as_optional_str(merged.get(field), field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["api_url"] = (
        _as_optional_str(merged.get("api_url"), "api_url", warnings, strict) or DEFAULT_API_URL
    ).rstrip("/")
    merged["timeout"] = _as_timeout(merged.get("timeout"), warnings, strict)

    return merged, warnings


def build_walk_options(config: Mapping[str, Any]) -> WalkOptions:
    """Translate a validated configuration into WalkOptions."""
    return WalkOptions(
        token=config.get("token"),
        ref=config.get("ref"),
        enable_file_detail=bool(config.get("enable_file_detail", False)),
        reverse=bool(config.get("reverse", False)),
    )

# -----------------------------------------------------------------------------
# Private Helpers: Type Coercion
# -----------------------------------------------------------------------------

def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    """Empty strings collapse to None."""
    if value is None:
        return None
    if isinstance(value, str):
        v = value.strip()
        return v or None

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using None.")
    return None


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
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_timeout(value: Any, warnings: List[str], strict: bool) -> Optional[float]:
    """Positive number of seconds, or None for no deadline."""
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        msg = f"Invalid field 'timeout': expected number, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} No deadline applied.")
        return None

    if seconds <= 0:
        msg = f"Invalid field 'timeout': {value} is not positive."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} No deadline applied.")
        return None
    return seconds
