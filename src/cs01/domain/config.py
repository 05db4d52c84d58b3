from __future__ import annotations

"""
User Settings Management.

Handles the persisted defaults of the CLI (initial branch, bare mode,
layout template, directory permissions, log level) stored as JSON in the
user data directory, and the validation applied before they are used.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from cs01.domain.constants import DEFAULT_BRANCH, DEFAULT_DIR_PERMS
from cs01.domain.errors import ValidationError
from cs01.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"
CURRENT_SETTINGS_VERSION = "1.0.0"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

def get_settings_path() -> str:
    """Absolute path of the settings file."""
    return os.path.join(get_user_data_dir(), SETTINGS_FILE_NAME)


def get_default_settings() -> Dict[str, Any]:
    """
    Generate the default settings used when nothing is persisted.

    Returns:
        Dict[str, Any]: Default values.
    """
    return {
        "initial_branch": DEFAULT_BRANCH,
        "bare": False,
        "extended_layout": False,
        "dir_perms": DEFAULT_DIR_PERMS,
        "log_level": "INFO",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load persisted settings merged over the defaults.

    A missing, unreadable or corrupted file yields the defaults.

    Args:
        path: Settings file (default: get_settings_path()).
    """
    path = path or get_settings_path()
    settings = get_default_settings()

    if not os.path.exists(path):
        logger.debug("Settings file not found. Using defaults.")
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load settings from {path}: {e}. Using defaults.")
        return settings

    if not isinstance(data, dict):
        logger.warning("Corrupted settings file. Using defaults.")
        return settings

    data.pop("version", None)
    settings.update(data)
    return settings


def save_settings(settings: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist settings as JSON.

    Raises:
        OSError: If the file cannot be written.
    """
    path = path or get_settings_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)

    payload = dict(settings)
    payload["version"] = CURRENT_SETTINGS_VERSION
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=4)
    logger.debug(f"Settings saved to {path}")

# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def validate_settings(
        settings: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a settings dictionary.

    Unknown keys are dropped and missing keys take their default. Outside
    strict mode invalid values fall back to the default with a warning.

    Args:
        settings: Raw settings (usually merged defaults + file + CLI).
        strict: Raise instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized settings and warnings.

    Raises:
        ValidationError: In strict mode, on the first invalid value.
    """
    warnings: List[str] = []
    defaults = get_default_settings()

    if not isinstance(settings, dict):
        msg = f"Invalid settings type: expected dict, received {type(settings).__name__}."
        if strict:
            raise ValidationError(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    out: Dict[str, Any] = {}
    for key, fallback in defaults.items():
        value = settings.get(key)
        if value is None:
            out[key] = fallback
        elif isinstance(fallback, bool):
            out[key] = _as_bool(value, fallback, key, warnings, strict)
        elif isinstance(fallback, int):
            out[key] = _as_perms(value, fallback, key, warnings, strict)
        else:
            out[key] = _as_str(value, fallback, key, warnings, strict)

    level = out["log_level"].upper()
    if level not in _LOG_LEVELS:
        _reject(f"Invalid field 'log_level': unknown level '{out['log_level']}'.", warnings, strict)
        level = defaults["log_level"]
    out["log_level"] = level

    return out, warnings

# -----------------------------------------------------------------------------
# Private Helpers
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ValidationError(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    _reject(f"Invalid field '{field}': expected non-empty str, received {value!r}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if isinstance(value, bool):
        return value
    if not strict and isinstance(value, str):
        s = value.strip().lower()
        if s in ("true", "1", "yes", "y", "on"):
            warnings.append(f"Field '{field}' converted from '{value}' to True.")
            return True
        if s in ("false", "0", "no", "n", "off"):
            warnings.append(f"Field '{field}' converted from '{value}' to False.")
            return False
    _reject(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_perms(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Accept an int or an octal string such as '755' / '0o755'."""
    perms: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        perms = value
    elif isinstance(value, str) and not strict:
        try:
            perms = int(value.strip().lower().removeprefix("0o"), 8)
        except ValueError:
            perms = None

    if perms is None or not 0 <= perms <= 0o7777:
        _reject(f"Invalid field '{field}': expected permission bits, received {value!r}.", warnings, strict)
        return fallback
    return perms
