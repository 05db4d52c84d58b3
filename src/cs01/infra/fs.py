from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Thin helpers over 'os' and 'os.path' shared by the repository locator, the
tree writer and the settings store: user data directory resolution, path
normalization, segment-aware containment checks and guarded stat/read calls.
"""

import logging
import os
import stat
from typing import Any, Optional

from cs01.domain.errors import FileSystemError, ValidationError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "CS01"
UNIX_APP_DIR_NAME = ".cs01"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory holding persistent CS01 settings.

    - Windows: %LOCALAPPDATA%/CS01
    - Linux/Mac: ~/.cs01

    The directory is not created here; writers create it on demand.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def coerce_path(path: Any, field: str = "path") -> str:
    """
    Convert a str or os.PathLike into a plain string path.

    Raises:
        ValidationError: If the value is not path-like or is empty.
    """
    if isinstance(path, os.PathLike):
        path = os.fspath(path)
    if isinstance(path, bytes) or not isinstance(path, str):
        raise ValidationError(f"{field} must be a string path, received {type(path).__name__}.")
    if not path:
        raise ValidationError(f"{field} must be a non-empty path.")
    return path


def normalize_path(path: Optional[Any], fallback: str) -> str:
    """
    Normalize a directory path into an absolute filesystem path.

    Expands '~' and environment variables. None or blank input falls back to
    'fallback'.

    Args:
        path: Raw input path (str or os.PathLike).
        fallback: Default path used when input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = os.fspath(path) if isinstance(path, os.PathLike) else (path or "")
    p = p.strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def is_within(path: str, root: str) -> bool:
    """
    Check whether 'path' is 'root' or one of its descendants.

    Compares whole path segments, so '/repo-other' is not inside '/repo'.
    """
    path = os.path.normcase(os.path.abspath(path))
    root = os.path.normcase(os.path.abspath(root))
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # Different drives on Windows
        return False

# -----------------------------------------------------------------------------
# GUARDED FILESYSTEM ACCESS
# -----------------------------------------------------------------------------

def stat_kind(path: str) -> Optional[str]:
    """
    Report what lives at 'path' without following a missing entry as an error.

    Returns:
        Optional[str]: 'file', 'dir', 'other', or None when nothing exists.

    Raises:
        FileSystemError: For failures other than a missing entry
            (e.g. permission denied on a parent directory).
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        raise FileSystemError("Failed to stat", path, e) from e

    if stat.S_ISREG(st.st_mode):
        return "file"
    if stat.S_ISDIR(st.st_mode):
        return "dir"
    return "other"


def read_text_file(path: str) -> Optional[str]:
    """
    Read a UTF-8 text file, returning None if it cannot be read.

    Undecodable bytes are replaced with U+FFFD. I/O failures are logged and
    swallowed; callers treat them as absence.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return None
