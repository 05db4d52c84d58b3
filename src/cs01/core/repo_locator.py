from __future__ import annotations

"""
Repository Root Locator.

Finds the nearest ancestor directory carrying a CS01 repository marker and
remembers the last root found so that lookups from inside the same
repository skip the upward scan.

Markers, checked in order at each level:
1. a regular 'config' file whose stripped content starts with '[core]'
   (bare repository);
2. a '.CS01' directory (standard repository).
"""

import logging
import os
import threading
from typing import Any, Optional

from cs01.domain.constants import CONFIG_FILE_NAME, CONFIG_HEADER, REPO_DIR_NAME
from cs01.infra.fs import coerce_path, is_within, read_text_file, stat_kind

logger = logging.getLogger(__name__)


class RepoLocator:
    """
    Resolves paths against the enclosing CS01 repository root.

    Holds a single-slot cache of the last discovered root. The cache is only
    consulted when the start directory lies inside the cached root, and it is
    never refreshed automatically: call invalidate() after deleting or moving
    a repository.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cached_root: Optional[str] = None

    @property
    def cached_root(self) -> Optional[str]:
        with self._lock:
            return self._cached_root

    def invalidate(self) -> None:
        """Forget the cached root."""
        with self._lock:
            self._cached_root = None

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def find_root(self, start_directory: Optional[Any] = None) -> Optional[str]:
        """
        Return the repository root enclosing 'start_directory', or None.

        Args:
            start_directory: Directory to scan from (default: current
                working directory).

        Raises:
            ValidationError: If start_directory is not a non-empty path.
            FileSystemError: If a marker cannot be stat'ed.
        """
        start = self._normalize_start(start_directory)

        cached = self.cached_root
        if cached is not None and is_within(start, cached):
            return cached

        current = start
        while True:
            if self._has_marker(current):
                with self._lock:
                    self._cached_root = current
                logger.debug(f"Repository root found at {current}")
                return current

            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent

        logger.debug(f"No CS01 repository found above {start}")
        return None

    def resolve_path(
            self,
            relative_path: Optional[str] = "",
            start_directory: Optional[Any] = None,
    ) -> Optional[str]:
        """
        Join 'relative_path' to the repository root enclosing 'start_directory'.

        Args:
            relative_path: Path inside the repository; empty means the root.
                Leading separators are dropped, so '/x' resolves to root/x.
            start_directory: Directory to scan from (default: cwd).

        Returns:
            Optional[str]: Absolute path, or None if not inside a repository.
        """
        root = self.find_root(start_directory)
        if root is None:
            return None

        # Absolute inputs are anchored at the root, never outside it
        relative = os.path.splitdrive(relative_path or "")[1].lstrip("/\\")
        if not relative:
            return root
        return os.path.join(root, relative)

    def is_inside_repository(self, start_directory: Optional[Any] = None) -> bool:
        """True if a repository root encloses 'start_directory'."""
        return self.find_root(start_directory) is not None

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    @staticmethod
    def _normalize_start(start_directory: Optional[Any]) -> str:
        if start_directory is None:
            return os.path.abspath(os.getcwd())
        return os.path.abspath(coerce_path(start_directory, "start_directory"))

    @staticmethod
    def _has_marker(directory: str) -> bool:
        config_path = os.path.join(directory, CONFIG_FILE_NAME)
        if stat_kind(config_path) == "file":
            content = read_text_file(config_path)
            if content is not None and content.strip().startswith(CONFIG_HEADER):
                return True

        return stat_kind(os.path.join(directory, REPO_DIR_NAME)) == "dir"


# -----------------------------------------------------------------------------
# DEFAULT LOCATOR
# -----------------------------------------------------------------------------

_default_locator = RepoLocator()


def get_default_locator() -> RepoLocator:
    """Return the process-wide locator used by the module-level helpers."""
    return _default_locator


def reset_default_locator() -> None:
    """Clear the process-wide cache."""
    _default_locator.invalidate()


def find_root(start_directory: Optional[Any] = None) -> Optional[str]:
    return _default_locator.find_root(start_directory)


def resolve_path(
        relative_path: Optional[str] = "",
        start_directory: Optional[Any] = None,
) -> Optional[str]:
    return _default_locator.resolve_path(relative_path, start_directory)


def is_inside_repository(start_directory: Optional[Any] = None) -> bool:
    return _default_locator.is_inside_repository(start_directory)
