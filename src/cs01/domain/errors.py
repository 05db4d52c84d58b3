from __future__ import annotations

"""
Domain Error Taxonomy.

Every failure raised by the CS01 core derives from Cs01Error so that the
interface layers can trap them in one place. A missing repository root is
not an error and never surfaces here.
"""

from typing import Optional


class Cs01Error(Exception):
    """Base class for all CS01 failures."""


class ValidationError(Cs01Error, ValueError):
    """Raised when structural input is malformed (config, tree, paths)."""


class FileSystemError(Cs01Error):
    """
    Wraps an OS-level failure together with the path that caused it.

    Attributes:
        path: Filesystem path being processed when the failure occurred.
        cause: Underlying OSError.
    """

    def __init__(self, message: str, path: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{message}: {path}" + (f" ({cause})" if cause else ""))
        self.path = path
        self.cause = cause


class InitError(Cs01Error):
    """
    Raised by the init command when the repository layout cannot be written.

    Attributes:
        path: Path at which initialization failed.
        cause: Underlying error.
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Init failed at {path}: {cause}")
        self.path = path
        self.cause = cause
