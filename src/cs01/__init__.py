"""
CS01 Version Control System - repository bootstrapping core.

Example:
    from cs01 import init_repository
    init_repository(bare=True)
"""

from cs01.commands.init import init_repository
from cs01.core.config_serializer import serialize
from cs01.core.repo_locator import RepoLocator, find_root, is_inside_repository, resolve_path
from cs01.core.tree_writer import materialize
from cs01.domain.constants import APP_VERSION as __version__
from cs01.domain.errors import Cs01Error, FileSystemError, InitError, ValidationError
from cs01.domain.tree_models import (
    Directory,
    ErrorPolicy,
    Leaf,
    WriteOptions,
    WriteReport,
    tree_from_mapping,
)

__all__ = [
    "init_repository",
    "serialize",
    "RepoLocator",
    "find_root",
    "is_inside_repository",
    "resolve_path",
    "materialize",
    "Cs01Error",
    "FileSystemError",
    "InitError",
    "ValidationError",
    "Directory",
    "ErrorPolicy",
    "Leaf",
    "WriteOptions",
    "WriteReport",
    "tree_from_mapping",
    "__version__",
]
