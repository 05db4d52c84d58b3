from __future__ import annotations

"""
Directory Tree Data Models.

Provides the recursive node types describing a tree of files and folders to
be materialized on disk, the options controlling how it is written, and the
report returned once the walk completes.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from cs01.domain.constants import DEFAULT_DIR_PERMS
from cs01.domain.errors import ValidationError

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Leaf:
    """
    Represents a file entry in the tree.

    Attributes:
        content: File body. Text is encoded as UTF-8 when written.
    """
    content: Union[str, bytes] = ""

    @property
    def data(self) -> bytes:
        """Raw bytes written to disk."""
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")


@dataclass(frozen=True)
class Directory:
    """
    Represents a folder entry in the tree.

    An empty Directory still denotes a folder that must be created.

    Attributes:
        children: Ordered mapping of entry name to child node.
    """
    children: Mapping[str, "TreeNode"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.children)


TreeNode = Union[Leaf, Directory]

# -----------------------------------------------------------------------------
# WRITE POLICY
# -----------------------------------------------------------------------------

class ErrorPolicy(Enum):
    """Continuation policy applied to per-path failures."""
    FAIL_FAST = "fail_fast"
    COLLECT_AND_CONTINUE = "collect_and_continue"


ErrorHandler = Callable[[Exception, str], None]


@dataclass(frozen=True)
class WriteOptions:
    """
    Immutable options for a tree materialization.

    Attributes:
        dir_perms: Permission bits for created directories (umask applies).
        overwrite: Replace existing files. When False they are skipped.
        on_error: Optional handler called with (error, path). Raising from it
            aborts the walk, returning continues with the next entry.
        dry_run: Report intended actions without touching the filesystem.
        policy: Behaviour when no on_error handler is supplied.
    """
    dir_perms: int = DEFAULT_DIR_PERMS
    overwrite: bool = True
    on_error: Optional[ErrorHandler] = None
    dry_run: bool = False
    policy: ErrorPolicy = ErrorPolicy.FAIL_FAST


@dataclass
class WriteReport:
    """
    Outcome of a materialization.

    Attributes:
        created_dirs: Directories created during the walk.
        written_files: Files written (created or truncated).
        skipped_files: Existing files left untouched because overwrite is off.
        planned: Human-readable actions recorded in dry-run mode.
        errors: (path, error) pairs for every failure routed to the policy.
    """
    created_dirs: List[str] = field(default_factory=list)
    written_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    planned: List[str] = field(default_factory=list)
    errors: List[Tuple[str, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

# -----------------------------------------------------------------------------
# CONSTRUCTION & VALIDATION
# -----------------------------------------------------------------------------

_FORBIDDEN_NAMES = ("", ".", "..")


def validate_entry_name(name: Any) -> str:
    """
    Ensure an entry name is a single path segment.

    Rejects separators, parent references and NUL bytes so that no entry
    can resolve outside the directory it is written into.

    Raises:
        ValidationError: If the name could escape its parent directory.
    """
    if not isinstance(name, str):
        raise ValidationError(f"Invalid entry name {name!r}: expected str.")
    if name in _FORBIDDEN_NAMES:
        raise ValidationError(f"Invalid entry name {name!r}.")

    separators = {"/", "\\", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if "\0" in name or any(sep in name for sep in separators):
        raise ValidationError(f"Invalid entry name {name!r}: path separators are not allowed.")
    return name


def validate_tree(node: Any) -> None:
    """
    Recursively check that a node is a well-formed Leaf or Directory.

    Raises:
        ValidationError: On unknown node types or escaping entry names.
    """
    if isinstance(node, Leaf):
        if not isinstance(node.content, (str, bytes)):
            raise ValidationError(
                f"Invalid leaf content: expected str or bytes, received {type(node.content).__name__}."
            )
        return
    if not isinstance(node, Directory):
        raise ValidationError(
            f"Invalid tree node: expected Leaf or Directory, received {type(node).__name__}."
        )
    for name, child in node.children.items():
        validate_entry_name(name)
        validate_tree(child)


def tree_from_mapping(obj: Any) -> TreeNode:
    """
    Build a typed tree from a nested literal.

    Strings and bytes become leaves, mappings become directories and
    existing nodes are kept as they are.

    Example:
        tree_from_mapping({"a.txt": "x", "docs": {}})

    Raises:
        ValidationError: If a value is neither text nor a mapping.
    """
    if isinstance(obj, (Leaf, Directory)):
        return obj
    if isinstance(obj, (str, bytes)):
        return Leaf(obj)
    if isinstance(obj, Mapping):
        children: Dict[str, TreeNode] = {}
        for name, child in obj.items():
            children[validate_entry_name(name)] = tree_from_mapping(child)
        return Directory(children)
    raise ValidationError(
        f"Cannot build a tree node from {type(obj).__name__}: expected str, bytes or mapping."
    )
