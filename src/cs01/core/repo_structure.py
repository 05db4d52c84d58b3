from __future__ import annotations

"""
Repository Layout Builder.

Produces the tree written by 'cs01 init'. The standard layout holds HEAD,
config, an empty objects/ directory and the initial branch ref. The extended
layout adds the description, sample hook placeholders, info/exclude and the
objects/ and refs/ subfolders found in a full repository template.
"""

from typing import Dict, List

from cs01.core.config_serializer import serialize
from cs01.domain.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_BRANCH,
    DESCRIPTION_TEXT,
    HEAD_FILE_NAME,
    HEADS_DIR_NAME,
    INFO_EXCLUDE_TEXT,
    OBJECTS_DIR_NAME,
    REFS_DIR_NAME,
    REPO_DIR_NAME,
    REPOSITORY_FORMAT_VERSION,
    SAMPLE_HOOKS,
)
from cs01.domain.errors import ValidationError
from cs01.domain.tree_models import Directory, Leaf, TreeNode, validate_entry_name


def branch_ref(branch: str) -> str:
    """Symbolic ref text for 'branch', e.g. 'ref: refs/heads/main'."""
    return f"ref: {REFS_DIR_NAME}/{HEADS_DIR_NAME}/{branch}"


def split_branch_name(branch: str) -> List[str]:
    """
    Split a branch name into ref path segments.

    'feature/login' is stored as refs/heads/feature/login, so each segment
    must be a valid entry name.

    Raises:
        ValidationError: If the branch is empty or a segment is invalid.
    """
    if not isinstance(branch, str) or not branch.strip():
        raise ValidationError("initial_branch must be a non-empty string.")
    if branch != branch.strip() or any(ch.isspace() for ch in branch):
        raise ValidationError(f"Invalid branch name {branch!r}: whitespace is not allowed.")

    segments = branch.split("/")
    for segment in segments:
        try:
            validate_entry_name(segment)
        except ValidationError as e:
            raise ValidationError(f"Invalid branch name {branch!r}: {e}") from e
    return segments


def build_config_text(bare: bool) -> str:
    return serialize({
        "core": {
            "": {
                "bare": bare,
                "repositoryformatversion": REPOSITORY_FORMAT_VERSION,
            },
        },
    })


def build_repo_tree(bare: bool, initial_branch: str = DEFAULT_BRANCH, extended: bool = False) -> Directory:
    """
    Build the directory tree of a fresh repository.

    Args:
        bare: Place the layout at the top level instead of under '.CS01'.
        initial_branch: Branch HEAD points to.
        extended: Include the full template (hooks, info, description...).

    Returns:
        Directory: Tree ready for materialize().
    """
    segments = split_branch_name(initial_branch)
    ref = branch_ref(initial_branch)

    # refs/heads/<a>/<b>... nests one directory per branch segment
    head_node: TreeNode = Leaf(ref)
    for segment in reversed(segments[1:]):
        head_node = Directory({segment: head_node})
    heads = Directory({segments[0]: head_node})

    refs: Dict[str, TreeNode] = {HEADS_DIR_NAME: heads}
    objects: Dict[str, TreeNode] = {}

    layout: Dict[str, TreeNode] = {
        HEAD_FILE_NAME: Leaf(f"{ref}\n"),
        CONFIG_FILE_NAME: Leaf(build_config_text(bare)),
    }

    if extended:
        layout["description"] = Leaf(DESCRIPTION_TEXT)
        layout["hooks"] = Directory({hook: Leaf("") for hook in SAMPLE_HOOKS})
        layout["info"] = Directory({"exclude": Leaf(INFO_EXCLUDE_TEXT)})
        objects["info"] = Directory()
        objects["pack"] = Directory()
        refs["tags"] = Directory()

    layout[OBJECTS_DIR_NAME] = Directory(objects)
    layout[REFS_DIR_NAME] = Directory(refs)

    internal = Directory(layout)
    if bare:
        return internal
    return Directory({REPO_DIR_NAME: internal})
