from __future__ import annotations

"""
Unit tests for the Repository Layout Builder.
"""

import pytest

from cs01.core.repo_structure import branch_ref, build_repo_tree, split_branch_name
from cs01.domain.errors import ValidationError
from cs01.domain.tree_models import Directory, Leaf


def test_standard_layout_is_nested_under_cs01() -> None:
    """TC-01: Non-bare repositories live under a single .CS01 entry."""
    tree = build_repo_tree(bare=False)
    assert list(tree.children) == [".CS01"]

    internal = tree.children[".CS01"]
    assert isinstance(internal, Directory)
    assert set(internal.children) == {"HEAD", "config", "objects", "refs"}


def test_bare_layout_is_top_level() -> None:
    """TC-02: Bare repositories expose the layout directly."""
    tree = build_repo_tree(bare=True, initial_branch="main")

    assert set(tree.children) == {"HEAD", "config", "objects", "refs"}
    assert tree.children["HEAD"] == Leaf("ref: refs/heads/main\n")
    assert tree.children["config"] == Leaf("[core]\n  bare = true\n  repositoryformatversion = 0\n")
    assert tree.children["objects"] == Directory()


def test_branch_ref_file() -> None:
    """TC-03: refs/heads/<branch> holds the symbolic ref without newline."""
    tree = build_repo_tree(bare=True, initial_branch="develop")
    heads = tree.children["refs"].children["heads"]
    assert heads.children["develop"] == Leaf("ref: refs/heads/develop")


def test_branch_with_slash_nests_directories() -> None:
    """TC-04: 'feature/login' becomes refs/heads/feature/login."""
    tree = build_repo_tree(bare=True, initial_branch="feature/login")
    heads = tree.children["refs"].children["heads"]

    assert heads.children["feature"].children["login"] == Leaf(branch_ref("feature/login"))
    assert tree.children["HEAD"] == Leaf("ref: refs/heads/feature/login\n")


def test_extended_layout_adds_template_entries() -> None:
    """TC-05: The extended template adds hooks, info and extra folders."""
    internal = build_repo_tree(bare=False, extended=True).children[".CS01"]

    assert {"description", "hooks", "info"} <= set(internal.children)
    assert "pre-commit.sample" in internal.children["hooks"].children
    assert set(internal.children["objects"].children) == {"info", "pack"}
    assert "tags" in internal.children["refs"].children
    # config stays the minimal one
    assert internal.children["config"] == Leaf("[core]\n  bare = false\n  repositoryformatversion = 0\n")


@pytest.mark.parametrize("branch", ["", "   ", "a b", "../x", "a//b", "x/..", "trail/"])
def test_invalid_branch_names(branch: str) -> None:
    """TC-06: Branch names must split into valid path segments."""
    with pytest.raises(ValidationError):
        split_branch_name(branch)
