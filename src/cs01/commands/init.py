from __future__ import annotations

"""
Init Command.

Turns a directory into a CS01 repository: refuses to run inside an existing
repository, builds the repository layout and materializes it without
overwriting anything already on disk.
"""

import logging
import os
from typing import Any, Optional

from cs01.core.repo_locator import RepoLocator, get_default_locator
from cs01.core.repo_structure import build_repo_tree
from cs01.core.tree_writer import materialize
from cs01.domain.constants import DEFAULT_BRANCH, DEFAULT_DIR_PERMS, REPO_DIR_NAME
from cs01.domain.errors import InitError, ValidationError
from cs01.domain.tree_models import WriteOptions
from cs01.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def _raise_init_error(error: Exception, path: str) -> None:
    raise InitError(path, error) from error


def init_repository(
        bare: bool = False,
        initial_branch: str = DEFAULT_BRANCH,
        cwd: Optional[Any] = None,
        *,
        dry_run: bool = False,
        extended: bool = False,
        dir_perms: int = DEFAULT_DIR_PERMS,
        locator: Optional[RepoLocator] = None,
) -> bool:
    """
    Initialize a CS01 repository in 'cwd'.

    Args:
        bare: Write the layout directly into 'cwd' instead of '.CS01/'.
        initial_branch: Branch HEAD points to.
        cwd: Target directory (default: current working directory).
        dry_run: Log the planned layout without writing it.
        extended: Write the full repository template.
        dir_perms: Permission bits for created directories.
        locator: Locator used for the "already initialized" check.

    Returns:
        bool: True if the repository was initialized, False if 'cwd' is
            already inside a repository (nothing is written).

    Raises:
        ValidationError: On invalid options or a missing target directory.
        InitError: If a file or directory of the layout cannot be written.
    """
    if not isinstance(bare, bool):
        raise ValidationError("bare must be a boolean.")

    target = normalize_path(cwd, os.getcwd())
    if not os.path.isdir(target):
        raise ValidationError(f"Target is not an existing directory: {target}")

    locator = locator or get_default_locator()
    if locator.is_inside_repository(target):
        logger.warning(f"CS01 repository already initialized here: {locator.find_root(target)}")
        return False

    tree = build_repo_tree(bare, initial_branch, extended=extended)
    options = WriteOptions(
        dir_perms=dir_perms,
        overwrite=False,
        on_error=_raise_init_error,
        dry_run=dry_run,
    )

    try:
        materialize(tree, target, options)
    except InitError as e:
        logger.error(f"Failed to initialize CS01 repository: {e}")
        raise

    repo_type = "bare" if bare else "standard"
    suffix = "" if bare else f" with {REPO_DIR_NAME} dir"
    if dry_run:
        logger.debug(f"Dry run: would initialize empty {repo_type} CS01 repository in {target}{suffix}.")
    else:
        logger.debug(f"Initialized empty {repo_type} CS01 repository in {target}{suffix}.")
    return True
