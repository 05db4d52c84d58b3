from __future__ import annotations

"""
Tree Materialization Service.

Writes a Leaf/Directory tree onto disk below a destination prefix. Every
per-path failure is wrapped in a FileSystemError, recorded in the report and
handed to the continuation policy, which either aborts the walk or lets it
carry on with the next entry. There is no rollback: an aborted walk leaves
whatever was already written in place.
"""

import logging
import os
from typing import Any, List, Optional

from cs01.domain.errors import FileSystemError, ValidationError
from cs01.domain.tree_models import (
    Directory,
    ErrorPolicy,
    Leaf,
    WriteOptions,
    WriteReport,
    validate_tree,
)
from cs01.infra.fs import coerce_path

logger = logging.getLogger(__name__)

DRY_RUN_TAG = "[DRY-RUN]"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def materialize(
        tree: Any,
        destination_prefix: Any,
        options: Optional[WriteOptions] = None,
) -> WriteReport:
    """
    Materialize 'tree' below 'destination_prefix'.

    A Directory tree creates 'destination_prefix' (and parents) and then its
    children; a top-level Leaf is written to 'destination_prefix' itself.

    Args:
        tree: Leaf or Directory to write.
        destination_prefix: Target directory (str or os.PathLike).
        options: Permissions, overwrite, dry-run and error policy.

    Returns:
        WriteReport: What was created, written, skipped, planned or failed.

    Raises:
        ValidationError: On a malformed tree or destination. Raised before
            any filesystem access.
        FileSystemError: On the first failure under FAIL_FAST (default),
            or whatever the on_error handler raises.
    """
    opts = options or WriteOptions()
    prefix = coerce_path(destination_prefix, "destination_prefix")

    if not isinstance(tree, (Leaf, Directory)):
        raise ValidationError(
            f"tree must be a Leaf or Directory, received {type(tree).__name__}."
        )
    validate_tree(tree)

    report = WriteReport()
    if isinstance(tree, Leaf):
        _write_leaf(tree, prefix, opts, report)
    else:
        _write_directory(tree, prefix, opts, report)

    logger.debug(
        f"Materialized tree at {prefix}: {len(report.created_dirs)} dirs, "
        f"{len(report.written_files)} files, {len(report.skipped_files)} skipped, "
        f"{len(report.errors)} errors"
    )
    return report

# -----------------------------------------------------------------------------
# RECURSIVE WALK
# -----------------------------------------------------------------------------

def _write_directory(node: Directory, path: str, opts: WriteOptions, report: WriteReport) -> None:
    if not _ensure_dir(path, opts, report):
        return

    for name, child in node.children.items():
        child_path = os.path.join(path, name)
        if isinstance(child, Leaf):
            _write_leaf(child, child_path, opts, report)
        else:
            _write_directory(child, child_path, opts, report)


def _ensure_dir(path: str, opts: WriteOptions, report: WriteReport) -> bool:
    """
    Create 'path' and any missing ancestors, each with dir_perms.

    Returns:
        bool: False if creation failed and the subtree must be skipped.
    """
    try:
        if os.path.isdir(path):
            return True
        if opts.dry_run:
            logger.info(f"{DRY_RUN_TAG} Would create dir: {path}")
            report.planned.append(f"mkdir {path}")
            return True
        for missing in _missing_dirs(path):
            try:
                os.mkdir(missing, opts.dir_perms)
            except FileExistsError:
                if not os.path.isdir(missing):
                    raise
                continue
            report.created_dirs.append(missing)
        return True
    except OSError as e:
        _handle_error(FileSystemError("Failed to create dir", path, e), path, opts, report)
        return False


def _missing_dirs(path: str) -> List[str]:
    """Return 'path' and its non-directory ancestors, outermost first."""
    missing: List[str] = []
    current = os.path.abspath(path)
    while not os.path.isdir(current):
        missing.append(current)
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    missing.reverse()
    return missing


def _write_leaf(node: Leaf, path: str, opts: WriteOptions, report: WriteReport) -> None:
    data = node.data
    try:
        if not opts.overwrite and os.path.lexists(path):
            logger.warning(f"Skipping existing file: {path}")
            report.skipped_files.append(path)
            return
        if opts.dry_run:
            logger.info(f"{DRY_RUN_TAG} Would write file: {path} ({len(data)} bytes)")
            report.planned.append(f"write {path}")
            return
        with open(path, "wb") as f:
            f.write(data)
        report.written_files.append(path)
    except OSError as e:
        _handle_error(FileSystemError("Failed to write", path, e), path, opts, report)

# -----------------------------------------------------------------------------
# ERROR POLICY
# -----------------------------------------------------------------------------

def _handle_error(error: FileSystemError, path: str, opts: WriteOptions, report: WriteReport) -> None:
    report.errors.append((path, error))

    if opts.on_error is not None:
        opts.on_error(error, path)
        return

    if opts.policy is ErrorPolicy.FAIL_FAST:
        raise error from error.cause

    logger.error(str(error))
