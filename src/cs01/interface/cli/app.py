from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Parses arguments, bootstraps logging, resolves settings (defaults, persisted
file, command-line overrides) and dispatches to the 'init' and 'root'
commands. Maps domain failures to process exit codes.
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from cs01.commands.init import init_repository
from cs01.core.repo_locator import find_root
from cs01.domain.config import get_default_settings, load_settings, validate_settings
from cs01.domain.constants import REPO_DIR_NAME
from cs01.domain.errors import Cs01Error, ValidationError
from cs01.infra.fs import normalize_path
from cs01.infra.logging import LoggingConfig, configure_logging, get_logger
from cs01.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments (default: sys.argv[1:]).

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    if args.command == "init":
        return _run_init(args)
    return _run_root(args)

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_init(args: argparse.Namespace) -> int:
    base = get_default_settings() if args.use_defaults else load_settings()
    raw = dict(base)
    raw.update(cli_args.args_to_overrides(args))

    settings, warnings = validate_settings(raw, strict=False)
    _bootstrap_logging(args, settings["log_level"])

    for w in warnings:
        logger.warning(f"Settings constraint: {w}")

    if args.dump_config:
        print(json.dumps(settings, ensure_ascii=False, indent=2))
        return EXIT_SUCCESS

    target = normalize_path(args.directory, os.getcwd())
    logger.debug(f"Initializing repository in {target} with settings {settings}")

    try:
        created = init_repository(
            bare=settings["bare"],
            initial_branch=settings["initial_branch"],
            cwd=target,
            dry_run=bool(args.dry_run),
            extended=settings["extended_layout"],
            dir_perms=settings["dir_perms"],
        )
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except ValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except Cs01Error as e:
        logger.critical(f"Initialization failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    result: Dict[str, Any] = {
        "ok": created,
        "path": target,
        "bare": settings["bare"],
        "initial_branch": settings["initial_branch"],
        "dry_run": bool(args.dry_run),
    }
    if args.json_output:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    else:
        _print_init_summary(result)

    return EXIT_SUCCESS if created else EXIT_FAILURE


def _run_root(args: argparse.Namespace) -> int:
    _bootstrap_logging(args, "INFO")

    try:
        root = find_root(normalize_path(args.path, os.getcwd()))
    except ValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except Cs01Error as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps({"ok": root is not None, "root": root}, ensure_ascii=False, indent=2))
    elif root is None:
        print("fatal: not a CS01 repository (or any of the parent directories)", file=sys.stderr)
    else:
        print(root)

    return EXIT_SUCCESS if root is not None else EXIT_FAILURE

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _bootstrap_logging(args: argparse.Namespace, level: str) -> None:
    log_level = "DEBUG" if args.debug else level
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))


def _print_init_summary(result: Dict[str, Any]) -> None:
    if not result["ok"]:
        print("CS01 repository already initialized here.")
        return

    repo_type = "bare" if result["bare"] else "standard"
    suffix = "" if result["bare"] else f" with {REPO_DIR_NAME} dir"
    prefix = "[DRY-RUN] Would initialize" if result["dry_run"] else "Initialized"
    print(f"{prefix} empty {repo_type} CS01 repository in {result['path']}{suffix}.")


if __name__ == "__main__":
    sys.exit(main())
