from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Declares the 'cs01' command-line schema and translates a parsed namespace
into overrides for the persisted settings.
"""

import argparse
from typing import Any, Dict

from cs01.domain.constants import APP_NAME, APP_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the CS01 CLI.

    Returns:
        argparse.ArgumentParser: Parser with 'init' and 'root' subcommands.
    """
    p = argparse.ArgumentParser(
        prog="cs01",
        description=f"{APP_NAME} Version Control System",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file (rotated).",
    )

    sub = p.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    # --- init ---
    init_p = sub.add_parser("init", help="Initialize a new CS01 repository.")
    init_p.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Target directory (default: current directory).",
    )
    init_p.add_argument(
        "--bare",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Create a bare repository (no .CS01 directory); --no-bare overrides a persisted setting.",
    )
    init_p.add_argument(
        "-b", "--initial-branch",
        dest="initial_branch",
        default=None,
        help="Name of the initial branch (default: main).",
    )
    init_p.add_argument(
        "--extended",
        dest="extended_layout",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write the full template (hooks, info, description).",
    )
    init_p.add_argument(
        "--dir-perms",
        dest="dir_perms",
        default=None,
        help="Octal permission bits for created directories (default: 755).",
    )
    init_p.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be written without touching the disk.",
    )
    init_p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore persisted settings.",
    )
    init_p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective settings as JSON and exit.",
    )
    init_p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    # --- root ---
    root_p = sub.add_parser("root", help="Print the enclosing repository root.")
    root_p.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to resolve from (default: current directory).",
    )
    root_p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate 'init' arguments into settings overrides.

    Only options given on the command line are returned, so persisted
    settings survive when a flag is omitted.
    """
    overrides: Dict[str, Any] = {}
    for key in ("initial_branch", "bare", "extended_layout", "dir_perms"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    if getattr(args, "debug", False):
        overrides["log_level"] = "DEBUG"
    return overrides
