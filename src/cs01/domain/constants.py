from __future__ import annotations

"""
Domain Constants.

Names and defaults shared by the locator, the tree writer and the init
command. Marker names are part of the on-disk contract and must not change.
"""

from typing import List

APP_NAME = "CS01"
APP_VERSION = "0.1.0"

# -----------------------------------------------------------------------------
# REPOSITORY MARKERS
# -----------------------------------------------------------------------------
REPO_DIR_NAME = ".CS01"
CONFIG_FILE_NAME = "config"
CONFIG_HEADER = "[core]"

# -----------------------------------------------------------------------------
# LAYOUT DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_BRANCH = "main"
DEFAULT_DIR_PERMS = 0o755
REPOSITORY_FORMAT_VERSION = 0

HEAD_FILE_NAME = "HEAD"
OBJECTS_DIR_NAME = "objects"
REFS_DIR_NAME = "refs"
HEADS_DIR_NAME = "heads"

DESCRIPTION_TEXT = (
    "Unnamed repository; edit this file 'description' to name the repository.\n"
)

INFO_EXCLUDE_TEXT = (
    "# cs01 ls-files --others --exclude-from=.CS01/info/exclude\n"
    "# Lines that start with '#' are comments.\n"
    "# For a project mostly in C, the following would be a good set of\n"
    "# exclude patterns (uncomment them if you want to use them):\n"
    "# *.[oa]\n"
    "# *~\n"
)

SAMPLE_HOOKS: List[str] = [
    "applypatch-msg.sample",
    "commit-msg.sample",
    "fsmonitor-watchman.sample",
    "post-update.sample",
    "pre-applypatch.sample",
    "pre-commit.sample",
    "pre-merge-commit.sample",
    "prepare-commit-msg.sample",
    "pre-push.sample",
    "pre-rebase.sample",
    "pre-receive.sample",
    "push-to-checkout.sample",
    "sendemail-validate.sample",
    "update.sample",
]
