from __future__ import annotations

"""
Integration tests for the CLI Application Controller.

Calls the in-process entry point with explicit argv lists and checks exit
codes, terminal output and filesystem side effects.
"""

import json
from pathlib import Path
from typing import Iterator

import pytest

from cs01.domain.config import get_settings_path, save_settings
from cs01.infra.logging import shutdown_logging
from cs01.interface.cli.app import main


@pytest.fixture(autouse=True)
def cli_logging(capsys: pytest.CaptureFixture[str]) -> Iterator[None]:
    """Detach CS01 log handlers while the captured streams are still open."""
    yield
    shutdown_logging()

# -----------------------------------------------------------------------------
# INIT
# -----------------------------------------------------------------------------

def test_cli_init_success(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-01: 'init DIR' creates a standard repository and exits 0."""
    code = main(["init", str(workdir)])

    assert code == 0
    assert (workdir / ".CS01" / "HEAD").read_text(encoding="utf-8") == "ref: refs/heads/main\n"
    assert "Initialized empty standard CS01 repository" in capsys.readouterr().out


def test_cli_init_reports_success_once(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-01b: The success summary goes to stdout only, not also to the log."""
    assert main(["init", str(workdir)]) == 0
    shutdown_logging()

    captured = capsys.readouterr()
    assert captured.out.count("Initialized empty") == 1
    assert "Initialized empty" not in captured.err


def test_cli_init_twice_exits_1(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-02: Re-initializing reports the existing repository."""
    assert main(["init", str(workdir)]) == 0
    capsys.readouterr()

    assert main(["init", str(workdir)]) == 1
    assert "already initialized" in capsys.readouterr().out


def test_cli_init_bare_with_branch(workdir: Path) -> None:
    code = main(["init", "--bare", "--initial-branch", "develop", str(workdir)])

    assert code == 0
    assert (workdir / "HEAD").read_text(encoding="utf-8") == "ref: refs/heads/develop\n"
    assert not (workdir / ".CS01").exists()


def test_cli_init_dry_run(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["init", "--dry-run", str(workdir)]) == 0
    assert list(workdir.iterdir()) == []
    assert "[DRY-RUN]" in capsys.readouterr().out


def test_cli_init_json_output(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["init", "--json", "--bare", str(workdir)]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "ok": True,
        "path": str(workdir),
        "bare": True,
        "initial_branch": "main",
        "dry_run": False,
    }


def test_cli_init_invalid_branch_exits_2(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["init", "-b", "../x", str(workdir)]) == 2
    assert "ERROR" in capsys.readouterr().err


def test_cli_init_failure_exits_1(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / ".CS01").write_text("blocking file", encoding="utf-8")

    assert main(["init", str(workdir)]) == 1
    assert "Init failed at" in capsys.readouterr().err

# -----------------------------------------------------------------------------
# SETTINGS RESOLUTION
# -----------------------------------------------------------------------------

def test_cli_persisted_settings_apply(workdir: Path) -> None:
    """TC-03: Persisted defaults are used when flags are omitted."""
    save_settings({"initial_branch": "trunk"}, get_settings_path())

    assert main(["init", str(workdir)]) == 0
    assert (workdir / ".CS01" / "refs" / "heads" / "trunk").is_file()


def test_cli_use_defaults_ignores_persisted_settings(workdir: Path) -> None:
    save_settings({"initial_branch": "trunk"}, get_settings_path())

    assert main(["init", "--use-defaults", str(workdir)]) == 0
    assert (workdir / ".CS01" / "refs" / "heads" / "main").is_file()


def test_cli_no_bare_overrides_persisted_setting(workdir: Path) -> None:
    save_settings({"bare": True}, get_settings_path())

    assert main(["init", "--no-bare", str(workdir)]) == 0
    assert (workdir / ".CS01" / "HEAD").is_file()
    assert not (workdir / "HEAD").exists()


def test_cli_dump_config(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-04: --dump-config prints merged settings and writes nothing."""
    assert main(["init", "--dump-config", "-b", "dev", "--dir-perms", "700", str(workdir)]) == 0

    dumped = json.loads(capsys.readouterr().out)
    assert dumped["initial_branch"] == "dev"
    assert dumped["dir_perms"] == 0o700
    assert list(workdir.iterdir()) == []

# -----------------------------------------------------------------------------
# ROOT
# -----------------------------------------------------------------------------

def test_cli_root_prints_repository_root(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / ".CS01").mkdir()
    nested = workdir / "src"
    nested.mkdir()

    assert main(["root", str(nested)]) == 0
    assert capsys.readouterr().out.strip() == str(workdir)


def test_cli_root_outside_repository(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["root", "--json", str(workdir)]) == 1
    assert json.loads(capsys.readouterr().out) == {"ok": False, "root": None}
