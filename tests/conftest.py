"""Shared test fixtures for flatcgen.

Provides stub ``flatc`` executables (small POSIX shell scripts written into
``tmp_path``), an isolated working directory for config tests, and output
state management. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import shlex
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from flatcgen.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager's Rich console caches a reference to sys.stderr at
    creation time. When Typer's CliRunner redirects the stream during a
    test and the test finishes, the cached reference becomes stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Stub flatc executables
# ---------------------------------------------------------------------------


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Directory holding stub executables (usable as ``PATH``)."""
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def make_flatc(bin_dir: Path) -> Callable[..., Path]:
    """Factory writing an executable ``/bin/sh`` script into :func:`bin_dir`.

    Usage::

        stub = make_flatc('echo "flatc version 1.12.0"')
    """

    def _make(body: str, name: str = "flatc") -> Path:
        path = bin_dir / name
        path.write_text("#!/bin/sh\n" + textwrap.dedent(body))
        path.chmod(0o755)
        return path

    return _make


@pytest.fixture
def args_log(tmp_path: Path) -> Path:
    """File where stub compilers record the arguments they received, one per line."""
    return tmp_path / "flatc-args.txt"


@pytest.fixture
def fake_flatc(make_flatc: Callable[..., Path], args_log: Path) -> Path:
    """A well-behaved stub: answers ``--version`` and records any other call."""
    return make_flatc(
        'if [ "$1" = "--version" ]; then\n'
        '    echo "flatc version 23.5.26"\n'
        "    exit 0\n"
        "fi\n"
        f"printf '%s\\n' \"$@\" > {shlex.quote(str(args_log))}\n"
    )


@pytest.fixture
def failing_flatc(make_flatc: Callable[..., Path], args_log: Path) -> Path:
    """A stub that passes ``--version`` but fails every compilation with status 3."""
    return make_flatc(
        'if [ "$1" = "--version" ]; then\n'
        '    echo "flatc version 23.5.26"\n'
        "    exit 0\n"
        "fi\n"
        f"printf '%s\\n' \"$@\" > {shlex.quote(str(args_log))}\n"
        'echo "error: schema.fbs:1: syntax error" >&2\n'
        "exit 3\n"
    )


# ---------------------------------------------------------------------------
# Isolation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change the working directory to a fresh project directory.

    Keeps a developer's own ``flatcgen.json`` from leaking into tests.

    Returns:
        The project directory for additional file creation.
    """
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a colourless, verbose OutputManager so debug lines are plain text."""
    output = OutputManager(no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
