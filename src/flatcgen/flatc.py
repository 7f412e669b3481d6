"""Programmatic interface to the ``flatc`` FlatBuffers schema compiler.

``flatc`` itself is treated as an opaque executable: this module only turns an
:class:`~flatcgen.models.Args` record into a command line, runs it, and maps
the exit status to success or a :class:`~flatcgen.exceptions.FlatcgenError`.

Most callers only need :func:`run`::

    from flatcgen import Args, run

    run(Args(inputs=["flatbuffers/monster.fbs"], out_dir="target/flatbuffers/"))

:class:`Flatc` is the lower-level handle for callers that want a specific
``flatc`` binary, or want to check the installation separately from the run.

Every call blocks until the child process exits. There is no timeout: a hung
``flatc`` hangs the caller.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from typing import Union

from flatcgen.exceptions import (
    ConfigError,
    ExecutionError,
    FlatcgenError,
    PathEncodingError,
    ToolUnavailableError,
)
from flatcgen.models import Args, Version
from flatcgen.output import debug

_DEFAULT_EXECUTABLE = "flatc"
_VERSION_PREFIX = "flatc version "
_EXCERPT_CHARS = 500


def build_args(args: Args) -> list[str]:
    """Translate *args* into the ``flatc`` argument vector (executable excluded).

    The token order is fixed::

        --<lang> -o <out_dir> <input>... -I<include>...

    Only ``out_dir`` has to be valid UTF-8; inputs and includes are passed
    through in their native form.

    Args:
        args: The invocation request.

    Returns:
        The argument list, ready to follow the executable in ``argv``.

    Raises:
        ConfigError: If ``out_dir``, ``lang`` or ``inputs`` is empty (checked
            in that order).
        PathEncodingError: If ``out_dir`` cannot be encoded as UTF-8.
    """
    if not args.out_dir:
        raise ConfigError("out_dir is empty")
    if not args.lang:
        raise ConfigError("lang is empty")
    if not args.inputs:
        raise ConfigError("input is empty")

    try:
        args.out_dir.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathEncodingError(
            f"only UTF-8 convertable paths are supported: {args.out_dir!r}"
        ) from exc

    cmd_args = [f"--{args.lang}", "-o", args.out_dir]
    cmd_args.extend(args.inputs)
    cmd_args.extend(f"-I{include}" for include in args.includes)
    return cmd_args


def _render(cmd: list[str]) -> str:
    """Render *cmd* as a copy-pasteable shell command for messages."""
    return shlex.join(cmd)


def _excerpt(data: bytes) -> str:
    """Decode the tail of captured tool output for error messages."""
    text = data.decode("utf-8", errors="replace").strip()
    if len(text) > _EXCERPT_CHARS:
        text = "..." + text[-_EXCERPT_CHARS:]
    return text


class Flatc:
    """Handle on one ``flatc`` executable.

    Construction does no I/O; the executable is only looked up when a
    command is spawned. A handle can be reused for any number of
    :meth:`check` and :meth:`run` calls.

    Args:
        executable: Path to ``flatc``, or a bare name resolved through
            ``PATH`` by the operating system.
    """

    def __init__(self, executable: Union[str, os.PathLike] = _DEFAULT_EXECUTABLE) -> None:
        self._executable = os.fspath(executable)

    @classmethod
    def from_env_path(cls) -> "Flatc":
        """Handle on ``flatc`` as found in ``$PATH``."""
        return cls(_DEFAULT_EXECUTABLE)

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> "Flatc":
        """Handle on ``flatc`` at an explicit filesystem path."""
        return cls(path)

    @property
    def executable(self) -> str:
        """The executable this handle spawns."""
        return self._executable

    def __repr__(self) -> str:
        return f"Flatc({self._executable!r})"

    # ------------------------------------------------------------------ #
    # Availability check
    # ------------------------------------------------------------------ #

    def check(self) -> str:
        """Check that ``flatc`` can be started and reports a sane version.

        Returns:
            The reported version string, e.g. ``"1.12.0"``.

        Raises:
            ToolUnavailableError: See :meth:`version`.
        """
        return self.version().version

    def version(self) -> Version:
        """Run ``flatc --version`` and parse its first output line.

        The first line must read ``flatc version <digit>...``. stdout and
        stderr are captured, never shown to the user.

        Raises:
            ToolUnavailableError: If the process cannot be started, exits
                non-zero, or prints anything other than the expected line.
        """
        cmd = [self._executable, "--version"]
        proc = self._spawn(
            cmd,
            ToolUnavailableError,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        # communicate() drains both pipes before waiting
        stdout, stderr = proc.communicate()

        if proc.returncode != 0:
            detail = _excerpt(stderr) or _excerpt(stdout)
            message = f"flatc failed with error (`{_render(cmd)}` exited with code {proc.returncode})"
            if detail:
                message += f": {detail}"
            raise ToolUnavailableError(message)

        try:
            text = stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ToolUnavailableError(
                f"`{_render(cmd)}` output is not valid UTF-8: {_excerpt(stdout)}"
            ) from exc

        lines = text.splitlines()
        if not lines:
            raise ToolUnavailableError(f"`{_render(cmd)}` output is empty")
        first_line = lines[0]

        if not first_line.startswith(_VERSION_PREFIX):
            raise ToolUnavailableError(
                f"output does not start with prefix {_VERSION_PREFIX!r}: {first_line!r}"
            )
        version = first_line[len(_VERSION_PREFIX):]
        if not version:
            raise ToolUnavailableError(f"version is empty: {first_line!r}")
        if version[0] not in "0123456789":
            raise ToolUnavailableError(
                f"version does not start with digit: {first_line!r}"
            )

        return Version(version=version)

    # ------------------------------------------------------------------ #
    # Compilation
    # ------------------------------------------------------------------ #

    def run(self, args: Args) -> None:
        """Execute ``flatc`` with *args* and check that it completed correctly.

        The argument vector is built (and validated) before anything is
        spawned. ``flatc`` inherits stdout/stderr; stdin is closed.

        Raises:
            ConfigError: If *args* is incomplete.
            PathEncodingError: If ``args.out_dir`` is not valid UTF-8.
            ExecutionError: If ``flatc`` fails to spawn or exits non-zero.
        """
        self._run_with_args(build_args(args))

    def _run_with_args(self, cmd_args: list[str]) -> None:
        cmd = [self._executable, *cmd_args]
        proc = self._spawn(cmd, ExecutionError)
        returncode = proc.wait()
        if returncode != 0:
            raise ExecutionError(
                f"flatc (`{_render(cmd)}`) exited with non-zero exit code {returncode}"
            )

    def _spawn(
        self,
        cmd: list[str],
        error_cls: type[FlatcgenError],
        **kwargs: object,
    ) -> subprocess.Popen:
        debug(f"spawning command {_render(cmd)}")
        try:
            return subprocess.Popen(cmd, stdin=subprocess.DEVNULL, **kwargs)
        except OSError as exc:
            raise error_cls(f"failed to spawn `{_render(cmd)}`: {exc}") from exc


def run(args: Args) -> None:
    """Check the ``flatc`` found in ``$PATH`` and run it with *args*.

    This is the entry point most build scripts need::

        from flatcgen import Args, run

        run(Args(
            lang="rust",  # `rust` is the default, but let's be explicit
            inputs=["flatbuffers/input.fbs"],
            out_dir="flatbuffers-helpers-for-rust/",
        ))

    Raises:
        ToolUnavailableError: If ``flatc`` is missing or unusable; nothing
            else is attempted.
        ConfigError: If *args* is incomplete.
        PathEncodingError: If ``args.out_dir`` is not valid UTF-8.
        ExecutionError: If the compilation fails.
    """
    flatc = Flatc.from_env_path()

    # First check we have a good flatc
    flatc.check()

    flatc.run(args)
