"""flatcgen -- run the FlatBuffers schema compiler (``flatc``) from Python builds.

This package regenerates FlatBuffers helpers as part of a normal build, e.g.
from a build script or a packaging hook, instead of running ``flatc`` by hand::

    from flatcgen import Args, run

    run(Args(inputs=["flatbuffers/monster.fbs"], out_dir="target/flatbuffers/"))

You still need the ``flatc`` utility, version 1.10.0 or newer, installed
(release binaries at https://github.com/google/flatbuffers/releases, or the
``flatbuffers`` package from conda-forge or your distribution).

Modules:
    flatc: :class:`Flatc` handle, :func:`build_args` and :func:`run`.
    models: Pydantic models for invocation requests and versions.
    config: ``flatcgen.json`` project config and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr diagnostics with Rich support.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"

from flatcgen.exceptions import (  # noqa: E402
    ConfigError,
    ExecutionError,
    FlatcgenError,
    PathEncodingError,
    ToolUnavailableError,
)
from flatcgen.flatc import Flatc, build_args, run  # noqa: E402
from flatcgen.models import Args, Version  # noqa: E402

__all__ = [
    "Args",
    "ConfigError",
    "ExecutionError",
    "Flatc",
    "FlatcgenError",
    "PathEncodingError",
    "ToolUnavailableError",
    "Version",
    "build_args",
    "run",
]
