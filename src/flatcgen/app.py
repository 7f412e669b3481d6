"""Typer application and CLI entry point for flatcgen.

Two commands are exposed:

* ``flatcgen check`` -- verify that ``flatc`` starts and print its version.
* ``flatcgen run`` -- compile schema files, with arguments taken from the
  command line and/or the project's ``flatcgen.json``.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app, and
maps :class:`~flatcgen.exceptions.FlatcgenError` to its exit code.

See Also:
    :mod:`flatcgen.config`: Project config and precedence resolution.
    :mod:`flatcgen.output`: Output manager initialised in :func:`main_callback`.
"""

from __future__ import annotations

import shlex
import signal
import sys
from typing import Any, Optional

import typer

from flatcgen import __version__
from flatcgen.exceptions import FlatcgenError, ToolUnavailableError
from flatcgen.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="flatcgen",
    help="Run the FlatBuffers schema compiler (flatc) from build scripts.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"flatcgen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show the commands being spawned."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~flatcgen.output.OutputManager` built from
    the CLI flags.
    """
    from flatcgen.output import OutputManager, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))


def _fail(exc: FlatcgenError) -> typer.Exit:
    """Report *exc* and build the matching ``typer.Exit``."""
    from flatcgen.output import error, suggest

    error(str(exc))
    if isinstance(exc, ToolUnavailableError):
        suggest("Install flatc 1.10.0+ (https://github.com/google/flatbuffers/releases) or pass --flatc PATH")
    return typer.Exit(code=exc.exit_code)


@app.command("check")
def check_command(
    flatc: Optional[str] = typer.Option(
        None, "--flatc", help="flatc executable to check (default: flatc from PATH)."
    ),
) -> None:
    """Check that flatc can be started and print its version.

    Example:
        ::

            flatcgen check
            flatcgen check --flatc /opt/flatbuffers/bin/flatc
    """
    from flatcgen.flatc import Flatc
    from flatcgen.output import print_data

    handle = Flatc.from_path(flatc) if flatc else Flatc.from_env_path()
    try:
        version = handle.check()
    except FlatcgenError as exc:
        raise _fail(exc)
    print_data(version)


@app.command("run")
def run_command(
    inputs: Optional[list[str]] = typer.Argument(
        None, help="Schema (.fbs) files to compile. Overrides the config file."
    ),
    out_dir: Optional[str] = typer.Option(
        None, "--out-dir", "-o", help="Output directory for generated code."
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", "-l", help="Target language backend (default: rust)."
    ),
    includes: Optional[list[str]] = typer.Option(
        None, "--include", "-I", help="Include search path (repeatable)."
    ),
    flatc: Optional[str] = typer.Option(
        None, "--flatc", help="flatc executable (default: flatc from PATH)."
    ),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Project config file (default: ./flatcgen.json)."
    ),
    skip_check: bool = typer.Option(
        False, "--skip-check", help="Do not run flatc --version first."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the flatc command line without running it."
    ),
) -> None:
    """Compile schema files with flatc.

    Values given on the command line win over ``flatcgen.json``, which wins
    over the built-in defaults.

    Example:
        ::

            flatcgen run flatbuffers/monster.fbs -o target/flatbuffers
            flatcgen run schema.fbs -o gen -l python -I include/
            flatcgen run --dry-run
    """
    from flatcgen.config import resolve_args
    from flatcgen.flatc import build_args
    from flatcgen.output import debug, print_data, success

    try:
        args, handle = resolve_args(
            config,
            lang=lang,
            inputs=inputs,
            out_dir=out_dir,
            includes=includes,
            flatc=flatc,
        )
        if dry_run:
            print_data(shlex.join([handle.executable, *build_args(args)]))
            return
        if not skip_check:
            version = handle.check()
            debug(f"using flatc {version} ({handle.executable})")
        handle.run(args)
    except FlatcgenError as exc:
        raise _fail(exc)

    success(f"Generated {args.lang} code in {args.out_dir}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``flatcgen`` console script.

    Unhandled :class:`~flatcgen.exceptions.FlatcgenError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions are
    reported and exit with :data:`~flatcgen.exit_codes.EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from flatcgen.output import error

        if isinstance(exc, FlatcgenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc!r}")
        sys.exit(EXIT_GENERIC_FAILURE)
