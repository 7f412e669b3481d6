"""Exception hierarchy for flatcgen.

All exceptions inherit from :class:`FlatcgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`flatcgen.exit_codes`.
Library callers catch the specific subclasses; the CLI entry point in
:func:`flatcgen.app.main` catches ``FlatcgenError`` and exits with the
matching code.

Subclass hierarchy::

    FlatcgenError (exit 1)
    +-- ConfigError           (exit 3)
    +-- PathEncodingError     (exit 4)
    +-- ToolUnavailableError  (exit 5)
    +-- ExecutionError        (exit 6)
"""

from flatcgen.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_ENCODING_ERROR,
    EXIT_EXECUTION_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_TOOL_UNAVAILABLE,
)


class FlatcgenError(Exception):
    """Base exception for all flatcgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`flatcgen.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(FlatcgenError):
    """Raised when an invocation request is incomplete or a config file is invalid.

    Detected before any process is spawned.
    """

    exit_code = EXIT_CONFIG_ERROR


class PathEncodingError(FlatcgenError):
    """Raised when the output directory cannot be losslessly rendered as UTF-8."""

    exit_code = EXIT_ENCODING_ERROR


class ToolUnavailableError(FlatcgenError):
    """Raised when ``flatc`` is missing, fails ``--version``, or prints an unexpected version line."""

    exit_code = EXIT_TOOL_UNAVAILABLE


class ExecutionError(FlatcgenError):
    """Raised when the actual ``flatc`` run fails to spawn or exits non-zero."""

    exit_code = EXIT_EXECUTION_FAILURE
