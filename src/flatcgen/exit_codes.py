"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~flatcgen.exceptions.FlatcgenError` subclass.
Build scripts and CI jobs can inspect the exit code to tell a broken
``flatc`` installation apart from a schema that failed to compile without
parsing stderr.

Example::

    $ flatcgen run schema/monster.fbs -o gen/
    $ echo $?
    5   # EXIT_TOOL_UNAVAILABLE -- flatc is missing or reported a bad version
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (reported by Typer itself)."""

EXIT_CONFIG_ERROR = 3
"""The invocation request is incomplete (empty output directory, language or inputs) or the config file is invalid."""

EXIT_ENCODING_ERROR = 4
"""The output directory cannot be represented as UTF-8."""

EXIT_TOOL_UNAVAILABLE = 5
"""``flatc`` could not be started or did not report a usable version."""

EXIT_EXECUTION_FAILURE = 6
"""``flatc`` failed to spawn or exited with a non-zero status."""
