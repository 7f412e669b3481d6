"""Project-local configuration and precedence resolution.

A repository can pin its ``flatc`` invocation in a ``flatcgen.json`` file
next to its build files, so that ``flatcgen run`` needs no arguments:

* :func:`load_project_config` reads and validates the file into a
  :class:`~flatcgen.models.ProjectConfig`.
* :func:`resolve_args` merges CLI values, the project config, and the
  :class:`~flatcgen.models.Args` defaults into the final request and
  ``flatc`` handle.

No environment variables are consulted; ``PATH`` is only used by the
operating system when ``flatc`` is spawned by bare name.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, Sequence, Union

from pydantic import ValidationError

from flatcgen.exceptions import ConfigError
from flatcgen.flatc import Flatc
from flatcgen.models import Args, ProjectConfig

PROJECT_CONFIG_FILENAME = "flatcgen.json"


def load_project_config(
    path: Optional[Union[str, os.PathLike]] = None,
) -> Optional[ProjectConfig]:
    """Load project-local configuration.

    Args:
        path: Explicit config file. When omitted, ``./flatcgen.json`` is
            used if it exists.

    Returns:
        The parsed :class:`~flatcgen.models.ProjectConfig`, or ``None`` if
        no path was given and the default file does not exist.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file
            contains invalid JSON or fails validation.
    """
    if path is None:
        config_path = Path(PROJECT_CONFIG_FILENAME)
        if not config_path.is_file():
            return None
    else:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    try:
        text = config_path.read_text(encoding="utf-8")
        data = json.loads(text)
        return ProjectConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid project config at {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read project config {config_path}: {exc}") from exc


def _relative_to(base: Path, value: str) -> str:
    """Resolve *value* against *base* unless it is absolute or empty."""
    if not value or os.path.isabs(value):
        return value
    return os.fspath(base / value)


def _resolve_executable(base: Path, value: str) -> str:
    """Resolve a configured ``flatc`` location.

    A bare name (no directory component) is left for ``PATH`` lookup.
    """
    if not os.path.dirname(value):
        return value
    return _relative_to(base, value)


def resolve_args(
    config_path: Optional[Union[str, os.PathLike]] = None,
    *,
    lang: Optional[str] = None,
    inputs: Optional[Sequence[str]] = None,
    out_dir: Optional[str] = None,
    includes: Optional[Sequence[str]] = None,
    flatc: Optional[str] = None,
) -> tuple[Args, Flatc]:
    """Resolve the effective invocation with full precedence chain.

    Precedence (high to low):
        1. Explicit values (CLI flags). Empty sequences count as unset.
        2. Project config (``./flatcgen.json`` or *config_path*), with
           relative paths taken from the config file's directory.
        3. :class:`~flatcgen.models.Args` defaults.

    CLI paths are used verbatim (relative to the current directory).

    Returns:
        A tuple of ``(args, flatc_handle)``. The handle uses the configured
        ``flatc`` path when one is set, otherwise ``flatc`` from ``PATH``.

    Raises:
        ConfigError: If the project config cannot be loaded.
    """
    overrides: dict[str, object] = {}
    executable: Optional[str] = None

    # 2. Project config
    project = load_project_config(config_path)
    if project is not None:
        base = Path(config_path).parent if config_path is not None else Path(".")
        if project.lang is not None:
            overrides["lang"] = project.lang
        if project.inputs:
            overrides["inputs"] = [_relative_to(base, p) for p in project.inputs]
        if project.out_dir is not None:
            overrides["out_dir"] = _relative_to(base, project.out_dir)
        if project.includes:
            overrides["includes"] = [_relative_to(base, p) for p in project.includes]
        if project.flatc is not None:
            executable = _resolve_executable(base, project.flatc)

    # 1. CLI flags (highest precedence)
    if lang is not None:
        overrides["lang"] = lang
    if inputs:
        overrides["inputs"] = list(inputs)
    if out_dir is not None:
        overrides["out_dir"] = out_dir
    if includes:
        overrides["includes"] = list(includes)
    if flatc is not None:
        executable = flatc

    args = Args(**overrides)
    handle = Flatc.from_path(executable) if executable is not None else Flatc.from_env_path()
    return args, handle
