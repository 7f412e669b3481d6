"""Canonical Pydantic models shared across flatcgen modules.

* :class:`Args` -- one ``flatc`` invocation request (language, inputs, output
  directory, include paths) with documented defaults.
* :class:`Version` -- the version string reported by ``flatc --version``.
* :class:`ProjectConfig` -- project-local defaults loaded from ``flatcgen.json``.

``Args`` and ``Version`` are frozen: they are built once and only read afterwards.
Completeness of an :class:`Args` is *not* checked at construction time, so
partially filled records are fine until they are translated into a command
line by :func:`flatcgen.flatc.build_args`.
"""

from __future__ import annotations

import os
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainValidator


def _to_fspath(value: Any) -> str:
    """Convert a ``str``/``bytes``/``os.PathLike`` value to its native string form.

    No normalisation happens (``Path("")`` would silently become ``"."``), and
    undecodable bytes are kept as surrogate escapes so that the UTF-8 check in
    :func:`~flatcgen.flatc.build_args` can still see them.
    """
    try:
        path = os.fspath(value)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc
    if isinstance(path, bytes):
        path = os.fsdecode(path)
    return path


FsPath = Annotated[str, PlainValidator(_to_fspath)]
"""A filesystem path stored verbatim as a native string."""


class Args(BaseModel):
    """Arguments passed to ``flatc``.

    Omitted fields fall back to their defaults, so the usual pattern is to
    name only what differs::

        Args(
            inputs=[Path("flatbuffers/monster.fbs")],
            out_dir=Path("target/flatbuffers/"),
        )

    A copy with some fields replaced is made with
    ``args.model_copy(update={"lang": "python"})``.
    """

    model_config = ConfigDict(frozen=True)

    lang: str = Field(
        default="rust", description="Output language backend, emitted as --<lang>"
    )
    inputs: tuple[FsPath, ...] = Field(
        default=(), description="Schema (.fbs) files to compile, required to be non-empty"
    )
    out_dir: FsPath = Field(
        default="", description="Output directory (-o), empty means it must be overridden"
    )
    includes: tuple[FsPath, ...] = Field(
        default=(), description="Include search paths (-I)"
    )


class Version(BaseModel):
    """FlatBuffers compiler version as reported by ``flatc --version``."""

    model_config = ConfigDict(frozen=True)

    version: str

    def __str__(self) -> str:
        return self.version


class ProjectConfig(BaseModel):
    """Project-local defaults read from ``flatcgen.json``.

    Every field is optional; unset fields fall through to the
    :class:`Args` defaults. Relative paths are interpreted against the
    directory holding the config file (see
    :func:`~flatcgen.config.resolve_args`).

    Example ``flatcgen.json``::

        {
            "lang": "rust",
            "inputs": ["flatbuffers/monster.fbs"],
            "out_dir": "target/flatbuffers",
            "includes": ["flatbuffers/include"],
            "flatc": "tools/bin/flatc"
        }
    """

    model_config = ConfigDict(extra="forbid")

    lang: Optional[str] = Field(default=None, description="Output language backend")
    inputs: list[str] = Field(default_factory=list, description="Schema files to compile")
    out_dir: Optional[str] = Field(default=None, description="Output directory")
    includes: list[str] = Field(default_factory=list, description="Include search paths")
    flatc: Optional[str] = Field(
        default=None,
        description="Path to the flatc executable; a bare name is looked up in PATH",
    )
