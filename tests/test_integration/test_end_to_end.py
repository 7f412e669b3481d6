"""End-to-end tests against a real ``flatc`` installation.

Skipped when ``flatc`` is not on ``PATH`` (CI installs the
``flatbuffers-compiler`` package).
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from flatcgen import Args, Flatc, run
from flatcgen.app import app
from flatcgen.exceptions import ExecutionError

pytestmark = pytest.mark.skipif(
    shutil.which("flatc") is None, reason="flatc is not installed"
)

_SCHEMA = "table Test { text: string; } root_type Test;"


@pytest.fixture
def schema(tmp_path: Path) -> Path:
    path = tmp_path / "test.fbs"
    path.write_text(_SCHEMA)
    return path


class TestRealFlatc:
    def test_version(self) -> None:
        version = Flatc.from_env_path().version()
        assert version.version[0].isdigit()

    def test_run_can_produce_output(self, schema: Path, tmp_path: Path) -> None:
        run(Args(lang="rust", inputs=[schema], out_dir=tmp_path))

        output_path = schema.with_name("test_generated.rs")
        assert output_path.exists()
        assert output_path.stat().st_size != 0

    def test_include_paths_are_searched(self, tmp_path: Path) -> None:
        include_dir = tmp_path / "inc"
        include_dir.mkdir()
        (include_dir / "common.fbs").write_text("table Common { id: int; }")
        main_schema = tmp_path / "main.fbs"
        main_schema.write_text(
            'include "common.fbs";\n'
            "table Main { common: Common; } root_type Main;\n"
        )
        out_dir = tmp_path / "out"

        run(Args(inputs=[main_schema], out_dir=out_dir, includes=[include_dir]))

        assert (out_dir / "main_generated.rs").stat().st_size != 0

    def test_invalid_schema_fails(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.fbs"
        bad.write_text("table {")
        with pytest.raises(ExecutionError, match="non-zero exit code"):
            run(Args(inputs=[bad], out_dir=tmp_path / "out"))

    def test_cli_run(self, schema: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "gen"
        result = CliRunner().invoke(
            app, ["--no-color", "run", str(schema), "-o", str(out_dir)]
        )
        assert result.exit_code == 0
        assert (out_dir / "test_generated.rs").exists()
