"""Tests for a whole export run against an in-process frontend."""

import json
from pathlib import Path

import pytest

from moveexport.config import ExporterConfig
from moveexport.errors import CompilationError, StagingError
from moveexport.export.schema import ExportFormat
from moveexport.exporter import compile_package, export_path


class TestCompilePackage:
    def test_returns_env(self, fake_frontend, move_file):
        env = compile_package(move_file, ExporterConfig(), fake_frontend)
        assert len(env.modules) == 2

    def test_staging_removed_after_compile(self, fake_frontend, move_file):
        compile_package(move_file, ExporterConfig(), fake_frontend)
        staged = Path(fake_frontend.calls[0].sources[0])
        assert not staged.exists()

    def test_errors_raise(self, failing_frontend, move_file):
        with pytest.raises(CompilationError) as exc_info:
            compile_package(move_file, ExporterConfig(), failing_frontend)
        assert exc_info.value.diagnostics == ["unbound type `Foo` in main.move:3:12"]
        assert "unbound type" in str(exc_info.value)
        staged = Path(failing_frontend.calls[0].sources[0])
        assert not staged.exists()

    def test_missing_input(self, fake_frontend, tmp_path):
        with pytest.raises(StagingError):
            compile_package(tmp_path / "gone.move", ExporterConfig(), fake_frontend)
        assert fake_frontend.calls == []


class TestExportPath:
    def test_basic_json(self, fake_frontend, move_file):
        text = export_path(move_file, frontend=fake_frontend)
        assert [m["name"] for m in json.loads(text)["modules"]] == ["BasicCoin", "Vault"]

    def test_repeatable(self, fake_frontend, move_file):
        first = export_path(move_file, frontend=fake_frontend, fmt=ExportFormat.FULL)
        second = export_path(move_file, frontend=fake_frontend, fmt=ExportFormat.FULL)
        assert first == second
