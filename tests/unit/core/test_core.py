#!/usr/bin/env python3
"""
test_core.py
------------
Tests for refdocs.core: path resolution, logger setup and run statistics.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path

# --- Third party imports ---
import click

# --- Local imports ---
from refdocs.core import paths
from refdocs.core.cli import ValidationStats, setup_logger


class TestResolvePluginRoot:
    """Tests for plugin-root precedence."""

    def test_override_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(paths.PLUGIN_ROOT_ENV, "/from/env")
        assert paths.resolve_plugin_root(str(tmp_path)) == tmp_path

    def test_environment(self, monkeypatch):
        monkeypatch.setenv(paths.PLUGIN_ROOT_ENV, "/from/env")
        assert paths.resolve_plugin_root() == Path("/from/env")

    def test_falls_back_to_working_directory(self, monkeypatch, tmp_path):
        monkeypatch.delenv(paths.PLUGIN_ROOT_ENV, raising=False)
        monkeypatch.chdir(tmp_path)
        assert paths.resolve_plugin_root() == tmp_path

    def test_references_dir(self, tmp_path):
        assert paths.references_dir(tmp_path, "hooks") == tmp_path / "skills" / "hooks" / "references"


class TestResolveLogDir:
    """Log directory never depends on the install location."""

    def test_override(self, tmp_path):
        assert paths.resolve_log_dir(str(tmp_path)) == tmp_path

    def test_defaults_to_user_app_dir(self):
        expected = Path(click.get_app_dir("refdocs")) / "logs"
        assert paths.resolve_log_dir() == expected
        assert Path(paths.__file__).resolve().parent not in expected.parents


class TestValidationStats:
    """Tests for run counters."""

    def test_record(self):
        stats = ValidationStats()
        stats.record(valid=True, warnings=1)
        stats.record(valid=False, errors=2)

        assert stats.files_checked == 2
        assert stats.files_valid == 1
        assert not stats.all_valid
        assert stats.summary() == "1/2 files valid, 2 errors, 1 warnings"

    def test_empty_run_is_valid(self):
        assert ValidationStats().all_valid

    def test_to_dict(self):
        data = ValidationStats().to_dict()
        assert set(data) == {"files_checked", "files_valid", "errors", "warnings", "duration"}
        assert data["duration"] >= 0


def test_setup_logger_creates_operations_dir(tmp_path):
    logger = setup_logger(tmp_path, "references")
    try:
        logger.log_operation("hello", {"n": 1})
        text = (tmp_path / "operations" / "references.log").read_text(encoding="utf-8")
    finally:
        logger.close()

    assert 'OPERATION hello {"n": 1}' in text
