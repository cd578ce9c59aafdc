import pytest

from refdocs.core.exceptions import SourceLayoutError
from refdocs.core.logging_manager import RefdocsLogger
from refdocs.validators.tdd import (
    TddResult,
    TddValidator,
    expected_test_path,
    format_tdd_report,
)
from pathlib import Path


SERVICE = "class MyService:\n    pass\n"
TESTS = "def test_works():\n    assert True\n"


class TestTddValidator:
    """Tests for the co-located test checker."""

    @pytest.fixture
    def services(self, tmp_path):
        root = tmp_path / "services"
        root.mkdir()
        return root

    @pytest.fixture
    def validator(self, services):
        return TddValidator(services)

    def test_service_with_test(self, validator, services):
        (services / "my_service.py").write_text(SERVICE)
        (services / "test_my_service.py").write_text(TESTS)

        results = validator.validate_all()

        assert results == [
            TddResult(path="my_service.py", test_path="test_my_service.py", issues=())
        ]
        assert results[0].ok

    def test_service_without_test(self, validator, services):
        (services / "my_service.py").write_text(SERVICE)

        results = validator.validate_all()

        assert len(results) == 1
        assert not results[0].has_test
        assert results[0].test_path is None
        assert results[0].issues == ("Test file missing: test_my_service.py",)

    def test_empty_test_file(self, validator, services):
        (services / "my_service.py").write_text(SERVICE)
        (services / "test_my_service.py").write_text("import pytest\n")

        result = validator.validate_all()[0]

        assert result.has_test
        assert not result.ok
        assert "no tests" in result.issues[0]

    def test_undecodable_test_file_does_not_abort(self, services, tmp_path):
        (services / "a.py").write_text(SERVICE)
        (services / "test_a.py").write_bytes(b"\xff\xfe")
        (services / "b.py").write_text(SERVICE)
        (services / "test_b.py").write_text(TESTS)
        logger = RefdocsLogger(tmp_path / "logs", "tdd")
        try:
            results = TddValidator(services, logger=logger).validate_all()
            errors_text = (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")
        finally:
            logger.close()

        assert [r.path for r in results] == ["a.py", "b.py"]
        assert results[0].has_test
        assert not results[0].ok
        assert results[0].issues[0].startswith("Could not read test file:")
        assert results[1].ok
        assert "UnicodeDecodeError" in errors_text
        assert "path=test_a.py" in errors_text

    def test_async_and_method_tests_count(self, validator, services):
        (services / "a.py").write_text(SERVICE)
        (services / "test_a.py").write_text(
            "class TestA:\n    async def test_runs(self):\n        pass\n"
        )
        assert validator.validate_all()[0].ok

    def test_skips_tests_and_package_files(self, validator, services):
        for name in ["__init__.py", "conftest.py", "test_orphan.py", "notes.md"]:
            (services / name).write_text("")
        (services / "svc.py").write_text(SERVICE)

        assert [r.path for r in validator.validate_all()] == ["svc.py"]

    def test_nested_services(self, validator, services):
        nested = services / "fetchers"
        nested.mkdir()
        (nested / "docs.py").write_text(SERVICE)
        (services / "parser.py").write_text(SERVICE)
        (services / "test_parser.py").write_text(TESTS)

        assert validator.find_missing_tests() == ["fetchers/docs.py"]

    def test_missing_source_dir(self, tmp_path):
        with pytest.raises(SourceLayoutError):
            TddValidator(tmp_path / "nope").validate_all()


def test_expected_test_path():
    assert expected_test_path(Path("pkg/foo.py")) == Path("pkg/test_foo.py")


def test_format_tdd_report():
    report = format_tdd_report([
        TddResult(path="a.py", test_path="test_a.py"),
        TddResult(path="b.py", issues=("Test file missing: test_b.py",)),
    ])
    assert "✓ a.py" in report
    assert "✗ b.py" in report
    assert "    Test file missing: test_b.py" in report
    assert "Summary: 1/2 services have valid tests" in report
