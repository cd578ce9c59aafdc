"""
conftest.py
-----------
Shared pytest fixtures for refdocs tests.

Provides fixtures for:
- Well-formed and malformed reference document content
- A temporary reference root and a helper to populate it
- A temporary plugin layout (skills/<skill>/references)
"""
import pytest
from pathlib import Path


GOOD_REFERENCE = """# Single Topic

This is a well-formed reference file.

| Column A | Column B |
|----------|----------|
| Value 1  | Value 2  |
"""

BAD_REFERENCE = """## No H1

No tables here either.
"""


# ----- Content Fixtures -----

@pytest.fixture
def good_content():
    """One h1, one table, no links, well under 2KB."""
    return GOOD_REFERENCE


@pytest.fixture
def bad_content():
    """No h1 and no table."""
    return BAD_REFERENCE


# ----- Path Fixtures -----

@pytest.fixture
def references_root(tmp_path):
    """Empty reference root, separate from any log directory."""
    root = tmp_path / "references"
    root.mkdir()
    return root


@pytest.fixture
def write_reference(references_root):
    """
    Write a document under the reference root.

    Usage:
        write_reference("hooks/events.md", content)
    """
    def _write(relative_path: str, content) -> Path:
        path = references_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def plugin_root(tmp_path):
    """Plugin root with an empty skills/ directory."""
    root = tmp_path / "plugin"
    (root / "skills").mkdir(parents=True)
    return root


@pytest.fixture
def log_dir(tmp_path):
    """Log directory outside every validated tree."""
    return tmp_path / "logs"
