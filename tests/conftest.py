"""Test configuration and fixtures for treedump."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def sample_project(tmp_path):
    """Create a small project with nesting, a lone-file chain, and an empty directory."""
    root = tmp_path / "project"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "src" / "pkg" / "__init__.py").write_text("")
    (root / "src" / "pkg" / "core.py").write_text("def run():\n    return 42\n")
    (root / "docs" / "guide" / "intro").mkdir(parents=True)
    (root / "docs" / "guide" / "intro" / "index.md").write_text("# Intro\n")
    (root / "empty").mkdir()
    (root / "README.md").write_text("hello\n")
    return root
