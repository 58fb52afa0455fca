"""Shared fixtures for all tests."""

import os
import pytest

from codeguard.findings import load_payload_file


FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture
def payload_path():
    """Path to the sample analyzer payload."""
    return os.path.join(FIXTURES_DIR, "payload.json")


@pytest.fixture
def sample_result(payload_path):
    """ScanResult parsed from the sample payload: [low, critical, high, critical]."""
    return load_payload_file(payload_path)


@pytest.fixture
def source_tree(tmp_path):
    """A small project tree with files that should and shouldn't be collected."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("import os\n")
    (tmp_path / "src" / "db.js").write_text("const q = 'SELECT 1';\n")
    (tmp_path / "Dockerfile").write_text("FROM python:3.12\n")
    (tmp_path / "README.md").write_text("# readme\n")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config.py").write_text("x = 1\n")
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.js").write_text("module.exports = {}\n")
    return tmp_path
