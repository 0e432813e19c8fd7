import os
import sys
from pathlib import Path

import pytest

# Plain output for assertions; colors are decided at import time
os.environ.setdefault("BASELINE_NO_COLORS", "1")


# Ensure the project `src` directory is on sys.path so tests can import
# modules like `catalog`, `detect`, `pipeline`, etc.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture(autouse=True)
def isolated_actions_env(monkeypatch):
    """Keep the host's GitHub Actions environment out of every test."""
    for key in list(os.environ):
        if key.startswith("INPUT_") or key.startswith("GITHUB_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def project(tmp_path):
    """Write a small source tree: project({"a.js": "..."}) -> root path."""

    def _write(files):
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write
