"""
Pytest fixtures and configuration for Code Diff Highlighter tests.
"""

import pytest
from pathlib import Path

from code_diff_highlighter.config import DiffConfig
from code_diff_highlighter.storage import SessionStore


@pytest.fixture
def old_code() -> str:
    """Old version of a small Python function."""
    return """def greet(name):
    message = "Hello, " + name
    print(message)
    return message
"""


@pytest.fixture
def new_code() -> str:
    """New version with one edited line and one added line."""
    return """def greet(name):
    message = "Hello, " + name + "!"
    print(message)
    log.info("greeted %s", name)
    return message
"""


@pytest.fixture
def code_files(tmp_path: Path, old_code: str, new_code: str) -> tuple[Path, Path]:
    """Write the old and new code to files."""
    old_path = tmp_path / "old.py"
    new_path = tmp_path / "new.py"
    old_path.write_text(old_code, encoding="utf-8")
    new_path.write_text(new_code, encoding="utf-8")
    return old_path, new_path


@pytest.fixture
def session_path(tmp_path: Path) -> Path:
    """Session file location inside the test's temp directory."""
    return tmp_path / "state" / "session.json"


@pytest.fixture
def session_store(session_path: Path) -> SessionStore:
    """Session store backed by a temp file."""
    return SessionStore(session_path)


@pytest.fixture
def config(session_path: Path) -> DiffConfig:
    """Default config pointing at the temp session file."""
    return DiffConfig(storage_path=session_path)
