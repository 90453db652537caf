"""Pytest configuration and shared fixtures."""

import json
import os
import time
from pathlib import Path

import pytest

SECONDS_PER_DAY = 24 * 60 * 60

# A minimal chatSessions/*.json document in the Copilot Chat format
SAMPLE_SESSION = {
    "version": 3,
    "sessionId": "abcdef12-3456-7890-abcd-ef1234567890",
    "creationDate": 1704067200000,
    "requests": [
        {
            "message": {"text": "Explain this function please"},
            "response": [{"value": "This function **adds** two numbers"}],
        }
    ],
}


def write_session_file(chat_dir: Path, name: str, data, age_days: float = 0) -> Path:
    """Write a session file and backdate its mtime by ``age_days``."""
    path = chat_dir / name
    content = data if isinstance(data, str) else json.dumps(data)
    path.write_text(content, encoding="utf-8")
    mtime = time.time() - age_days * SECONDS_PER_DAY
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def storage_root(tmp_path):
    """Create an empty mock VS Code workspaceStorage directory."""
    root = tmp_path / "workspaceStorage"
    root.mkdir()
    return root


@pytest.fixture
def make_workspace(storage_root):
    """Factory creating ``<storage_root>/<id>/chatSessions`` with session files.

    ``sessions`` maps file names to JSON-serializable data or raw strings.
    """

    def _make(workspace_id: str, sessions: dict | None = None, age_days: float = 0) -> Path:
        chat_dir = storage_root / workspace_id / "chatSessions"
        chat_dir.mkdir(parents=True)
        for name, data in (sessions or {}).items():
            write_session_file(chat_dir, name, data, age_days=age_days)
        return chat_dir

    return _make


@pytest.fixture
def sample_workspace(make_workspace):
    """A recent workspace holding one valid session file."""
    make_workspace("ws-recent", {"session-001.json": SAMPLE_SESSION})
    return "ws-recent"
