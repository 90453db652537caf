"""Tests for locating VS Code workspace storage."""

from pathlib import Path

import pytest

from copilot_chat_exporter.errors import StorageNotFoundError
from copilot_chat_exporter.storage import get_vscode_storage_path, require_storage_root

HOME = Path("/home/tester")


class TestGetVSCodeStoragePath:
    """Tests for get_vscode_storage_path."""

    def test_windows(self):
        path = get_vscode_storage_path("Windows", HOME)
        assert path == HOME / "AppData" / "Roaming" / "Code" / "User" / "workspaceStorage"

    def test_macos(self):
        path = get_vscode_storage_path("Darwin", HOME)
        assert path == HOME / "Library" / "Application Support" / "Code" / "User" / "workspaceStorage"

    def test_linux(self):
        path = get_vscode_storage_path("Linux", HOME)
        assert path == HOME / ".config" / "Code" / "User" / "workspaceStorage"

    def test_unknown_platform_uses_linux_layout(self):
        assert get_vscode_storage_path("FreeBSD", HOME) == get_vscode_storage_path("Linux", HOME)

    def test_insider_edition(self):
        path = get_vscode_storage_path("Darwin", HOME, edition="insider")
        assert "Code - Insiders" in path.parts

    def test_unknown_edition(self):
        with pytest.raises(ValueError):
            get_vscode_storage_path("Linux", HOME, edition="nightly")

    def test_defaults_to_current_home(self):
        path = get_vscode_storage_path()
        assert path.name == "workspaceStorage"
        assert str(path).startswith(str(Path.home()))


class TestRequireStorageRoot:
    """Tests for require_storage_root."""

    def test_existing(self, storage_root):
        assert require_storage_root(str(storage_root)) == storage_root

    def test_missing(self, tmp_path):
        missing = tmp_path / "nope"
        with pytest.raises(StorageNotFoundError) as exc_info:
            require_storage_root(missing)
        assert exc_info.value.path == missing
        assert "not found" in str(exc_info.value)
