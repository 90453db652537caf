"""Locate the VS Code workspace storage directory."""

import platform
from pathlib import Path

from .errors import StorageNotFoundError

EDITION_PRODUCTS = {
    "stable": "Code",
    "insider": "Code - Insiders",
}


def get_vscode_storage_path(
    system: str | None = None,
    home: Path | str | None = None,
    edition: str = "stable",
) -> Path:
    """Get the path to the VS Code workspace storage directory.

    No filesystem access is performed; the path may not exist.

    Args:
        system: Platform name as returned by ``platform.system()``
                ('Windows', 'Darwin', 'Linux', ...). Defaults to the current one.
        home: Home directory. Defaults to ``Path.home()``.
        edition: 'stable' or 'insider'.

    Returns:
        Path to the ``workspaceStorage`` directory.
    """
    if edition not in EDITION_PRODUCTS:
        raise ValueError(f"Unknown VS Code edition: {edition}")
    product = EDITION_PRODUCTS[edition]
    system = system or platform.system()
    home = Path(home) if home is not None else Path.home()

    if system == "Windows":
        return home / "AppData" / "Roaming" / product / "User" / "workspaceStorage"
    elif system == "Darwin":  # macOS
        return home / "Library" / "Application Support" / product / "User" / "workspaceStorage"
    else:  # Linux and others
        return home / ".config" / product / "User" / "workspaceStorage"


def require_storage_root(path: Path | str) -> Path:
    """Return ``path`` as a Path, raising if the storage directory is missing.

    Raises:
        StorageNotFoundError: If ``path`` is not an existing directory.
    """
    path = Path(path)
    if not path.is_dir():
        raise StorageNotFoundError(path)
    return path
