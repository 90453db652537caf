"""Exporter error types."""

from pathlib import Path


class ExporterError(Exception):
    """Base error for export operations."""

    pass


class StorageNotFoundError(ExporterError):
    """VS Code workspace storage directory does not exist."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"VS Code workspace storage directory not found: {path}")
        self.path = Path(path)


class SessionReadError(ExporterError):
    """A chat session file could not be read or parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(reason)
        self.path = Path(path)
        self.reason = reason


class ExportWriteError(ExporterError):
    """An export file could not be written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Could not write {path}: {reason}")
        self.path = Path(path)
        self.reason = reason
