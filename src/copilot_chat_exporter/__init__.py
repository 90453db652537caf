"""Copilot Chat Exporter - Archive VS Code GitHub Copilot chat history.

Finds the VS Code workspace with the most recent Copilot chat sessions,
extracts human/assistant message pairs and writes them to a JSON archive
plus a markdown summary.
"""

__version__ = "0.1.0"

from .config import ExportOptions, default_output_dir
from .content import clean_text
from .discovery import resolve_workspace
from .errors import ExporterError, ExportWriteError, SessionReadError, StorageNotFoundError
from .exporter import load_export, run_export, write_export
from .models import (
    DiagnosticLog,
    DiscoveryFailure,
    Entry,
    EntryContent,
    ExportResult,
    ScanResult,
    SessionFile,
    WorkspaceCandidate,
    WorkspaceResolution,
)
from .scanner import extract_entries, parse_session_file, scan_workspace
from .storage import get_vscode_storage_path

__all__ = [
    # Version
    "__version__",
    # Models
    "DiagnosticLog",
    "DiscoveryFailure",
    "Entry",
    "EntryContent",
    "ExportResult",
    "ScanResult",
    "SessionFile",
    "WorkspaceCandidate",
    "WorkspaceResolution",
    # Errors
    "ExporterError",
    "ExportWriteError",
    "SessionReadError",
    "StorageNotFoundError",
    # Configuration
    "ExportOptions",
    "default_output_dir",
    # Pipeline
    "clean_text",
    "get_vscode_storage_path",
    "resolve_workspace",
    "parse_session_file",
    "extract_entries",
    "scan_workspace",
    "write_export",
    "load_export",
    "run_export",
]
