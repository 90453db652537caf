"""Write extracted conversations to JSON and markdown files.

A successful export produces two sibling files sharing a timestamped stem:
- ``copilot_export_<ts>.json``: the full entry list
- ``copilot_export_<ts>.md``: a human-readable summary

When no conversations were found, a single diagnostics report
(``copilot_export_diagnostics_<ts>.md``) is written instead.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

import orjson

from .config import DEFAULT_MAX_AGE_DAYS, ExportOptions
from .content import export_timestamp, format_export_date
from .discovery import resolve_workspace
from .errors import ExportWriteError
from .models import DiagnosticLog, Entry, ExportResult
from .scanner import scan_workspace
from .storage import get_vscode_storage_path

logger = logging.getLogger(__name__)

POSSIBLE_SOLUTIONS = [
    "Make sure you have used GitHub Copilot Chat in this workspace",
    "Try opening a different workspace where you've used Copilot",
    "Check if VS Code is storing data in a custom location",
    "On Windows, data might be in a different AppData folder",
]


def possible_solutions(max_age_days: int = DEFAULT_MAX_AGE_DAYS) -> list[str]:
    """Troubleshooting tips for the diagnostics report."""
    return POSSIBLE_SOLUTIONS + [
        f"The exporter looks for chat sessions from the last {max_age_days} days"
    ]


def entries_to_json(entries: list[Entry]) -> bytes:
    """Serialize entries as a pretty-printed JSON array."""
    return orjson.dumps([entry.to_dict() for entry in entries], option=orjson.OPT_INDENT_2)


def entries_to_markdown(entries: list[Entry], now: datetime | None = None) -> str:
    """Render entries as a markdown summary document."""
    lines = [
        "# Copilot Export",
        f"Export date: {format_export_date(now)}",
        "",
        f"Total entries: {len(entries)}",
        "",
    ]
    for entry in entries:
        lines.append("---")
        lines.append(f"**Session:** {entry.content.session}")
        lines.append(f"**Date:** {entry.content.date}")
        lines.append("")
        lines.append("**Human:**")
        lines.append("")
        lines.append(entry.content.human)
        lines.append("")
        lines.append("**Copilot:**")
        lines.append("")
        lines.append(entry.content.copilot)
        lines.append("")
    return "\n".join(lines)


def diagnostics_to_markdown(
    diagnostics: DiagnosticLog, max_age_days: int = DEFAULT_MAX_AGE_DAYS
) -> str:
    """Render the diagnostic report written when nothing was exported."""
    lines = [
        "🔍 **Copilot Export Diagnostics**",
        "",
        "**Search Details:**",
    ]
    lines.extend(f"• {line}" for line in diagnostics)
    lines.append("")
    lines.append("**Possible Solutions:**")
    lines.extend(f"• {solution}" for solution in possible_solutions(max_age_days))
    return "\n".join(lines)


def _write(path: Path, data: str | bytes) -> None:
    try:
        if isinstance(data, bytes):
            path.write_bytes(data)
        else:
            path.write_text(data, encoding="utf-8")
    except OSError as e:
        raise ExportWriteError(path, str(e)) from e
    logger.debug("Wrote %s", path)


def write_export(
    entries: list[Entry],
    diagnostics: DiagnosticLog,
    output_dir: Path | str,
    now: datetime | None = None,
    max_age_days: int = DEFAULT_MAX_AGE_DAYS,
) -> ExportResult:
    """Write the export files for a run.

    Args:
        entries: Conversations to export (may be empty).
        diagnostics: Trace collected during discovery and scanning.
        output_dir: Directory to write into; created if missing.
        now: Timestamp used for file names and the markdown header.
        max_age_days: Recency window quoted in the diagnostics report.

    Returns:
        ExportResult with the paths that were written.

    Raises:
        ExportWriteError: If the directory or a file cannot be written.
    """
    output_dir = Path(output_dir)
    now = now or datetime.now(timezone.utc)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportWriteError(output_dir, str(e)) from e

    stamp = export_timestamp(now)

    if not entries:
        diagnostics_path = output_dir / f"copilot_export_diagnostics_{stamp}.md"
        _write(diagnostics_path, diagnostics_to_markdown(diagnostics, max_age_days))
        return ExportResult(entry_count=0, diagnostics_path=diagnostics_path)

    json_path = output_dir / f"copilot_export_{stamp}.json"
    _write(json_path, entries_to_json(entries))

    markdown_path = json_path.with_suffix(".md")
    _write(markdown_path, entries_to_markdown(entries, now.astimezone()))

    return ExportResult(
        entry_count=len(entries),
        json_path=json_path,
        markdown_path=markdown_path,
    )


def load_export(json_path: Path | str) -> list[Entry]:
    """Load entries back from a JSON export file."""
    with open(json_path, "rb") as f:
        data = orjson.loads(f.read())
    if not isinstance(data, list):
        raise ValueError(f"{json_path} does not contain an array of entries")
    return [Entry.from_dict(item) for item in data if isinstance(item, dict)]


def run_export(options: ExportOptions, now: datetime | None = None) -> ExportResult:
    """Resolve, scan and export in one go.

    Discovery and per-file problems end up in the diagnostics report; only
    write failures are raised.
    """
    storage_root = options.storage_root or get_vscode_storage_path(edition=options.edition)
    diagnostics = DiagnosticLog()
    entries: list[Entry] = []

    workspace_id = options.workspace_id
    if workspace_id is None:
        resolution = resolve_workspace(storage_root, max_age_days=options.max_age_days)
        diagnostics.extend(resolution.diagnostics)
        workspace_id = resolution.workspace_id
    else:
        diagnostics.add(f"Checking VS Code storage: {storage_root}")
        diagnostics.add(f"Using workspace: {workspace_id}")

    if workspace_id is not None:
        scan = scan_workspace(storage_root, workspace_id, min_text_length=options.min_text_length)
        diagnostics.extend(scan.diagnostics)
        entries = scan.entries

    return write_export(
        entries, diagnostics, options.output_dir, now=now, max_age_days=options.max_age_days
    )
