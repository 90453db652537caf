"""Find the workspace whose Copilot chat sessions should be exported."""

import logging
import time
from pathlib import Path

from .config import CHAT_SESSIONS_DIRNAME, DEFAULT_MAX_AGE_DAYS, SESSION_FILE_SUFFIX
from .models import (
    DiagnosticLog,
    DiscoveryFailure,
    WorkspaceCandidate,
    WorkspaceResolution,
)

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60


def list_session_files(chat_sessions_dir: Path) -> list[Path]:
    """Return the session JSON files in a chatSessions directory, sorted by name."""
    return sorted(
        item
        for item in chat_sessions_dir.iterdir()
        if item.is_file() and item.name.endswith(SESSION_FILE_SUFFIX)
    )


def _inspect_workspace(workspace_dir: Path) -> WorkspaceCandidate | None:
    """Build a candidate for a workspace directory, or None if it has no chat sessions."""
    chat_sessions_dir = workspace_dir / CHAT_SESSIONS_DIRNAME
    if not chat_sessions_dir.is_dir():
        return None

    session_files = list_session_files(chat_sessions_dir)
    newest_mtime = max((f.stat().st_mtime for f in session_files), default=None)
    return WorkspaceCandidate(
        workspace_id=workspace_dir.name,
        newest_mtime=newest_mtime,
        session_count=len(session_files),
    )


def resolve_workspace(
    storage_root: Path | str,
    now: float | None = None,
    max_age_days: int = DEFAULT_MAX_AGE_DAYS,
) -> WorkspaceResolution:
    """Pick the workspace to export from VS Code's workspace storage.

    Workspace directories are visited in sorted name order and the first one
    whose newest session file was modified within ``max_age_days`` wins. This
    is a first-match rule: a later, more recent workspace is not preferred.

    Args:
        storage_root: The ``workspaceStorage`` directory.
        now: Reference epoch time in seconds. Defaults to ``time.time()``.
        max_age_days: Recency window for session file modification times.

    Returns:
        A WorkspaceResolution. When nothing qualifies, ``workspace_id`` is None
        and ``failure`` says which stage came up empty.
    """
    storage_root = Path(storage_root)
    now = time.time() if now is None else now
    diagnostics = DiagnosticLog()
    diagnostics.add(f"Checking VS Code storage: {storage_root}")

    if not storage_root.is_dir():
        diagnostics.add("VS Code workspace storage directory not found")
        logger.debug("Storage root %s does not exist", storage_root)
        return WorkspaceResolution(
            workspace_id=None,
            failure=DiscoveryFailure.ROOT_MISSING,
            diagnostics=diagnostics,
        )

    workspace_dirs = sorted(d for d in storage_root.iterdir() if d.is_dir())
    diagnostics.add(f"Found {len(workspace_dirs)} workspace directories")

    cutoff = now - max_age_days * _SECONDS_PER_DAY
    candidates: list[WorkspaceCandidate] = []
    for workspace_dir in workspace_dirs:
        candidate = _inspect_workspace(workspace_dir)
        if candidate is None:
            continue
        candidates.append(candidate)
        logger.debug(
            "Workspace %s: %d session files, newest mtime %s",
            candidate.workspace_id,
            candidate.session_count,
            candidate.newest_mtime,
        )

        if candidate.newest_mtime is not None and candidate.newest_mtime > cutoff:
            diagnostics.add(
                f"Found matching workspace with {candidate.session_count} chat sessions"
            )
            return WorkspaceResolution(
                workspace_id=candidate.workspace_id,
                candidates=candidates,
                diagnostics=diagnostics,
            )

    diagnostics.add(
        f"Found {len(candidates)} directories with chat sessions, but none recent"
    )
    failure = DiscoveryFailure.NONE_RECENT if candidates else DiscoveryFailure.NO_CANDIDATES
    return WorkspaceResolution(
        workspace_id=None,
        candidates=candidates,
        failure=failure,
        diagnostics=diagnostics,
    )
