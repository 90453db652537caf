"""Export configuration and defaults."""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_EXPORT_DIRNAME = "copilot_exports"
CHAT_SESSIONS_DIRNAME = "chatSessions"
SESSION_FILE_SUFFIX = ".json"

# Only workspaces used within this window are considered
DEFAULT_MAX_AGE_DAYS = 30
# Messages must be strictly longer than this after cleanup
DEFAULT_MIN_TEXT_LENGTH = 10


def default_output_dir(
    workspace_folder: Path | str | None = None,
    home: Path | str | None = None,
) -> Path:
    """Return the fallback export directory.

    ``<workspace>/copilot_exports`` when a workspace folder is known,
    otherwise ``<home>/copilot_exports``.
    """
    if workspace_folder:
        return Path(workspace_folder) / DEFAULT_EXPORT_DIRNAME
    base = Path(home) if home is not None else Path.home()
    return base / DEFAULT_EXPORT_DIRNAME


@dataclass
class ExportOptions:
    """Settings for a single export run."""

    output_dir: Path
    storage_root: Path | None = None  # None: use the platform default
    workspace_id: str | None = None  # None: pick the most recent workspace
    edition: str = "stable"
    max_age_days: int = DEFAULT_MAX_AGE_DAYS
    min_text_length: int = DEFAULT_MIN_TEXT_LENGTH
