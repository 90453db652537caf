"""Scanner module to read Copilot chat session files and extract conversations."""

import logging
from datetime import date
from pathlib import Path

import orjson
from pydantic import ValidationError

from .config import CHAT_SESSIONS_DIRNAME, DEFAULT_MIN_TEXT_LENGTH
from .content import clean_text, format_session_date
from .discovery import list_session_files
from .errors import SessionReadError
from .models import (
    NO_RESPONSE,
    DiagnosticLog,
    Entry,
    EntryContent,
    ScanResult,
    SessionFile,
    SessionFileError,
    SessionRequest,
)

logger = logging.getLogger(__name__)


def parse_session_file(file_path: Path) -> SessionFile:
    """Read and validate a single chat session JSON file.

    Raises:
        SessionReadError: If the file cannot be read, is not valid JSON, or is
            not a JSON object.
    """
    try:
        with open(file_path, "rb") as f:
            data = orjson.loads(f.read())
        return SessionFile.model_validate(data)
    except (OSError, orjson.JSONDecodeError, ValidationError) as e:
        raise SessionReadError(file_path, str(e)) from e


def _response_text(request: SessionRequest) -> str:
    """Join the cleaned textual parts of a request's response."""
    if not request.response:
        return NO_RESPONSE
    parts = [clean_text(part.value) for part in request.response if part.value]
    if not parts:
        return NO_RESPONSE
    return " ".join(parts).strip()


def extract_entries(
    session: SessionFile,
    workspace_id: str | None = None,
    min_text_length: int = DEFAULT_MIN_TEXT_LENGTH,
    today: date | None = None,
) -> list[Entry]:
    """Extract exportable conversation entries from a parsed session.

    Keys are ``conversation-N`` where N is the 1-based position of the request
    in the session, so skipped requests leave gaps in the numbering.
    """
    entries = []
    session_label = session.short_session_id
    session_date = format_session_date(session.creation_date, today=today)

    for index, request in enumerate(session.requests, 1):
        if request.message is None or not request.message.text:
            continue

        human = clean_text(request.message.text)
        copilot = _response_text(request)
        if len(human) <= min_text_length or len(copilot) <= min_text_length:
            continue

        entries.append(
            Entry(
                key=f"conversation-{index}",
                content=EntryContent(
                    session=session_label,
                    date=session_date,
                    human=human,
                    copilot=copilot,
                ),
                workspace=workspace_id,
            )
        )

    return entries


def scan_workspace(
    storage_root: Path | str,
    workspace_id: str,
    min_text_length: int = DEFAULT_MIN_TEXT_LENGTH,
) -> ScanResult:
    """Scan all chat session files of a workspace.

    Unreadable or malformed files are recorded in ``errors`` and the
    diagnostics; the scan always continues with the remaining files.
    """
    chat_sessions_dir = Path(storage_root) / workspace_id / CHAT_SESSIONS_DIRNAME
    result = ScanResult(diagnostics=DiagnosticLog())
    result.diagnostics.add(f"Looking for chat sessions in: {chat_sessions_dir}")

    if not chat_sessions_dir.is_dir():
        result.diagnostics.add("Chat sessions directory does not exist")
        return result

    session_files = list_session_files(chat_sessions_dir)
    result.files_found = len(session_files)
    result.diagnostics.add(f"Found {len(session_files)} JSON session files")

    for session_file in session_files:
        try:
            session = parse_session_file(session_file)
        except SessionReadError as e:
            logger.debug("Skipping %s: %s", session_file, e.reason)
            result.errors.append(SessionFileError(file_name=session_file.name, reason=e.reason))
            result.diagnostics.add(f"Error reading session file {session_file.name}: {e.reason}")
            continue

        entries = extract_entries(session, workspace_id, min_text_length=min_text_length)
        logger.debug("%s: %d entries", session_file.name, len(entries))
        result.entries.extend(entries)

    result.diagnostics.add(
        f"Processed files and found {len(result.entries)} valid conversations"
    )
    return result
