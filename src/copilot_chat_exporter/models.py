"""Data models for Copilot chat export.

Two kinds of models live here:
- dataclasses for the values that flow through the export pipeline
  (entries, diagnostics, stage results)
- pydantic models describing the on-disk chat session JSON written by the
  GitHub Copilot Chat extension
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

NO_RESPONSE = "No response"
UNKNOWN_SESSION = "unknown"


@dataclass
class EntryContent:
    """The exported payload of a single conversation turn."""

    session: str
    date: str
    human: str
    copilot: str


@dataclass
class Entry:
    """One normalized human/assistant message pair selected for export."""

    key: str  # 'conversation-N'
    content: EntryContent
    workspace: str | None = None
    type: str = "conversation"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation used in export files."""
        return {
            "key": self.key,
            "content": {
                "session": self.content.session,
                "date": self.content.date,
                "human": self.content.human,
                "copilot": self.content.copilot,
            },
            "workspace": self.workspace,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        content = data.get("content") or {}
        return cls(
            key=str(data.get("key", "")),
            content=EntryContent(
                session=str(content.get("session", UNKNOWN_SESSION)),
                date=str(content.get("date", "")),
                human=str(content.get("human", "")),
                copilot=str(content.get("copilot", NO_RESPONSE)),
            ),
            workspace=data.get("workspace"),
            type=str(data.get("type", "conversation")),
        )


@dataclass
class DiagnosticLog:
    """Ordered, append-only trace of what the export looked at.

    Only written to disk when no entries were found.
    """

    lines: list[str] = field(default_factory=list)

    def add(self, line: str) -> None:
        self.lines.append(line)

    def extend(self, other: "DiagnosticLog") -> None:
        self.lines.extend(other.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)


class DiscoveryFailure(Enum):
    """Why no workspace could be resolved."""

    ROOT_MISSING = "root_missing"
    NO_CANDIDATES = "no_candidates"
    NONE_RECENT = "none_recent"


@dataclass
class WorkspaceCandidate:
    """A workspace storage directory that has a chatSessions folder."""

    workspace_id: str
    newest_mtime: float | None  # None when chatSessions holds no session files
    session_count: int = 0


@dataclass
class WorkspaceResolution:
    """Outcome of picking a workspace to export."""

    workspace_id: str | None
    candidates: list[WorkspaceCandidate] = field(default_factory=list)
    failure: DiscoveryFailure | None = None
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @property
    def found(self) -> bool:
        return self.workspace_id is not None


@dataclass
class SessionFileError:
    """A session file that was skipped during the scan."""

    file_name: str
    reason: str


@dataclass
class ScanResult:
    """Entries and diagnostics collected from one workspace."""

    entries: list[Entry] = field(default_factory=list)
    errors: list[SessionFileError] = field(default_factory=list)
    files_found: int = 0
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)


@dataclass
class ExportResult:
    """Files written by an export run, for the caller to report."""

    entry_count: int
    json_path: Path | None = None
    markdown_path: Path | None = None
    diagnostics_path: Path | None = None

    @property
    def found_entries(self) -> bool:
        return self.entry_count > 0


# Session file schema. Every field degrades to None/[] on unexpected shapes so
# that one odd record never invalidates the whole file.


class ResponsePart(BaseModel):
    """One item of a request's response list; only textual values are kept."""

    model_config = ConfigDict(extra="ignore")

    value: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _text_only(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None


class RequestMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None

    @field_validator("text", mode="before")
    @classmethod
    def _text_only(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None


class SessionRequest(BaseModel):
    """A single request/response exchange in a chat session."""

    model_config = ConfigDict(extra="ignore")

    message: RequestMessage | None = None
    response: list[ResponsePart] | None = None

    @field_validator("message", mode="before")
    @classmethod
    def _message_object(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else None

    @field_validator("response", mode="before")
    @classmethod
    def _response_list(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return None
        return [item if isinstance(item, dict) else {} for item in v]


class SessionFile(BaseModel):
    """A chatSessions/*.json document.

    Structure (abridged):
        {
            "sessionId": "...",
            "creationDate": 1704067200000,
            "requests": [
                {"message": {"text": "..."}, "response": [{"value": "..."}, ...]},
                ...
            ]
        }
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")
    creation_date: int | float | str | None = Field(default=None, alias="creationDate")
    requests: list[SessionRequest] = Field(default_factory=list)

    @field_validator("session_id", mode="before")
    @classmethod
    def _session_id_string(cls, v: Any) -> str | None:
        if not v or isinstance(v, (dict, list)):
            return None
        return str(v)

    @field_validator("creation_date", mode="before")
    @classmethod
    def _creation_date_scalar(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            return None
        return v

    @field_validator("requests", mode="before")
    @classmethod
    def _requests_list(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return []
        # Keep placeholders so request positions stay stable
        return [item if isinstance(item, dict) else {} for item in v]

    @property
    def short_session_id(self) -> str:
        return self.session_id[:8] if self.session_id else UNKNOWN_SESSION
