"""Tests for the scanner module."""

from datetime import date

import pytest
from conftest import SAMPLE_SESSION

from copilot_chat_exporter.errors import SessionReadError
from copilot_chat_exporter.models import NO_RESPONSE, SessionFile
from copilot_chat_exporter.scanner import extract_entries, parse_session_file, scan_workspace


def _session(*requests, **extra) -> SessionFile:
    data = {"sessionId": "session-0001", "creationDate": 1704067200000, "requests": list(requests)}
    data.update(extra)
    return SessionFile.model_validate(data)


def _request(text, *values):
    request = {"message": {"text": text}}
    if values:
        request["response"] = [{"value": v} for v in values]
    return request


class TestExtractEntries:
    """Tests for extract_entries."""

    def test_example_session(self):
        session = SessionFile.model_validate(SAMPLE_SESSION)
        entries = extract_entries(session, "ws-1")

        assert len(entries) == 1
        entry = entries[0]
        assert entry.key == "conversation-1"
        assert entry.content.human == "Explain this function please"
        assert entry.content.copilot == "This function adds two numbers"
        assert entry.content.session == "abcdef12"
        assert entry.workspace == "ws-1"
        assert entry.type == "conversation"

    @pytest.mark.parametrize(
        "human, expected",
        [
            ("0123456789", 0),  # exactly 10 characters
            ("0123456789a", 1),
        ],
    )
    def test_human_length_boundary(self, human, expected):
        session = _session(_request(human, "A sufficiently long reply"))
        assert len(extract_entries(session)) == expected

    @pytest.mark.parametrize(
        "reply, expected",
        [
            ("0123456789", 0),
            ("0123456789a", 1),
        ],
    )
    def test_reply_length_boundary(self, reply, expected):
        session = _session(_request("A sufficiently long question", reply))
        assert len(extract_entries(session)) == expected

    def test_length_measured_after_cleanup(self):
        # 13 characters raw, 9 after stripping bold markers
        session = _session(_request("**123456789**", "A sufficiently long reply"))
        assert extract_entries(session) == []

    def test_missing_response(self):
        session = _session(_request("What does this code do?"))
        entries = extract_entries(session)
        assert entries[0].content.copilot == NO_RESPONSE

    def test_response_parts_joined(self):
        session = _session(_request("What does this code do?", "First **part**.", "Second `part`."))
        assert extract_entries(session)[0].content.copilot == "First part. Second part."

    def test_non_text_response_parts_skipped(self):
        request = {
            "message": {"text": "What does this code do?"},
            "response": [
                {"value": {"nested": True}},
                {"kind": "inlineReference"},
                None,
                {"value": "It parses the configuration"},
            ],
        }
        entries = extract_entries(_session(request))
        assert entries[0].content.copilot == "It parses the configuration"

    def test_only_non_text_parts_means_no_response(self):
        request = {"message": {"text": "What does this code do?"}, "response": [{"value": 42}]}
        assert extract_entries(_session(request))[0].content.copilot == NO_RESPONSE

    def test_numbering_follows_request_position(self):
        session = _session(
            _request("short", "A sufficiently long reply"),
            {"message": {}},
            _request("A sufficiently long question", "A sufficiently long reply"),
        )
        entries = extract_entries(session)
        assert [e.key for e in entries] == ["conversation-3"]

    def test_unknown_session_id(self):
        session = SessionFile.model_validate({"requests": [_request("A sufficiently long question", "And a long answer")]})
        assert extract_entries(session)[0].content.session == "unknown"

    def test_numeric_session_id(self):
        session = _session(_request("A sufficiently long question", "And a long answer"), sessionId=12345678901)
        assert extract_entries(session)[0].content.session == "12345678"

    def test_date_falls_back_to_today(self):
        session = _session(_request("A sufficiently long question", "And a long answer"), creationDate=None)
        today = date(2025, 1, 15)
        assert extract_entries(session, today=today)[0].content.date == today.strftime("%x")

    def test_custom_min_length(self):
        session = _session(_request("Why though?", "Because yes"))
        assert len(extract_entries(session)) == 1
        assert extract_entries(session, min_text_length=20) == []


class TestSessionFileSchema:
    """Tests for lenient parsing of session documents."""

    def test_requests_not_a_list(self):
        session = SessionFile.model_validate({"sessionId": "x", "requests": {"oops": 1}})
        assert session.requests == []

    def test_non_dict_requests_keep_position(self):
        session = SessionFile.model_validate({"requests": [None, "junk", _request("hello there")]})
        assert len(session.requests) == 3
        assert session.requests[0].message is None

    def test_message_text_not_a_string(self):
        session = SessionFile.model_validate({"requests": [{"message": {"text": ["a"]}}]})
        assert session.requests[0].message.text is None

    def test_unexpected_creation_date(self):
        session = SessionFile.model_validate({"creationDate": {"when": "now"}})
        assert session.creation_date is None


class TestScanWorkspace:
    """Tests for scan_workspace."""

    def test_scan_sample_workspace(self, storage_root, sample_workspace):
        result = scan_workspace(storage_root, sample_workspace)

        assert result.files_found == 1
        assert len(result.entries) == 1
        assert result.errors == []
        assert "Found 1 JSON session files" in result.diagnostics.lines
        assert result.diagnostics.lines[-1] == "Processed files and found 1 valid conversations"

    def test_malformed_file_skipped(self, storage_root, make_workspace):
        make_workspace(
            "ws",
            {
                "a-broken.json": "{not valid json",
                "b-good.json": SAMPLE_SESSION,
            },
        )
        result = scan_workspace(storage_root, "ws")

        assert len(result.entries) == 1
        assert [e.file_name for e in result.errors] == ["a-broken.json"]
        assert any(
            line.startswith("Error reading session file a-broken.json:")
            for line in result.diagnostics
        )

    def test_out_of_range_creation_date_does_not_abort(self, storage_root, make_workspace):
        odd_date = dict(SAMPLE_SESSION, creationDate="9999-12-31T23:59:59-05:00")
        make_workspace("ws", {"a-odd-date.json": odd_date, "b-good.json": SAMPLE_SESSION})

        result = scan_workspace(storage_root, "ws")

        assert result.errors == []
        assert len(result.entries) == 2
        assert result.entries[0].content.date == date.today().strftime("%x")

    def test_top_level_array_is_an_error(self, storage_root, make_workspace):
        make_workspace("ws", {"array.json": [1, 2, 3]})
        result = scan_workspace(storage_root, "ws")
        assert result.entries == []
        assert len(result.errors) == 1

    def test_entries_numbered_per_file(self, storage_root, make_workspace):
        make_workspace("ws", {"one.json": SAMPLE_SESSION, "two.json": SAMPLE_SESSION})
        result = scan_workspace(storage_root, "ws")
        assert [e.key for e in result.entries] == ["conversation-1", "conversation-1"]

    def test_missing_chat_sessions_dir(self, storage_root):
        result = scan_workspace(storage_root, "does-not-exist")
        assert result.entries == []
        assert result.diagnostics.lines[-1] == "Chat sessions directory does not exist"


def test_parse_session_file_missing(tmp_path):
    with pytest.raises(SessionReadError) as exc_info:
        parse_session_file(tmp_path / "missing.json")
    assert exc_info.value.path.name == "missing.json"
