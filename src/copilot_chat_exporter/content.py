"""Text normalization and date formatting helpers."""

import re
from datetime import date, datetime, timezone

# Threshold to distinguish between seconds and milliseconds timestamps.
# Timestamps above this value (approximately year 2001 in milliseconds) are
# treated as milliseconds and divided by 1000 to convert to seconds.
_MILLISECONDS_THRESHOLD = 1e12

_CODE_FENCE_RE = re.compile(r"```\w*\n?")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    """Strip lightweight markdown from a chat message and flatten whitespace.

    Code fence delimiters, inline code backticks and bold/italic markers are
    removed while their content is kept. The result is a single line.
    """
    if not text:
        return ""
    # Removing one marker can expose another (e.g. "**a*b**"), so repeat
    # until nothing matches
    previous = None
    while text != previous:
        previous = text
        text = _CODE_FENCE_RE.sub("", text)
        text = _INLINE_CODE_RE.sub(r"\1", text)
        text = _BOLD_RE.sub(r"\1", text)
        text = _ITALIC_RE.sub(r"\1", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    text = text.strip()
    return _WHITESPACE_RE.sub(" ", text)


def _parse_creation_date(value: int | float | str) -> datetime | None:
    if isinstance(value, str):
        value = value.strip()
        try:
            value = float(value)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
                return parsed.astimezone() if parsed.tzinfo else parsed
            except (ValueError, OverflowError, OSError):
                return None
    try:
        epoch = float(value)
        if epoch > _MILLISECONDS_THRESHOLD:
            epoch = epoch / 1000
        return datetime.fromtimestamp(epoch)
    except (ValueError, TypeError, OSError, OverflowError):
        return None


def format_session_date(
    creation_date: int | float | str | None, today: date | None = None
) -> str:
    """Format a session creation timestamp as a localized date string.

    Falls back to today's date when the timestamp is missing or unparseable.
    """
    parsed = _parse_creation_date(creation_date) if creation_date else None
    if parsed is None:
        return (today or date.today()).strftime("%x")
    return parsed.strftime("%x")


def format_export_date(now: datetime | None = None) -> str:
    """Localized date and time for the markdown header."""
    return (now or datetime.now()).strftime("%c")


def export_timestamp(now: datetime | None = None) -> str:
    """Return a filename-safe UTC timestamp, e.g. ``2025-01-15T10-00-00-000Z``."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = f"{now:%Y-%m-%dT%H:%M:%S}.{now.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")
