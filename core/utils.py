"""Utility functions for wordlearner application."""

import re
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def parse_iso(value) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -int(-value + 0.5)
    return int(value + 0.5)


def split_multiline(text: str | None) -> list[str]:
    """Split an ECDICT field on its literal '\\n' delimiter."""
    if not text:
        return []
    parts = re.split(r'\\n|\n', text)
    return [p.strip() for p in parts if p.strip()]


def parse_definition_line(line: str) -> tuple[str, str]:
    """Split 'n. meaning' into ('n.', 'meaning'). Lines without a prefix get ''."""
    match = re.match(r'^([a-z]+\.)\s*(.*)$', line, re.IGNORECASE)
    if match:
        return match.group(1), match.group(2)
    return '', line
