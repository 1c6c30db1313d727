"""Shared helpers for response models."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return utcnow().isoformat(timespec="milliseconds").replace("+00:00", "Z")
