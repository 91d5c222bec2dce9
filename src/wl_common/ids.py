"""Row ids are PostgreSQL UUIDs; anything else can never match a row."""

import uuid


def normalize_uuid(value: str) -> str | None:
    """Return the canonical UUID string, or None when `value` is not a UUID."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError):
        return None
