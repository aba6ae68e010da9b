# furniture_store/core/ids.py
import uuid


def parse_uuid(raw) -> uuid.UUID | None:
    """Return raw as a UUID, or None when it is not one (so lookups become 404s)."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (ValueError, TypeError, AttributeError):
        return None
