"""Small helpers shared across apps."""

import uuid


def parse_uuid(value) -> uuid.UUID | None:
    """Return ``value`` as a UUID, or None when it is not one."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


__all__ = ["parse_uuid"]
