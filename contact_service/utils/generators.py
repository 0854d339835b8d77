"""ID generation utilities."""

import uuid
from datetime import UTC, datetime


def generate_request_id() -> str:
    """Generate a unique request ID.

    Returns:
        Request ID string (UUID)

    Examples:
        >>> generate_request_id()
        "a1b2c3d4-e5f6-7890-abcd-ef1234567890"
    """
    return str(uuid.uuid4())


def generate_entity_id() -> uuid.UUID:
    """Generate the identity of a new contact or group."""
    return uuid.uuid4()


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)
