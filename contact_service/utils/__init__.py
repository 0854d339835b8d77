"""Utility functions organized by domain.

Prefer importing from specific modules for better clarity:
    from contact_service.utils.strings import mask_email
    from contact_service.utils.generators import generate_request_id
    from contact_service.utils.transaction_helpers import safe_transaction
"""

# Generators
from .generators import generate_entity_id, generate_request_id, utc_now

# Strings
from .strings import (
    has_control_characters,
    is_person_name,
    mask_email,
    mask_phone_number,
    sanitize_string,
)

__all__ = [
    # Generators
    "generate_entity_id",
    "generate_request_id",
    "utc_now",
    # Strings
    "has_control_characters",
    "is_person_name",
    "mask_email",
    "mask_phone_number",
    "sanitize_string",
]
