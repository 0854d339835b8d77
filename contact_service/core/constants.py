"""Service Constants.

Centralized constants used throughout the contact service.
This file contains all hardcoded values that should be maintained in one place.
"""

# ============================================================================
# VALUE OBJECT LIMITS
# ============================================================================

class ValidationLimits:
    """Bounds enforced by the domain value objects."""
    NAME_MIN_LENGTH = 1
    NAME_MAX_LENGTH = 50
    SURNAME_MAX_LENGTH = 100
    PATRONYMIC_MAX_LENGTH = 100

    AGE_MIN = 0
    AGE_MAX = 150

    EMAIL_MAX_LENGTH = 254
    PHONE_NUMBER_MAX_LENGTH = 20
    PHONE_NUMBER_INPUT_MAX_LENGTH = 40

    GROUP_NAME_MAX_LENGTH = 100
    GROUP_DESCRIPTION_MAX_LENGTH = 1000


# ============================================================================
# GENDER CONSTANTS
# ============================================================================

class GenderValues:
    """Accepted gender values."""
    MALE = "MALE"
    FEMALE = "FEMALE"

    ALL = [MALE, FEMALE]


# ============================================================================
# PAGINATION CONSTANTS
# ============================================================================

class Pagination:
    """Pagination defaults and limits."""
    DEFAULT_LIMIT = 10
    MIN_LIMIT = 1
    MAX_LIMIT = 100
    DEFAULT_OFFSET = 0
    # PostgreSQL bigint
    MAX_OFFSET = 2**63 - 1

    SORT_SEPARATOR = ","
    DESCENDING_PREFIX = "-"


# ============================================================================
# DATABASE CONSTANTS
# ============================================================================

class DatabaseLimits:
    """Connection pool and statement limits."""
    POOL_SIZE = 10
    MAX_OVERFLOW = 20
    STATEMENT_TIMEOUT_MS = 5000

    GENDER_MAX_LENGTH = 16


class TableNames:
    """Persisted table names."""
    CONTACT = "contact"
    GROUP = "group"
    GROUP_CONTACT = "group_contact"


# ============================================================================
# ERROR MESSAGES
# ============================================================================

class ErrorMessages:
    """Standard error messages."""
    INTERNAL_SERVER_ERROR = "Internal server error"
    CONTACT_NOT_FOUND = "Contact {contact_id} not found"
    GROUP_NOT_FOUND = "Group {group_id} not found"
    GROUP_OR_CONTACT_NOT_FOUND = "Group {group_id} or contact {contact_id} not found"
    STORAGE_UNAVAILABLE = "Storage is unavailable"
    CONFLICT = "Record already exists"

    FIELD_REQUIRED = "{field} is required"
    FIELD_NOT_STRING = "{field} must be a string"
    FIELD_TOO_LONG = "{field} must be at most {max_length} characters"
    FIELD_INVALID_CHARACTERS = "{field} may only contain letters, spaces, hyphens and apostrophes"
    FIELD_CONTROL_CHARACTERS = "{field} must not contain control characters"
    AGE_NOT_INTEGER = "age must be an integer"
    AGE_OUT_OF_RANGE = "age must be between {min_age} and {max_age}"
    EMAIL_INVALID = "email is not a valid address: {reason}"
    PHONE_NUMBER_INVALID = "phone_number is not a valid phone number"
    GENDER_INVALID = "gender must be one of: {allowed}"
    SORT_FIELD_UNKNOWN = "cannot sort by '{field}'; allowed fields: {allowed}"
    LIMIT_INVALID = "limit must be at least {min_limit}"
    OFFSET_INVALID = "offset must not be negative"
    OFFSET_TOO_LARGE = "offset must be at most {max_offset}"


# ============================================================================
# HTTP HEADERS
# ============================================================================

class HttpHeaders:
    """HTTP header names."""
    REQUEST_ID = "X-Request-ID"
    PROCESS_TIME = "X-Process-Time"


# ============================================================================
# API ENDPOINTS
# ============================================================================

class ApiEndpoints:
    """API endpoint paths."""
    DOCS = "/docs"
    REDOC = "/redoc"
    OPENAPI = "/openapi.json"
    HEALTH = "/health"
