"""Contact directory service with groups, backed by PostgreSQL."""

__version__ = "1.0.0"
