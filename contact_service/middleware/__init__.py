"""Middleware modules for the service."""

from .request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
