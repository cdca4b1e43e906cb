"""Presentation layer - HTTP API (routers, schemas, middleware, error mapping)"""

from .api import api_router
from .exception_handlers import register_exception_handlers
from .exceptions import APIError, ErrorResponse, domain_error_to_api_error

__all__ = [
    "api_router",
    "register_exception_handlers",
    "APIError",
    "ErrorResponse",
    "domain_error_to_api_error",
]
