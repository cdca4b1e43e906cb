from .error_handler import error_response_middleware
from .security_headers import SecurityHeadersMiddleware
from .session import session_middleware

__all__ = [
    "error_response_middleware",
    "SecurityHeadersMiddleware",
    "session_middleware",
]
