from .session_helper import get_bearer_token, get_client_ip, get_user_agent

__all__ = [
    "get_bearer_token",
    "get_client_ip",
    "get_user_agent",
]
