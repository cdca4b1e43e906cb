"""
セッション管理ヘルパー

FastAPIのRequestからセッション・クライアント情報を取り出すための関数
"""

from typing import Optional

from fastapi import Request

# プロキシ経由の場合に実IPを保持するヘッダー（優先順）
CLIENT_IP_HEADERS = ("CF-Connecting-IP", "X-Forwarded-For")


def get_client_ip(request: Request) -> Optional[str]:
    """
    クライアントIPアドレスを取得

    CF-Connecting-IP、X-Forwarded-For、client.host の順に参照する

    Args:
        request: FastAPI Request

    Returns:
        クライアントIPアドレス
    """
    for header in CLIENT_IP_HEADERS:
        value = request.headers.get(header)
        if value:
            # X-Forwarded-Forには複数のIPが含まれる可能性があるため、最初のものを使用
            return value.split(",")[0].strip()
    return request.client.host if request.client else None


def get_user_agent(request: Request) -> Optional[str]:
    """
    User-Agentヘッダーを取得

    Args:
        request: FastAPI Request

    Returns:
        User-Agentヘッダー
    """
    return request.headers.get("User-Agent")


def get_bearer_token(request: Request) -> Optional[str]:
    """
    AuthorizationヘッダーからBearerトークンを取り出す

    Args:
        request: FastAPI Request

    Returns:
        トークン、ヘッダーがないかBearer形式でない場合はNone
    """
    header = request.headers.get("Authorization")
    if not header:
        return None

    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
