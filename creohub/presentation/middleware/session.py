"""セッション管理ミドルウェア"""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from creohub.utils.session_helper import get_bearer_token, get_client_ip, get_user_agent


async def session_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    セッション管理ミドルウェア

    Bearerトークンとクライアント情報をrequest.stateへ格納する。
    トークンの検証（と有効期限の延長）は認証が必要なエンドポイントの
    依存関係 get_current_user_id で行う。

    Args:
        request: HTTPリクエスト
        call_next: 次のミドルウェア/エンドポイント

    Returns:
        HTTPレスポンス
    """
    request.state.session_token = get_bearer_token(request)
    request.state.client_ip = get_client_ip(request)
    request.state.user_agent = get_user_agent(request)
    request.state.user_id = None

    return await call_next(request)
