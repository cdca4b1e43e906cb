"""未処理例外を標準エラーレスポンスに変換するミドルウェア"""

from collections.abc import Awaitable, Callable

import sentry_sdk
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from creohub.core.logging import get_logger
from creohub.presentation.exceptions import ErrorResponse

logger = get_logger(__name__)

INTERNAL_ERROR = ErrorResponse(
    code="internal_server_error",
    message="Internal server error occurred",
)


async def error_response_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    例外ハンドラーに拾われなかった例外を500として返す

    スタックトレースはログとSentryにのみ残し、レスポンスには含めない。
    """
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(
            f"Unhandled {type(e).__name__} on {request.method} {request.url.path}",
            exc_info=e,
        )
        sentry_sdk.capture_exception(e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=INTERNAL_ERROR.model_dump(),
        )
