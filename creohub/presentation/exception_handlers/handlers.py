"""例外を標準エラーレスポンス（ErrorResponse）に変換するハンドラー"""

from typing import Awaitable, Callable, Optional, cast

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from creohub.core.logging import get_logger
from creohub.domain.exceptions.base import DomainError, StorageUnavailableError, ValidationError
from creohub.presentation.exceptions import (
    APIError,
    ErrorResponse,
    domain_error_to_api_error,
)

logger = get_logger(__name__)


def _render(
    body: ErrorResponse, status_code: int, headers: Optional[dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse(
        content=body.model_dump(mode="json"), status_code=status_code, headers=headers
    )


async def api_error_handler(request: Request, exc: APIError) -> Response:
    return _render(exc.to_response(), exc.status_code, exc.headers)


async def domain_error_handler(request: Request, exc: DomainError) -> Response:
    # 503はインフラ障害なので運用側が気付けるよう記録する
    if isinstance(exc, StorageUnavailableError):
        logger.error(f"Storage unavailable on {request.url.path}: {exc.message}")
    return await api_error_handler(request, domain_error_to_api_error(exc))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """ルーティングの404/405などもここを通る"""
    body = ErrorResponse(code="http_error", message=str(exc.detail))
    return _render(body, exc.status_code, exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """リクエストの型検証エラーを400 validation_error として返す"""
    details = [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]
    error = ValidationError("Invalid request", details=details)
    return await domain_error_handler(request, error)


def register_exception_handlers(app: FastAPI) -> None:
    handler_type = Callable[[Request, Exception], Awaitable[Response]]
    handlers = {
        DomainError: domain_error_handler,
        APIError: api_error_handler,
        StarletteHTTPException: http_exception_handler,
        RequestValidationError: validation_exception_handler,
    }
    for exc_class, handler in handlers.items():
        # Starletteのハンドラー型は例外の型を区別しない
        app.add_exception_handler(exc_class, cast(handler_type, handler))
