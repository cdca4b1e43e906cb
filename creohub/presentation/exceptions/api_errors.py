"""
標準エラーレスポンスとドメインエラーのHTTP変換

すべてのエラーは {"status": "error", "code", "message", "details"} の形で返す。
"""

from typing import Optional

from fastapi import HTTPException, status
from pydantic import BaseModel

from ...domain.exceptions.base import (
    BadRequestError,
    ConflictError,
    DomainError,
    ErrorDetails,
    ForbiddenError,
    NotFoundError,
    StorageUnavailableError,
    UnauthorizedError,
)


class ErrorResponse(BaseModel):
    status: str = "error"
    code: str
    message: str
    details: Optional[ErrorDetails] = None


class APIError(HTTPException):
    """
    標準エラーレスポンスを持つHTTPException

    引数を省略した場合は500 internal_server_error になる。
    """

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[ErrorDetails] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "internal_server_error",
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.error_code = error_code
        self.details = details

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            code=self.error_code, message=str(self.detail), details=self.details
        )


# ValidationError は BadRequestError のサブクラスなので400に含まれる
_STATUS_BY_ERROR: dict[type[DomainError], int] = {
    BadRequestError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _status_for(error: DomainError) -> int:
    for error_type in type(error).__mro__:
        if error_type in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_error_to_api_error(domain_error: DomainError) -> APIError:
    """
    ドメインエラーをAPIErrorに変換

    401には WWW-Authenticate: Bearer を付ける。
    対応表にない DomainError は500になるが、code と message はそのまま返す。

    Examples:
        >>> domain_error_to_api_error(UnauthorizedError("Session expired")).status_code
        401
    """
    status_code = _status_for(domain_error)
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if status_code == status.HTTP_401_UNAUTHORIZED
        else None
    )
    return APIError(
        message=domain_error.message,
        details=domain_error.details,
        status_code=status_code,
        error_code=domain_error.code,
        headers=headers,
    )
