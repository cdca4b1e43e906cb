"""
Presentation層例外ハンドラーの単体テスト
"""

import asyncio
import json
from unittest.mock import MagicMock

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from creohub.domain.exceptions.base import (
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
    UnauthorizedError,
)
from creohub.presentation.exception_handlers.handlers import (
    domain_error_handler,
    http_exception_handler,
    validation_exception_handler,
)


class TestDomainErrorHandler:
    """domain_error_handler関数のテスト"""

    def test_not_found_error_handler(self) -> None:
        """NotFoundErrorが404レスポンスに変換されること"""
        error = NotFoundError("Creator not found", details={"creator_id": 123})
        request = MagicMock()

        response = asyncio.run(domain_error_handler(request, error))

        assert response.status_code == 404
        content = json.loads(response.body.decode())
        assert content["status"] == "error"
        assert content["code"] == "not_found"
        assert content["message"] == "Creator not found"
        assert content["details"] == {"creator_id": 123}

    def test_unauthorized_error_handler(self) -> None:
        """UnauthorizedErrorが401レスポンスとWWW-Authenticateヘッダーになること"""
        request = MagicMock()

        response = asyncio.run(
            domain_error_handler(request, UnauthorizedError("Invalid or expired session"))
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_conflict_error_handler(self) -> None:
        request = MagicMock()
        response = asyncio.run(
            domain_error_handler(request, ConflictError("User already exists"))
        )
        assert response.status_code == 409

    def test_storage_unavailable_handler(self) -> None:
        """ストレージ障害は503になること"""
        request = MagicMock()
        response = asyncio.run(
            domain_error_handler(request, StorageUnavailableError("Failed to validate session"))
        )

        assert response.status_code == 503
        content = json.loads(response.body.decode())
        assert content["code"] == "storage_unavailable"


class TestHttpExceptionHandler:
    """http_exception_handler関数のテスト"""

    def test_http_exception(self) -> None:
        request = MagicMock()
        response = asyncio.run(
            http_exception_handler(request, HTTPException(status_code=404, detail="Not Found"))
        )

        assert response.status_code == 404
        content = json.loads(response.body.decode())
        assert content == {
            "status": "error",
            "code": "http_error",
            "message": "Not Found",
            "details": None,
        }


class TestValidationExceptionHandler:
    """validation_exception_handler関数のテスト"""

    def test_validation_error(self) -> None:
        """RequestValidationErrorが400レスポンスに変換されること"""
        exc = RequestValidationError(
            [
                {
                    "loc": ("query", "amount"),
                    "msg": "Input should be greater than or equal to 0",
                    "type": "greater_than_equal",
                }
            ]
        )
        request = MagicMock()

        response = asyncio.run(validation_exception_handler(request, exc))

        assert response.status_code == 400
        content = json.loads(response.body.decode())
        assert content["code"] == "validation_error"
        assert content["message"] == "Invalid request"
        assert content["details"][0]["loc"] == ["query", "amount"]
