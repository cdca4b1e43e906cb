"""
ドメイン層

通貨・料金プランのカタログと判定ロジック、ドメイン例外。
フレームワークやデータベースには依存しない。
"""

from .exceptions.base import (
    BadRequestError,
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    StorageUnavailableError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "BadRequestError",
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "NotFoundError",
    "StorageUnavailableError",
    "UnauthorizedError",
    "ValidationError",
]
