"""
ドメイン層の例外クラス

認証・料金プラン・ストレージ操作で発生するエラーを表現する純粋なPython例外。
フレームワークに依存せず、HTTPステータスへの変換はPresentation層が行う。
"""

from typing import Any, ClassVar, Optional

ErrorDetails = dict[str, Any] | list[dict[str, Any]]


class DomainError(Exception):
    """
    ドメイン層のベース例外

    サブクラスは default_message と default_code を上書きする。

    Attributes:
        message: エラーメッセージ
        code: エラーコード（識別子）
        details: エラーの詳細情報（オプション）
    """

    default_message: ClassVar[str] = "Domain error"
    default_code: ClassVar[str] = "domain_error"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[ErrorDetails] = None,
    ) -> None:
        """
        Args:
            message: エラーメッセージ（省略時はクラスの既定値）
            code: エラーコード（省略時はクラスの既定値）
            details: エラーの詳細情報（オプション）
        """
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details
        super().__init__(self.message)


class NotFoundError(DomainError):
    """プラン・クリエイターなどが見つからない"""

    default_message = "Resource not found"
    default_code = "not_found"


class BadRequestError(DomainError):
    """不正なリクエスト（未知のプランID・未サポート通貨など）"""

    default_message = "Bad request"
    default_code = "bad_request"


class ValidationError(BadRequestError):
    """
    入力値の検証エラー

    details にはリスト形式で複数のエラーを含められる。
    """

    default_message = "Validation error"
    default_code = "validation_error"


class UnauthorizedError(DomainError):
    """
    認証エラー

    トークンの欠落・不正・失効・期限切れを区別せずに通知する。
    """

    default_message = "Authentication required"
    default_code = "unauthorized"


class ForbiddenError(DomainError):
    """認証済みだが操作が許可されていない"""

    default_message = "Access forbidden"
    default_code = "forbidden"


class ConflictError(DomainError):
    """ユーザー名・ストアハンドルなどの一意制約違反"""

    default_message = "Resource already exists"
    default_code = "conflict"


class StorageUnavailableError(DomainError):
    """
    永続化ストレージへのアクセス失敗

    セッション検証時に発生した場合、呼び出し側は未認証として扱わず
    503として返す。
    """

    default_message = "Storage unavailable"
    default_code = "storage_unavailable"
