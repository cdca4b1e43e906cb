"""ドメインエラーと標準エラーレスポンスの対応付け"""

from .api_errors import APIError, ErrorResponse, domain_error_to_api_error

__all__ = ["APIError", "ErrorResponse", "domain_error_to_api_error"]
