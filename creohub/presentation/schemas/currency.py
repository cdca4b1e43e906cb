"""通貨関連のスキーマ定義"""

from typing import Optional

from .base import BaseSchema


class CurrencyDetectionResponse(BaseSchema):
    """
    通貨判定結果

    Attributes:
        currency: 判定された通貨コード
        symbol: 通貨記号
        country: ジオロケーションで得た国コード（取得できなかった場合はNone）
    """

    currency: str
    symbol: str
    country: Optional[str] = None


class CurrencyConversionResponse(BaseSchema):
    """通貨換算結果"""

    amount: float
    from_currency: str
    to_currency: str
    converted: float
    formatted: str
