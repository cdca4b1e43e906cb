from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request

from ....core.config import Settings, get_settings
from ....domain.currency import (
    SUPPORTED_CURRENCIES,
    CurrencyInfo,
    convert_currency,
    detect_currency,
    format_currency,
    get_currency_symbol,
)
from ....domain.exceptions.base import BadRequestError
from ....infrastructure.geolocation import GeolocationClient
from ...schemas.currency import CurrencyConversionResponse, CurrencyDetectionResponse
from ..deps import get_geolocation_client

router = APIRouter()


@router.get("/currencies", response_model=list[CurrencyInfo])
async def list_currencies() -> list[CurrencyInfo]:
    """
    サポート通貨一覧
    """
    return list(SUPPORTED_CURRENCIES.values())


@router.get("/detect", response_model=CurrencyDetectionResponse)
def detect(
    request: Request,
    preferred: Optional[str] = Query(default=None),
    timezone: Optional[str] = Query(default=None),
    accept_language: Optional[str] = Header(default=None),
    geolocation: GeolocationClient = Depends(get_geolocation_client),
    settings: Settings = Depends(get_settings),
) -> CurrencyDetectionResponse:
    """
    表示通貨の判定

    優先順位: 通貨設定（クエリまたはCookie） > IPジオロケーション >
    Accept-Language > タイムゾーン > DEFAULT_CURRENCY
    """
    if preferred is None:
        preferred = request.cookies.get(settings.CURRENCY_COOKIE_NAME)

    country = geolocation.lookup_country(getattr(request.state, "client_ip", None))
    currency = detect_currency(
        geolocation_country=country,
        browser_locale=accept_language,
        preferred=preferred,
        timezone_name=timezone,
        default=settings.DEFAULT_CURRENCY,
    )
    return CurrencyDetectionResponse(
        currency=currency,
        symbol=get_currency_symbol(currency),
        country=country,
    )


@router.get("/convert", response_model=CurrencyConversionResponse)
async def convert(
    amount: float = Query(allow_inf_nan=False),
    from_currency: str = Query(alias="from", min_length=3, max_length=3),
    to_currency: str = Query(alias="to", min_length=3, max_length=3),
) -> CurrencyConversionResponse:
    """
    通貨換算

    換算先が未サポートの場合は400を返す
    """
    from_code = from_currency.upper()
    to_code = to_currency.upper()
    for code in (from_code, to_code):
        if code not in SUPPORTED_CURRENCIES:
            raise BadRequestError(f"Unsupported currency: {code}")

    converted = convert_currency(amount, from_code, to_code)
    return CurrencyConversionResponse(
        amount=amount,
        from_currency=from_code,
        to_currency=to_code,
        converted=converted,
        formatted=format_currency(converted, to_code),
    )
