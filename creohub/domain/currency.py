"""
通貨カタログと通貨判定・表示・換算

カタログはインポート時に一度だけ構築される読み取り専用マッピング。
同期なしで並行に参照してよい。
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional, Protocol

from pydantic import BaseModel, ConfigDict

DEFAULT_CURRENCY = "USD"


class CurrencyInfo(BaseModel):
    """
    サポート通貨エントリ

    Attributes:
        code: ISO 4217 通貨コード
        symbol: 表示用記号
        name: 表示名
        countries: この通貨に対応するISO 3166-1 alpha-2 国コード
        exchange_rate: 1 USD あたりの換算レート
    """

    model_config = ConfigDict(frozen=True)

    code: str
    symbol: str
    name: str
    countries: frozenset[str]
    exchange_rate: float = 1.0


def _currency(
    code: str, symbol: str, name: str, countries: list[str], rate: float
) -> CurrencyInfo:
    return CurrencyInfo(
        code=code,
        symbol=symbol,
        name=name,
        countries=frozenset(countries),
        exchange_rate=rate,
    )


# レートは概算値
SUPPORTED_CURRENCIES: Mapping[str, CurrencyInfo] = MappingProxyType(
    {
        c.code: c
        for c in (
            _currency("USD", "$", "US Dollar", ["US", "PR", "VG", "VI"], 1),
            _currency("KES", "KSh", "Kenyan Shilling", ["KE"], 150),
            _currency("NGN", "₦", "Nigerian Naira", ["NG"], 800),
            _currency("ZAR", "R", "South African Rand", ["ZA"], 18),
            _currency("GHS", "₵", "Ghanaian Cedi", ["GH"], 12),
            _currency("EGP", "£", "Egyptian Pound", ["EG"], 31),
            _currency(
                "EUR",
                "€",
                "Euro",
                ["DE", "FR", "IT", "ES", "NL", "BE", "AT", "IE", "PT", "FI", "GR"],
                0.92,
            ),
            _currency("GBP", "£", "British Pound", ["GB"], 0.79),
            _currency("CAD", "C$", "Canadian Dollar", ["CA"], 1.35),
            _currency("AUD", "A$", "Australian Dollar", ["AU"], 1.52),
            _currency(
                "XOF",
                "CFA",
                "West African CFA Franc",
                ["SN", "CI", "BF", "ML", "NE", "TG", "BJ", "GW"],
                600,
            ),
            _currency(
                "XAF",
                "FCFA",
                "Central African CFA Franc",
                ["CM", "CF", "TD", "CG", "GQ", "GA"],
                600,
            ),
            _currency("MAD", "DH", "Moroccan Dirham", ["MA"], 10),
            _currency("TND", "د.ت", "Tunisian Dinar", ["TN"], 3.1),
            _currency("ETB", "Br", "Ethiopian Birr", ["ET"], 55),
            _currency("UGX", "USh", "Ugandan Shilling", ["UG"], 3700),
            _currency("TZS", "TSh", "Tanzanian Shilling", ["TZ"], 2500),
            _currency("RWF", "RF", "Rwandan Franc", ["RW"], 1300),
        )
    }
)

# 国コード -> 通貨コード（カタログの並び順で最初に一致したもの）
COUNTRY_CURRENCY_MAP: Mapping[str, str] = MappingProxyType(
    {
        country: info.code
        for info in reversed(list(SUPPORTED_CURRENCIES.values()))
        for country in info.countries
    }
)

TIMEZONE_COUNTRY_MAP: Mapping[str, str] = MappingProxyType(
    {
        "Africa/Nairobi": "KE",
        "Africa/Lagos": "NG",
        "Africa/Johannesburg": "ZA",
        "Africa/Accra": "GH",
        "Africa/Cairo": "EG",
        "America/New_York": "US",
        "America/Los_Angeles": "US",
        "America/Chicago": "US",
        "America/Toronto": "CA",
        "Europe/London": "GB",
        "Europe/Berlin": "DE",
        "Europe/Paris": "FR",
        "Australia/Sydney": "AU",
    }
)

_LOCALE_SEPARATOR = re.compile(r"[-_]")


def get_currency(code: Optional[str]) -> Optional[CurrencyInfo]:
    """通貨コードからカタログエントリを取得する。未サポートの場合はNone。"""
    if not code:
        return None
    return SUPPORTED_CURRENCIES.get(code.upper())


def is_supported_currency(code: Optional[str]) -> bool:
    return get_currency(code) is not None


def get_currency_symbol(code: str) -> str:
    """通貨記号を取得する。未サポートの場合はコードをそのまま返す。"""
    info = get_currency(code)
    return info.symbol if info else code


def currency_from_country(country_code: Optional[str]) -> Optional[str]:
    """
    国コードから通貨コードを判定する

    Args:
        country_code: ISO 3166-1 alpha-2 国コード（大文字小文字は問わない）

    Returns:
        通貨コード、対応する通貨がない場合はNone
    """
    if not country_code:
        return None
    return COUNTRY_CURRENCY_MAP.get(country_code.strip().upper())


def currency_from_locale(locale: Optional[str]) -> Optional[str]:
    """
    ブラウザロケールから通貨コードを推定する

    "en-KE"、"sw_KE"、Accept-Languageヘッダー値（"en-KE,en;q=0.9"）を受け付ける。
    地域サブタグを持つ最初の言語タグのみを使用する。

    Args:
        locale: ロケール文字列またはAccept-Languageヘッダー値

    Returns:
        通貨コード、推定できない場合はNone
    """
    if not locale:
        return None

    for tag in locale.split(","):
        tag = tag.split(";")[0].strip()
        subtags = _LOCALE_SEPARATOR.split(tag)[1:]
        for subtag in subtags:
            if len(subtag) == 2 and subtag.isalpha():
                return currency_from_country(subtag)
    return None


def currency_from_timezone(timezone_name: Optional[str]) -> Optional[str]:
    """IANAタイムゾーン名から通貨コードを推定する"""
    if not timezone_name:
        return None
    return currency_from_country(TIMEZONE_COUNTRY_MAP.get(timezone_name))


def detect_currency(
    geolocation_country: Optional[str] = None,
    browser_locale: Optional[str] = None,
    preferred: Optional[str] = None,
    timezone_name: Optional[str] = None,
    default: str = DEFAULT_CURRENCY,
) -> str:
    """
    表示通貨を判定する

    優先順位:
    1. 保存済みの通貨設定（サポート通貨の場合のみ）
    2. IPジオロケーションで得た国コード
    3. ブラウザロケールの地域サブタグ
    4. タイムゾーン
    5. 既定通貨（USD）

    どの情報源が欠けていても例外は送出せず、次の情報源へフォールバックする。

    Args:
        geolocation_country: ジオロケーション結果の国コード（失敗時はNone）
        browser_locale: ブラウザロケールまたはAccept-Language
        preferred: ユーザーが選択した通貨コード
        timezone_name: ブラウザのIANAタイムゾーン名
        default: どの情報源からも判定できない場合の通貨コード

    Returns:
        通貨コード
    """
    preferred_info = get_currency(preferred)
    if preferred_info:
        return preferred_info.code

    return (
        currency_from_country(geolocation_country)
        or currency_from_locale(browser_locale)
        or currency_from_timezone(timezone_name)
        or default
    )


def format_currency(amount: float, currency_code: str) -> str:
    """
    金額を通貨記号付きで整形する

    未サポートの通貨は "{amount} {code}" 形式で返し、例外は送出しない。

    Examples:
        >>> format_currency(1234.5, "USD")
        '$1,234.50'
        >>> format_currency(10, "XYZ")
        '10 XYZ'
    """
    info = get_currency(currency_code)
    if info is None:
        return f"{amount} {currency_code}"

    sign = "-" if amount < 0 else ""
    return f"{sign}{info.symbol}{abs(amount):,.2f}"


class ExchangeRateProvider(Protocol):
    """換算レートの提供元（1 USD あたりのレートを返す）"""

    def get_rate(self, currency_code: str) -> Optional[float]: ...


class StaticExchangeRateProvider:
    """カタログに埋め込まれた固定レートを返すプロバイダー"""

    def __init__(self, catalog: Mapping[str, CurrencyInfo] = SUPPORTED_CURRENCIES):
        self._catalog = catalog

    def get_rate(self, currency_code: str) -> Optional[float]:
        info = self._catalog.get(currency_code.upper())
        return info.exchange_rate if info else None


_static_rates = StaticExchangeRateProvider()


def convert_currency(
    amount: float,
    from_currency: str,
    to_currency: str,
    rates: Optional[ExchangeRateProvider] = None,
) -> float:
    """
    通貨を換算する

    USDを経由して換算する。同一通貨の場合は金額をそのまま返す。
    レートが取得できない通貨は1として扱う。

    Args:
        amount: 金額
        from_currency: 換算元通貨コード
        to_currency: 換算先通貨コード
        rates: 換算レートプロバイダー（Noneの場合はカタログの固定レート）

    Returns:
        換算後の金額
    """
    if from_currency.upper() == to_currency.upper():
        return amount

    provider = rates or _static_rates
    from_rate = provider.get_rate(from_currency) or 1
    to_rate = provider.get_rate(to_currency) or 1

    usd_amount = amount / from_rate
    return usd_amount * to_rate
