"""
通貨カタログ・通貨判定の単体テスト
"""

from itertools import permutations

import pytest

from creohub.domain.currency import (
    COUNTRY_CURRENCY_MAP,
    SUPPORTED_CURRENCIES,
    StaticExchangeRateProvider,
    convert_currency,
    currency_from_country,
    currency_from_locale,
    currency_from_timezone,
    detect_currency,
    format_currency,
    get_currency,
    get_currency_symbol,
    is_supported_currency,
)


class TestCatalog:
    """通貨カタログのテスト"""

    def test_contains_all_supported_currencies(self) -> None:
        """18通貨がサポートされていること"""
        assert len(SUPPORTED_CURRENCIES) == 18
        assert {"USD", "KES", "NGN", "ZAR", "EUR", "GBP", "XOF", "RWF"} <= set(
            SUPPORTED_CURRENCIES
        )

    def test_catalog_is_read_only(self) -> None:
        """カタログは変更できないこと"""
        with pytest.raises(TypeError):
            SUPPORTED_CURRENCIES["JPY"] = SUPPORTED_CURRENCIES["USD"]  # type: ignore[index]

    def test_entries_are_frozen(self) -> None:
        """エントリのフィールドは変更できないこと"""
        with pytest.raises(Exception):
            SUPPORTED_CURRENCIES["USD"].exchange_rate = 2  # type: ignore[misc]

    def test_country_map_covers_every_listed_country(self) -> None:
        """カタログ内の全ての国コードが通貨に対応付けられていること"""
        for info in SUPPORTED_CURRENCIES.values():
            for country in info.countries:
                assert country in COUNTRY_CURRENCY_MAP

    def test_get_currency_is_case_insensitive(self) -> None:
        assert get_currency("kes") is SUPPORTED_CURRENCIES["KES"]
        assert get_currency("JPY") is None
        assert get_currency(None) is None

    def test_is_supported_currency(self) -> None:
        assert is_supported_currency("NGN") is True
        assert is_supported_currency("JPY") is False

    def test_get_currency_symbol(self) -> None:
        """記号を返し、未サポートの場合はコードを返すこと"""
        assert get_currency_symbol("KES") == "KSh"
        assert get_currency_symbol("NGN") == "₦"
        assert get_currency_symbol("JPY") == "JPY"


class TestCurrencyFromCountry:
    """国コードからの通貨判定のテスト"""

    @pytest.mark.parametrize(
        "country,expected",
        [
            ("KE", "KES"),
            ("ke", "KES"),
            ("DE", "EUR"),
            ("SN", "XOF"),
            ("CM", "XAF"),
            ("PR", "USD"),
        ],
    )
    def test_known_countries(self, country: str, expected: str) -> None:
        assert currency_from_country(country) == expected

    def test_unknown_country(self) -> None:
        """対応する通貨がない国はNoneを返すこと"""
        assert currency_from_country("JP") is None
        assert currency_from_country("") is None
        assert currency_from_country(None) is None


class TestCurrencyFromLocale:
    """ロケールからの通貨推定のテスト"""

    def test_region_subtag(self) -> None:
        assert currency_from_locale("en-KE") == "KES"
        assert currency_from_locale("sw_TZ") == "TZS"

    def test_accept_language_header(self) -> None:
        """Accept-Language形式の最初の地域付きタグを使うこと"""
        assert currency_from_locale("en-NG,en;q=0.9") == "NGN"
        assert currency_from_locale("fr,fr-SN;q=0.8") == "XOF"

    def test_script_subtag_is_skipped(self) -> None:
        """スクリプトサブタグを飛ばして地域サブタグを使うこと"""
        assert currency_from_locale("zh-Hant-TW") is None
        assert currency_from_locale("sr-Latn-GB") == "GBP"

    def test_without_region(self) -> None:
        assert currency_from_locale("en") is None
        assert currency_from_locale("") is None
        assert currency_from_locale(None) is None

    def test_unsupported_region(self) -> None:
        assert currency_from_locale("ja-JP") is None


class TestCurrencyFromTimezone:
    """タイムゾーンからの通貨推定のテスト"""

    def test_known_timezone(self) -> None:
        assert currency_from_timezone("Africa/Nairobi") == "KES"
        assert currency_from_timezone("Europe/Berlin") == "EUR"

    def test_unknown_timezone(self) -> None:
        assert currency_from_timezone("Asia/Tokyo") is None
        assert currency_from_timezone(None) is None


class TestDetectCurrency:
    """表示通貨判定の優先順位のテスト"""

    def test_preferred_wins(self) -> None:
        """サポート通貨の設定があれば最優先されること"""
        assert (
            detect_currency(
                geolocation_country="KE",
                browser_locale="en-NG",
                preferred="ZAR",
                timezone_name="Africa/Accra",
            )
            == "ZAR"
        )

    def test_preferred_is_normalized(self) -> None:
        assert detect_currency(preferred="ghs") == "GHS"

    def test_unsupported_preferred_is_ignored(self) -> None:
        """未サポートの通貨設定は無視されること"""
        assert detect_currency(geolocation_country="KE", preferred="JPY") == "KES"

    def test_geolocation_before_locale(self) -> None:
        assert detect_currency(geolocation_country="NG", browser_locale="en-KE") == "NGN"

    def test_locale_when_geolocation_unavailable(self) -> None:
        """ジオロケーション失敗時はロケールにフォールバックすること"""
        assert detect_currency(geolocation_country=None, browser_locale="en-KE") == "KES"

    def test_unmapped_geolocation_falls_through(self) -> None:
        assert detect_currency(geolocation_country="JP", browser_locale="en-GB") == "GBP"

    def test_timezone_fallback(self) -> None:
        assert detect_currency(timezone_name="Africa/Johannesburg") == "ZAR"

    def test_default_is_usd(self) -> None:
        """全ての情報源が欠けている場合はUSDを返すこと"""
        assert detect_currency() == "USD"

    def test_configurable_default(self) -> None:
        assert detect_currency(default="EUR") == "EUR"


class TestFormatCurrency:
    """金額表示のテスト"""

    def test_format_with_symbol(self) -> None:
        assert format_currency(1234.5, "USD") == "$1,234.50"
        assert format_currency(1500, "KES") == "KSh1,500.00"

    def test_format_negative(self) -> None:
        assert format_currency(-1, "USD") == "-$1.00"

    def test_format_unknown_currency(self) -> None:
        """未サポートの通貨は例外を出さずにコードを付けて返すこと"""
        assert format_currency(10, "XYZ") == "10 XYZ"


class TestConvertCurrency:
    """通貨換算のテスト"""

    def test_same_currency_is_identity(self) -> None:
        assert convert_currency(42.0, "KES", "KES") == 42.0
        assert convert_currency(42.0, "kes", "KES") == 42.0

    def test_from_usd(self) -> None:
        assert convert_currency(10, "USD", "KES") == pytest.approx(1500)

    def test_to_usd(self) -> None:
        assert convert_currency(800, "NGN", "USD") == pytest.approx(1)

    def test_cross_rate_through_usd(self) -> None:
        assert convert_currency(150, "KES", "NGN") == pytest.approx(800)

    def test_unknown_rate_is_treated_as_one(self) -> None:
        assert convert_currency(5, "XYZ", "KES") == pytest.approx(750)

    def test_custom_rate_provider(self) -> None:
        """任意のレートプロバイダーを渡せること"""

        class FixedRates:
            def get_rate(self, currency_code: str) -> float | None:
                return {"USD": 1.0, "KES": 100.0}.get(currency_code.upper())

        assert convert_currency(2, "USD", "KES", rates=FixedRates()) == pytest.approx(200)

    @pytest.mark.parametrize("amount", [0.01, 1, 1234.56])
    @pytest.mark.parametrize("pair", list(permutations(SUPPORTED_CURRENCIES, 2)))
    def test_round_trip_returns_original_amount(
        self, pair: tuple[str, str], amount: float
    ) -> None:
        """A→B→Aと換算すると元の金額に戻ること"""
        source, target = pair
        converted = convert_currency(amount, source, target)
        assert convert_currency(converted, target, source) == pytest.approx(amount)

    def test_static_provider(self) -> None:
        provider = StaticExchangeRateProvider()
        assert provider.get_rate("eur") == 0.92
        assert provider.get_rate("JPY") is None
