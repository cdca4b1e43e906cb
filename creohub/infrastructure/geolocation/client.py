"""
IPジオロケーションクライアント

IPアドレスから国コードを取得する。結果はベストエフォートで、
ネットワーク障害・不正なレスポンスはすべて「情報なし」として扱う。
"""

import ipaddress
from typing import Any, Optional

import httpx

from creohub.core.config import Settings, get_settings
from creohub.core.logging import get_logger

logger = get_logger(__name__)


def is_public_ip(ip_address: Optional[str]) -> bool:
    """グローバルに到達可能なIPアドレスかどうか"""
    if not ip_address:
        return False
    try:
        return ipaddress.ip_address(ip_address).is_global
    except ValueError:
        return False


class GeolocationClient:
    """
    httpxを使ったIPジオロケーションクライアント

    Example:
        >>> client = GeolocationClient.from_settings(get_settings())
        >>> client.lookup_country("41.90.0.1")
        'KE'
    """

    def __init__(
        self,
        api_url: str,
        timeout: float = 2.5,
        enabled: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            api_url: APIのURLテンプレート（{ip} をIPアドレスで置換）
            timeout: タイムアウト（秒）
            enabled: 無効の場合は常にNoneを返す
            transport: httpxトランスポート（テスト時にモックを渡せる）
        """
        self._api_url = api_url
        self._timeout = timeout
        self._enabled = enabled
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "GeolocationClient":
        settings = settings or get_settings()
        return cls(
            api_url=settings.GEOLOCATION_API_URL,
            timeout=settings.GEOLOCATION_TIMEOUT,
            enabled=settings.GEOLOCATION_ENABLED,
        )

    def _make_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._timeout,
            transport=self._transport,
            headers={"Accept": "application/json"},
        )

    def lookup_country(self, ip_address: Optional[str]) -> Optional[str]:
        """
        IPアドレスから国コードを取得する

        Args:
            ip_address: クライアントIPアドレス

        Returns:
            ISO 3166-1 alpha-2 国コード（大文字）、取得できない場合はNone
        """
        if not self._enabled or not is_public_ip(ip_address):
            return None

        # {ip} 以外の波括弧はそのままURLに残す
        url = self._api_url.replace("{ip}", str(ip_address))
        try:
            with self._make_client() as client:
                resp = client.get(url)
            resp.raise_for_status()
            data: Any = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"IP geolocation lookup failed: {e}")
            return None

        country_code = data.get("country_code") if isinstance(data, dict) else None
        if not isinstance(country_code, str) or len(country_code) != 2:
            logger.warning("IP geolocation response has no usable country_code")
            return None
        return country_code.upper()
