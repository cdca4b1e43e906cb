import json
from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.currency import is_supported_currency
from .logging import get_logger

logger = get_logger(__name__)

EnvMode = Literal["development", "production", "test"]


class Settings(BaseSettings):
    """
    アプリケーション設定

    プロセス起動時に一度だけ構築し、各サービスへ明示的に渡す。
    値は環境変数と .env から読み込まれる。
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    ENV_MODE: EnvMode = "development"

    # HTTP
    BACKEND_CORS_ORIGINS: str | list[str] = []
    SECURITY_HEADERS: bool = False
    CSP_POLICY: str = "default-src 'self'; frame-ancestors 'none'"

    # Database (DATABASE_URL があれば POSTGRES_* は無視)
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_DB: str = "creohub"
    POSTGRES_HOST: str = "db"
    POSTGRES_PORT: str = "5432"
    RUN_MIGRATIONS_ON_STARTUP: bool = True

    # Session
    SESSION_TIMEOUT_SECONDS: int = 30 * 60
    SESSION_WARNING_SECONDS: int = 5 * 60
    SESSION_CLEANUP_SCHEDULE: Optional[str] = "*/15 * * * *"

    # Currency
    CURRENCY_COOKIE_NAME: str = "preferred_currency"
    DEFAULT_CURRENCY: str = "USD"
    GEOLOCATION_ENABLED: bool = True
    GEOLOCATION_API_URL: str = "https://ipapi.co/{ip}/json/"
    GEOLOCATION_TIMEOUT: float = 2.5

    # Monitoring
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 1.0

    @field_validator("BACKEND_CORS_ORIGINS")
    @classmethod
    def split_cors_origins(cls, v: str | list[str]) -> list[str]:
        """カンマ区切り文字列をオリジンのリストに展開"""
        if isinstance(v, list):
            return v
        if v.startswith("["):
            return json.loads(v)
        return [origin.strip() for origin in v.split(",") if origin.strip()]

    @field_validator("SESSION_TIMEOUT_SECONDS", "SESSION_WARNING_SECONDS")
    @classmethod
    def require_positive_seconds(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("session durations must be positive")
        return v

    @field_validator("SESSION_CLEANUP_SCHEDULE", "SENTRY_DSN")
    @classmethod
    def blank_as_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def validate_default_currency(cls, v: str) -> str:
        code = v.strip().upper()
        if not is_supported_currency(code):
            raise ValueError(f"Unsupported DEFAULT_CURRENCY: {v}")
        return code

    @field_validator("GEOLOCATION_API_URL")
    @classmethod
    def validate_geolocation_url(cls, v: str) -> str:
        if "{ip}" not in v:
            logger.warning(
                "GEOLOCATION_API_URL has no {ip} placeholder; "
                "every lookup will hit the same URL"
            )
        return v

    @property
    def database_uri(self) -> str:
        """データベース接続URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        # Kerberos設定済み環境だとタイムアウト待ちにハマるので、gssencmode=disableを設定
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            "?gssencmode=disable"
        )

    @property
    def has_database(self) -> bool:
        if self.DATABASE_URL:
            return True
        return all((self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_HOST))

    @property
    def is_sqlite(self) -> bool:
        return self.database_uri.startswith("sqlite")

    @property
    def is_development(self) -> bool:
        return self.ENV_MODE == "development"

    @property
    def is_production(self) -> bool:
        return self.ENV_MODE == "production"

    @property
    def normalized_env_mode(self) -> str:
        """Sentry・ヘルスチェックに出す環境名（development は local）"""
        return "local" if self.is_development else self.ENV_MODE


@lru_cache
def get_settings() -> Settings:
    """アプリケーション設定を取得（プロセス内でキャッシュ）"""
    return Settings()
