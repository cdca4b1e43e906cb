"""
セキュリティヘッダーミドルウェアの単体テスト
"""

from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from creohub.core.config import Settings
from creohub.presentation.middleware.security_headers import SecurityHeadersMiddleware


def make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware)

    @app.get("/api/v1/auth/me")
    async def me() -> dict[str, str]:
        return {"ok": "yes"}

    @app.get("/api/v1/pricing/plans")
    async def plans() -> dict[str, str]:
        return {"ok": "yes"}

    return app


def settings_with(enabled: bool) -> Settings:
    return Settings(_env_file=None, SECURITY_HEADERS=enabled)  # type: ignore[call-arg]


class TestSecurityHeadersMiddleware:
    """SecurityHeadersMiddlewareのテスト"""

    def test_headers_added_when_enabled(self) -> None:
        with patch(
            "creohub.presentation.middleware.security_headers.get_settings",
            return_value=settings_with(True),
        ):
            response = TestClient(make_app()).get("/api/v1/pricing/plans")

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert "Content-Security-Policy" in response.headers
        assert "Cache-Control" not in response.headers

    def test_auth_responses_are_not_cached(self) -> None:
        """認証系のレスポンスにno-storeが付くこと"""
        with patch(
            "creohub.presentation.middleware.security_headers.get_settings",
            return_value=settings_with(True),
        ):
            response = TestClient(make_app()).get("/api/v1/auth/me")

        assert response.headers["Cache-Control"] == "no-store"

    def test_headers_absent_when_disabled(self) -> None:
        with patch(
            "creohub.presentation.middleware.security_headers.get_settings",
            return_value=settings_with(False),
        ):
            response = TestClient(make_app()).get("/api/v1/pricing/plans")

        assert "X-Frame-Options" not in response.headers
