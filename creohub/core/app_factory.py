"""FastAPIアプリケーションファクトリー"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from creohub.core.config import Settings, get_settings
from creohub.core.lifespan import lifespan
from creohub.core.logging import HealthCheckFilter
from creohub.presentation.api import api_router
from creohub.presentation.exception_handlers import register_exception_handlers
from creohub.presentation.middleware.error_handler import error_response_middleware
from creohub.presentation.middleware.security_headers import SecurityHeadersMiddleware
from creohub.presentation.middleware.session import session_middleware

API_PREFIX = "/api"


def _doc_urls(settings: Settings) -> dict[str, str | None]:
    # 本番ではOpenAPIスキーマ・ドキュメントを公開しない
    if settings.is_production:
        return {"docs_url": None, "redoc_url": None, "openapi_url": None}
    return {}


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    """
    ミドルウェアを登録

    後から登録したものが外側で実行されるため、
    セッショントークンの抽出はエラー整形より先に走る。
    """
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.BACKEND_CORS_ORIGINS),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware)
    app.middleware("http")(error_response_middleware)
    app.middleware("http")(session_middleware)


def create_app() -> FastAPI:
    """
    Creohub APIアプリケーションを生成

    Returns:
        ルーター・例外ハンドラー・ミドルウェア登録済みのFastAPIインスタンス
    """
    settings = get_settings()

    app = FastAPI(
        title="Creohub API",
        description="Creohubのセッション管理・料金プラン・通貨API",
        version="0.1.0",
        lifespan=lifespan,
        **_doc_urls(settings),
    )

    logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())

    register_exception_handlers(app)
    _install_middleware(app, settings)
    app.include_router(api_router, prefix=API_PREFIX)

    return app
