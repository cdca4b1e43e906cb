"""Sentryの初期化"""

import sentry_sdk

from creohub.core.config import get_settings
from creohub.core.logging import get_logger

logger = get_logger(__name__)


def init_monitoring() -> bool:
    """
    SENTRY_DSN が設定されていればSentryを初期化する

    Returns:
        初期化した場合True
    """
    settings = get_settings()
    environment = settings.normalized_env_mode

    if not settings.SENTRY_DSN:
        logger.info(f"Sentry is disabled ({environment})")
        return False

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=environment,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        # Authorizationヘッダー（セッショントークン）を送らない
        send_default_pii=False,
    )
    logger.info(f"Sentry is enabled ({environment})")
    return True
