"""ロガー取得とアクセスログフィルター"""

import logging
import sys

HEALTHCHECK_PATH = "/api/system/healthcheck"


def get_logger(name: str) -> logging.Logger:
    """
    ロガーを取得

    uvicorn配下で動いている場合は出力形式を揃えるため "uvicorn" ロガーを返し、
    マイグレーションCLIなどそれ以外では name のロガーを返す。
    """
    if "uvicorn" in sys.modules:
        return logging.getLogger("uvicorn")
    return logging.getLogger(name)


class HealthCheckFilter(logging.Filter):
    """uvicorn.access からヘルスチェックの行を落とす"""

    def filter(self, record: logging.LogRecord) -> bool:
        return HEALTHCHECK_PATH not in record.getMessage()
