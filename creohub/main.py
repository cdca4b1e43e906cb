"""ASGIエントリーポイント（uvicorn creohub.main:app）"""

from creohub.core.app_factory import create_app
from creohub.core.monitoring import init_monitoring

init_monitoring()

app = create_app()
