"""バッチタスク（インポート時にレジストリへ登録される）"""

from . import session_cleanup  # noqa: F401
