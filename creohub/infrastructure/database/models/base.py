from datetime import datetime

from sqlalchemy import DateTime, Integer, MetaData, func
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# 制約名を固定し、PostgreSQL/SQLite間でマイグレーションの差分が出ないようにする
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))


class TimeStampMixin:
    """作成日時（DB側で設定）"""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class BaseModel(Base, TimeStampMixin):
    """
    users/user_sessions/creators の共通基底

    整数の自動採番主キーと作成日時を持つ。
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
