from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Creator(BaseModel):
    """
    クリエイター（ストア）モデル

    料金プランの判定に必要なサブスクリプション状態を保持する。

    Attributes:
        user_id: 所有ユーザーID
        store_name: ストア名
        store_handle: ストアハンドル（一意）
        plan_type: プランID（free/starter/pro）
        subscription_status: trial/active/cancelled/expired
        trial_ends_at: トライアル終了日時
        subscription_ends_at: サブスクリプション終了日時
        product_count: 登録済み商品数
    """

    __tablename__ = "creators"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    store_name: Mapped[str] = mapped_column(String(255), nullable=False)
    store_handle: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    plan_type: Mapped[str] = mapped_column(String(32), default="free", nullable=False)
    subscription_status: Mapped[str] = mapped_column(
        String(32), default="trial", nullable=False
    )
    trial_ends_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    subscription_ends_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    product_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Creator(id={self.id}, store_handle={self.store_handle}, plan_type={self.plan_type})>"
