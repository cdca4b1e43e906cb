"""クリエイター・サブスクリプション関連のスキーマ定義"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from creohub.domain.pricing import PricingPlan

from .base import BaseSchema


class CreatorCreateRequest(BaseSchema):
    """クリエイター（ストア）作成リクエスト"""

    store_name: str = Field(min_length=1, max_length=255)
    store_handle: str = Field(min_length=3, max_length=64, pattern=r"^[a-z0-9-]+$")


class CreatorResponse(BaseSchema):
    """クリエイター情報"""

    id: int
    user_id: int
    store_name: str
    store_handle: str
    plan_type: str
    subscription_status: str
    trial_ends_at: Optional[datetime] = None
    subscription_ends_at: Optional[datetime] = None
    product_count: int
    created_at: Optional[datetime] = None


class UpgradeRequest(BaseSchema):
    """プラン変更リクエスト"""

    creator_id: int
    plan_id: str


class UpgradeResponse(BaseSchema):
    """プラン変更レスポンス"""

    success: bool = True
    creator: CreatorResponse
    plan: PricingPlan


class ProductCheckRequest(BaseSchema):
    """商品追加可否の確認リクエスト"""

    creator_id: int
