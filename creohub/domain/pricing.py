"""
料金プランカタログと利用権限の判定

商品追加のたびに参照されるため、DBを介さない読み取り専用カタログで判定する。
"""

import calendar
from datetime import datetime
from types import MappingProxyType
from typing import Literal, Mapping, Optional, Protocol

from pydantic import BaseModel, ConfigDict

FREE_PLAN = "free"


class PricingPlan(BaseModel):
    """
    料金プラン

    Attributes:
        id: プランID
        name: 表示名
        price: 基本料金
        currency: 料金の通貨
        interval: 請求間隔（month/year、無料プランはNone）
        features: 機能一覧
        transaction_fee: プラットフォーム手数料率（売上に対する割合）
        product_limit: 商品数上限（Noneは無制限）
        trial_days: トライアル日数
        popular: おすすめ表示フラグ
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float
    currency: str = "USD"
    interval: Optional[Literal["month", "year"]] = None
    features: tuple[str, ...] = ()
    transaction_fee: float
    product_limit: Optional[int] = None
    trial_days: Optional[int] = None
    popular: bool = False


PRICING_PLANS: Mapping[str, PricingPlan] = MappingProxyType(
    {
        plan.id: plan
        for plan in (
            PricingPlan(
                id="free",
                name="Free",
                price=0,
                interval=None,
                features=(
                    "Basic storefront customization",
                    "Upload up to 3 products",
                    "Accept payments",
                    "Basic analytics",
                    "M-Pesa + card payments",
                ),
                transaction_fee=0.10,
                product_limit=3,
                trial_days=30,
            ),
            PricingPlan(
                id="starter",
                name="Starter",
                price=14.99,
                interval="month",
                features=(
                    "Up to 25 products (digital + physical)",
                    "Email capture & basic CRM",
                    "Custom domain support",
                    "Enhanced analytics",
                    "Limited marketing tools (social sharing, referral tracking)",
                ),
                transaction_fee=0.05,
                product_limit=25,
                popular=True,
            ),
            PricingPlan(
                id="pro",
                name="Pro",
                price=29.99,
                interval="month",
                features=(
                    "Unlimited products",
                    "Advanced analytics & sales reports",
                    "Full marketing suite (email campaigns, coupons, affiliate tools)",
                    "Priority support",
                    "Zero transaction fees",
                    "Multi-currency pricing & payouts",
                ),
                transaction_fee=0,
                product_limit=None,
            ),
        )
    }
)


def _now_like(value: datetime) -> datetime:
    # 比較対象とnaive/awareを揃える
    if value.tzinfo is not None:
        return datetime.now(value.tzinfo)
    return datetime.now()


def get_plan(plan_id: Optional[str]) -> Optional[PricingPlan]:
    """プランIDからプランを取得する。未知のプランはNone。"""
    if not plan_id:
        return None
    return PRICING_PLANS.get(plan_id)


def calculate_transaction_fee(amount: float, plan_type: Optional[str]) -> float:
    """
    取引手数料を計算する

    Args:
        amount: 売上金額
        plan_type: プランID

    Returns:
        手数料（未知のプランは0）
    """
    plan = get_plan(plan_type)
    if plan is None:
        return 0
    return amount * plan.transaction_fee


def can_add_product(current_count: int, plan_type: Optional[str]) -> bool:
    """
    商品を追加できるかを判定する

    未知のプランは追加不可（fail-closed）。上限なしのプランは常に追加可。

    Args:
        current_count: 現在の商品数
        plan_type: プランID

    Returns:
        追加可能な場合True
    """
    plan = get_plan(plan_type)
    if plan is None:
        return False
    if plan.product_limit is None:
        return True
    return current_count < plan.product_limit


def is_trial_expired(trial_ends_at: Optional[datetime]) -> bool:
    """トライアル終了日時を過ぎているか。終了日時が未設定の場合はFalse。"""
    if trial_ends_at is None:
        return False
    return _now_like(trial_ends_at) > trial_ends_at


def is_subscription_active(
    status: Optional[str], subscription_ends_at: Optional[datetime]
) -> bool:
    """
    サブスクリプションが有効かを判定する

    status が "active" の場合のみ有効。終了日時があればその時刻まで、
    なければ無期限に有効とみなす。
    """
    if status != "active":
        return False
    if subscription_ends_at is None:
        return True
    return _now_like(subscription_ends_at) < subscription_ends_at


class FeeBreakdown(BaseModel):
    """注文金額に対する手数料の内訳"""

    amount: float
    plan_type: str
    transaction_fee: float
    creator_earnings: float
    fee_percentage: float


def fee_breakdown(amount: float, plan_type: Optional[str]) -> FeeBreakdown:
    """
    注文金額から手数料とクリエイター取り分を算出する

    プラン未設定の場合は無料プランとして扱う。
    """
    plan_id = plan_type or FREE_PLAN
    fee = calculate_transaction_fee(amount, plan_id)
    plan = get_plan(plan_id)
    return FeeBreakdown(
        amount=amount,
        plan_type=plan_id,
        transaction_fee=fee,
        creator_earnings=amount - fee,
        fee_percentage=plan.transaction_fee if plan else 0,
    )


class SubscriptionState(Protocol):
    """クリエイターが保持するサブスクリプション状態"""

    plan_type: str
    subscription_status: str
    trial_ends_at: Optional[datetime]
    subscription_ends_at: Optional[datetime]
    product_count: int


class SubscriptionSummary(BaseModel):
    """サブスクリプション状態の判定結果"""

    plan_type: str
    subscription_status: str
    trial_ends_at: Optional[datetime] = None
    subscription_ends_at: Optional[datetime] = None
    product_count: int
    trial_expired: bool
    subscription_active: bool
    plan_details: Optional[PricingPlan] = None
    can_add_products: bool


def subscription_summary(state: SubscriptionState) -> SubscriptionSummary:
    """クリエイターのサブスクリプション状態から利用権限をまとめて判定する"""
    plan = get_plan(state.plan_type)
    product_count = state.product_count or 0
    return SubscriptionSummary(
        plan_type=state.plan_type,
        subscription_status=state.subscription_status,
        trial_ends_at=state.trial_ends_at,
        subscription_ends_at=state.subscription_ends_at,
        product_count=product_count,
        trial_expired=is_trial_expired(state.trial_ends_at),
        subscription_active=is_subscription_active(
            state.subscription_status, state.subscription_ends_at
        ),
        plan_details=plan,
        can_add_products=can_add_product(product_count, state.plan_type),
    )


def add_months(value: datetime, months: int) -> datetime:
    """月を加算する。月末日は加算先の月の末日に丸める。"""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


class PlanChange(BaseModel):
    """プラン変更後のサブスクリプション状態"""

    plan_type: str
    subscription_status: str
    subscription_ends_at: Optional[datetime] = None


def plan_change(plan: PricingPlan, now: datetime) -> PlanChange:
    """
    プラン変更後の状態を算出する

    無料プランはトライアル扱いで終了日時なし。有料プランは即時有効化し、
    請求間隔（年額は12か月、それ以外は1か月）後に終了する。
    """
    if plan.id == FREE_PLAN:
        return PlanChange(plan_type=plan.id, subscription_status="trial")

    months = 12 if plan.interval == "year" else 1
    return PlanChange(
        plan_type=plan.id,
        subscription_status="active",
        subscription_ends_at=add_months(now, months),
    )


class ProductAllowance(BaseModel):
    """
    商品追加可否の判定結果

    Attributes:
        allowed: 追加可能か
        message: 追加できない場合の理由
        plan_limit: プランの商品数上限（Noneは無制限）
        current_count: 現在の商品数
        trial_expired: 無料プランのトライアル期限切れで追加できない場合True
    """

    allowed: bool
    message: Optional[str] = None
    plan_limit: Optional[int] = None
    current_count: int
    trial_expired: bool = False


def check_product_allowance(state: SubscriptionState) -> ProductAllowance:
    """
    クリエイターが商品を追加できるかを判定する

    プランの商品数上限を先に確認し、次に無料プランのトライアル期限を確認する。
    """
    plan = get_plan(state.plan_type)
    current_count = state.product_count or 0
    plan_limit = plan.product_limit if plan else None

    if not can_add_product(current_count, state.plan_type):
        plan_name = plan.name if plan else state.plan_type
        return ProductAllowance(
            allowed=False,
            message=(
                f"Product limit reached. Your {plan_name} plan allows up to "
                f"{plan_limit} products. Upgrade to add more."
            ),
            plan_limit=plan_limit,
            current_count=current_count,
        )

    if state.plan_type == FREE_PLAN and is_trial_expired(state.trial_ends_at):
        return ProductAllowance(
            allowed=False,
            message="Your free trial has expired. Please upgrade to continue adding products.",
            plan_limit=plan_limit,
            current_count=current_count,
            trial_expired=True,
        )

    return ProductAllowance(
        allowed=True, plan_limit=plan_limit, current_count=current_count
    )
