from typing import Optional

from fastapi import APIRouter, Query

from ....domain.exceptions.base import NotFoundError
from ....domain.pricing import (
    FREE_PLAN,
    PRICING_PLANS,
    FeeBreakdown,
    PricingPlan,
    fee_breakdown,
    get_plan,
)

router = APIRouter()


@router.get("/plans", response_model=list[PricingPlan])
async def list_plans() -> list[PricingPlan]:
    """
    料金プラン一覧
    """
    return list(PRICING_PLANS.values())


@router.get("/plans/{plan_id}", response_model=PricingPlan)
async def read_plan(plan_id: str) -> PricingPlan:
    plan = get_plan(plan_id)
    if plan is None:
        raise NotFoundError("Plan not found")
    return plan


@router.get("/fee", response_model=FeeBreakdown)
async def calculate_fee(
    amount: float = Query(ge=0, allow_inf_nan=False),
    plan: Optional[str] = Query(default=FREE_PLAN),
) -> FeeBreakdown:
    """
    注文金額に対する取引手数料とクリエイターの取り分

    未知のプランの手数料は0として計算する
    """
    return fee_breakdown(amount, plan)
