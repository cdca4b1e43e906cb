from fastapi import APIRouter, Depends

from ....core.logging import get_logger
from ....domain.exceptions.base import BadRequestError, ForbiddenError, NotFoundError
from ....domain.pricing import (
    ProductAllowance,
    SubscriptionSummary,
    check_product_allowance,
    get_plan,
    subscription_summary,
)
from ....infrastructure.database.models import Creator, User
from ....infrastructure.repositories import CreatorRepository
from ...schemas.subscription import (
    CreatorResponse,
    ProductCheckRequest,
    UpgradeRequest,
    UpgradeResponse,
)
from ..deps import get_creator_repository, get_current_user

router = APIRouter()
logger = get_logger(__name__)


def _get_creator(creators: CreatorRepository, creator_id: int) -> Creator:
    creator = creators.get(creator_id)
    if creator is None:
        raise NotFoundError("Creator not found")
    return creator


@router.get("/status/{creator_id}", response_model=SubscriptionSummary)
def read_status(
    creator_id: int,
    creators: CreatorRepository = Depends(get_creator_repository),
) -> SubscriptionSummary:
    """
    クリエイターのサブスクリプション状態

    - プラン詳細
    - トライアル期限切れ/サブスクリプション有効の判定
    - 商品追加可否
    """
    return subscription_summary(_get_creator(creators, creator_id))


@router.post("/upgrade", response_model=UpgradeResponse)
def upgrade(
    body: UpgradeRequest,
    user: User = Depends(get_current_user),
    creators: CreatorRepository = Depends(get_creator_repository),
) -> UpgradeResponse:
    """
    プラン変更

    クリエイター本人または管理者のみ実行できる
    """
    plan = get_plan(body.plan_id)
    if plan is None:
        raise BadRequestError("Invalid plan ID")

    creator = _get_creator(creators, body.creator_id)
    if creator.user_id != user.id and not user.is_admin:
        logger.warning(f"User {user.id} tried to change plan of creator {creator.id}")
        raise ForbiddenError("Not allowed to change this creator's plan")

    creator = creators.change_plan(creator, plan)
    return UpgradeResponse(
        creator=CreatorResponse.model_validate(creator), plan=plan
    )


@router.post("/products/check", response_model=ProductAllowance)
def check_products(
    body: ProductCheckRequest,
    creators: CreatorRepository = Depends(get_creator_repository),
) -> ProductAllowance:
    """
    商品を追加できるか

    商品数上限と無料プランのトライアル期限を確認する
    """
    return check_product_allowance(_get_creator(creators, body.creator_id))
