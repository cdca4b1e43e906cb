"""クリエイターリポジトリ"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from ..database.models.creator import Creator
from ..database.models.user import User
from ...domain.exceptions.base import ConflictError, StorageUnavailableError
from ...domain.pricing import FREE_PLAN, PricingPlan, get_plan, plan_change

logger = logging.getLogger(__name__)


class CreatorRepository:
    """
    クリエイターの取得・作成・プラン変更
    """

    def __init__(self, db: DBSession):
        self.db = db

    def get(self, creator_id: int) -> Optional[Creator]:
        return self.db.get(Creator, creator_id)

    def get_by_user_id(self, user_id: int) -> Optional[Creator]:
        return self.db.scalar(select(Creator).where(Creator.user_id == user_id))

    def create(self, *, user_id: int, store_name: str, store_handle: str) -> Creator:
        """
        無料プラン（トライアル）のクリエイターを作成

        所有ユーザーはクリエイターとしてマークされる。

        Raises:
            ConflictError: ストアハンドルが既に使われている場合
        """
        free_plan = get_plan(FREE_PLAN)
        trial_days = free_plan.trial_days if free_plan and free_plan.trial_days else 0

        creator = Creator(
            user_id=user_id,
            store_name=store_name,
            store_handle=store_handle,
            plan_type=FREE_PLAN,
            subscription_status="trial",
            trial_ends_at=datetime.now() + timedelta(days=trial_days),
            product_count=0,
        )
        try:
            self.db.add(creator)
            self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(is_creator=True)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Store handle already taken") from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to create creator: {e}", exc_info=True)
            self.db.rollback()
            raise StorageUnavailableError("Failed to create creator") from e

        self.db.refresh(creator)
        return creator

    def change_plan(self, creator: Creator, plan: PricingPlan) -> Creator:
        """
        クリエイターのプランを変更

        Args:
            creator: 対象クリエイター
            plan: 変更先プラン

        Returns:
            更新後のクリエイター
        """
        change = plan_change(plan, datetime.now())
        creator.plan_type = change.plan_type
        creator.subscription_status = change.subscription_status
        creator.subscription_ends_at = change.subscription_ends_at

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to change plan for creator {creator.id}: {e}", exc_info=True)
            self.db.rollback()
            raise StorageUnavailableError("Failed to change plan") from e

        self.db.refresh(creator)
        logger.info(f"Creator {creator.id} moved to plan {plan.id}")
        return creator
