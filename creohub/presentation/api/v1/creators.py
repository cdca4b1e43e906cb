from fastapi import APIRouter, Depends, status

from ....domain.exceptions.base import ConflictError, NotFoundError
from ....infrastructure.database.models import User
from ....infrastructure.repositories import CreatorRepository
from ...schemas.subscription import CreatorCreateRequest, CreatorResponse
from ..deps import get_creator_repository, get_current_user

router = APIRouter()


@router.post("/", response_model=CreatorResponse, status_code=status.HTTP_201_CREATED)
def create_creator(
    body: CreatorCreateRequest,
    user: User = Depends(get_current_user),
    creators: CreatorRepository = Depends(get_creator_repository),
) -> CreatorResponse:
    """
    ログイン中のユーザーのストアを作成

    無料プランの30日間トライアルで開始する
    """
    if creators.get_by_user_id(user.id) is not None:
        raise ConflictError("Creator profile already exists")

    creator = creators.create(
        user_id=user.id, store_name=body.store_name, store_handle=body.store_handle
    )
    return CreatorResponse.model_validate(creator)


@router.get("/me", response_model=CreatorResponse)
def read_my_creator(
    user: User = Depends(get_current_user),
    creators: CreatorRepository = Depends(get_creator_repository),
) -> CreatorResponse:
    creator = creators.get_by_user_id(user.id)
    if creator is None:
        raise NotFoundError("Creator not found")
    return CreatorResponse.model_validate(creator)
