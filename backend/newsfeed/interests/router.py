import logging
from typing import List

from fastapi import APIRouter, Response, status

from ..dependencies import StorageDep
from ..errors import NotFoundError
from ..auth.dependencies import CurrentUser
from ..users.schema import User
from .schemas import Interest, InterestCreate, InterestUpdate, NewInterest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/interests", tags=["interests"])


async def _get_owned_interest(storage, interest_id: int, user: User) -> Interest:
    # 다른 사용자의 관심사는 존재하지 않는 것으로 취급
    interest = await storage.get_interest(interest_id)
    if interest is None or interest.user_id != user.id:
        raise NotFoundError("Interest not found")
    return interest


@router.get("", response_model=List[Interest])
async def list_interests(storage: StorageDep, current_user: User = CurrentUser):
    return await storage.get_interests(current_user.id)

@router.post("", response_model=Interest, status_code=status.HTTP_201_CREATED)
async def create_interest(body: InterestCreate, storage: StorageDep, current_user: User = CurrentUser):
    interest = await storage.create_interest(
        NewInterest(user_id=current_user.id, name=body.name, active=True)
    )
    logger.info(f"Interest created: id={interest.id}, user_id={current_user.id}")
    return interest

@router.put("/{interest_id}", response_model=Interest)
async def update_interest(
    interest_id: int,
    body: InterestUpdate,
    storage: StorageDep,
    current_user: User = CurrentUser,
):
    interest = await _get_owned_interest(storage, interest_id, current_user)
    # null로 전달된 필드는 변경하지 않음
    update_data = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    if not update_data:
        return interest
    updated = await storage.update_interest(interest_id, update_data)
    if updated is None:
        raise NotFoundError("Interest not found")
    return updated

@router.delete("/{interest_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_interest(interest_id: int, storage: StorageDep, current_user: User = CurrentUser):
    await _get_owned_interest(storage, interest_id, current_user)
    if not await storage.delete_interest(interest_id):
        raise NotFoundError("Interest not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
