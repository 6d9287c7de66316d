import logging

from fastapi import APIRouter

from ..dependencies import StorageDep
from ..errors import NotFoundError
from ..auth.dependencies import CurrentUser
from .schema import User, UserPublic, ApiKeysUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["users"])

@router.get("", response_model=UserPublic)
async def read_current_user(current_user: User = CurrentUser):
    return current_user

@router.put("/api-keys", response_model=UserPublic)
async def update_api_keys(
    body: ApiKeysUpdate,
    storage: StorageDep,
    current_user: User = CurrentUser,
):
    """개인 News API / Gemini API 키를 저장합니다. null 또는 빈 문자열은 키 삭제."""
    update_data = body.model_dump(exclude_unset=True)
    updated = await storage.update_user(current_user.id, update_data)
    if updated is None:
        raise NotFoundError("User not found")
    logger.info(f"API keys updated for user_id={current_user.id}: {sorted(update_data)}")
    return updated
