from typing import Optional

from fastapi import Depends, Request

from ..dependencies import ConfigDep, StorageDep, SessionStoreDep
from ..errors import AuthenticationError
from ..users.schema import User
from ..auth import service as auth_service


async def get_optional_user(
    request: Request,
    config: ConfigDep,
    storage: StorageDep,
    sessions: SessionStoreDep,
) -> Optional[User]:
    """세션 쿠키가 유효하면 사용자, 아니면 None (공개 엔드포인트용)"""
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    if not token:
        return None
    sid = auth_service.decode_session_token(token, config)
    if sid is None:
        return None
    user_id = await sessions.get(sid)
    if user_id is None:
        return None
    return await storage.get_user(user_id)

async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise AuthenticationError("Authentication required")
    return user

CurrentUser = Depends(get_current_user)
OptionalUser = Depends(get_optional_user)
