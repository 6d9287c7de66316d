from fastapi import APIRouter, Request, Response

from ..dependencies import ConfigDep, StorageDep, SessionStoreDep
from ..users.schema import UserPublic
from .schema import Credentials
from . import service as auth_service

router = APIRouter(prefix="/api", tags=["auth"])

@router.post("/register", response_model=UserPublic)
async def register(
    body: Credentials,
    response: Response,
    storage: StorageDep,
    sessions: SessionStoreDep,
    config: ConfigDep,
):
    user = await auth_service.register_user(storage, body)
    # 가입 직후 바로 로그인 상태로 만듭니다.
    await auth_service.start_session(response, sessions, config, user)
    return user

@router.post("/login", response_model=UserPublic)
async def login(
    body: Credentials,
    response: Response,
    storage: StorageDep,
    sessions: SessionStoreDep,
    config: ConfigDep,
):
    user = await auth_service.authenticate_user(storage, body.username, body.password)
    await auth_service.start_session(response, sessions, config, user)
    return user

@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    sessions: SessionStoreDep,
    config: ConfigDep,
):
    # 세션이 없어도 성공 처리 (멱등)
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    await auth_service.end_session(token, response, sessions, config)
    return {"message": "Logged out"}
