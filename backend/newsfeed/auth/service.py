import logging
from datetime import datetime
from typing import Optional

from fastapi import Response
from jose import jwt, JWTError
from passlib.context import CryptContext

from ..config import Config
from ..errors import AuthenticationError, ConstraintViolation, ValidationError
from ..storage import StorageGateway
from ..users.schema import User, UserCreate
from .schema import Credentials
from .sessions import SessionStore

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

async def verify_password(plain_password: str, hashed_password: str) -> bool:
    # bcrypt 검증은 솔트가 포함된 해시와 상수 시간 비교로 수행됨
    return pwd_context.verify(plain_password, hashed_password)


def create_session_token(sid: str, expires_at: datetime, config: Config) -> str:
    """
    세션 ID를 서명된 쿠키 값으로 만듭니다.
    토큰 자체에는 사용자 정보가 없고, 세션 저장소 조회가 필요합니다.
    """
    to_encode = {
        "sid": sid,
        "type": "session",  # 토큰 타입 명시
        "exp": expires_at,
    }
    return jwt.encode(to_encode, config.SESSION_SECRET_KEY, algorithm=config.SESSION_ALGORITHM)

def decode_session_token(token: str, config: Config) -> Optional[str]:
    """서명/만료를 검증하고 세션 ID를 반환. 유효하지 않으면 None."""
    try:
        payload = jwt.decode(token, config.SESSION_SECRET_KEY, algorithms=[config.SESSION_ALGORITHM])
    except JWTError:
        # 토큰 디코딩 실패 (변조, 만료 등)
        return None
    if payload.get("type") != "session":
        return None
    return payload.get("sid")


async def authenticate_user(storage: StorageGateway, username: str, password: str) -> User:
    """
    사용자 이름과 비밀번호로 인증을 시도합니다.
    실패 시 사용자 존재 여부와 관계없이 동일한 AuthenticationError를 발생시킵니다.
    """
    user = await storage.get_user_by_username(username)
    if not user or not await verify_password(password, user.password):
        raise AuthenticationError("Invalid username or password")
    return user

async def register_user(storage: StorageGateway, credentials: Credentials) -> User:
    existing_user = await storage.get_user_by_username(credentials.username)
    if existing_user:
        raise ValidationError("Username already exists")

    try:
        return await storage.create_user(
            UserCreate(
                username=credentials.username,
                password=hash_password(credentials.password),
            )
        )
    except ConstraintViolation:
        # 사전 확인 이후 동시에 같은 이름으로 가입된 경우
        raise ValidationError("Username already exists")


async def start_session(response: Response, sessions: SessionStore, config: Config, user: User) -> None:
    sid, expires_at = await sessions.create(user.id)
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=create_session_token(sid, expires_at, config),
        max_age=int(sessions.ttl.total_seconds()),
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    logger.info(f"Session started for user_id={user.id}")

async def end_session(token: Optional[str], response: Response, sessions: SessionStore, config: Config) -> None:
    if token:
        sid = decode_session_token(token, config)
        if sid:
            await sessions.destroy(sid)
    response.delete_cookie(config.SESSION_COOKIE_NAME)
