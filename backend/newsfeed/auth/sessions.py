"""
서버 측 세션 저장소.

쿠키에는 서명된 세션 ID만 담고, 세션이 어느 사용자에 속하는지는 저장소에서 조회합니다.
DB 저장소를 쓰면 프로세스가 재시작되어도 로그인 상태가 유지됩니다.
"""

import logging
import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .models import SessionRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite는 tz 정보를 보존하지 않으므로 UTC로 간주
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class SessionStore(ABC):

    def __init__(self, ttl: timedelta = timedelta(days=7)):
        self.ttl = ttl

    async def init(self) -> None:
        pass

    async def close(self) -> None:
        pass

    @abstractmethod
    async def create(self, user_id: int) -> Tuple[str, datetime]:
        """새 세션을 만들고 (sid, 만료 시각)을 반환합니다."""

    @abstractmethod
    async def get(self, sid: str) -> Optional[int]:
        """유효한 세션의 user_id. 없거나 만료되었으면 None."""

    @abstractmethod
    async def destroy(self, sid: str) -> None:
        """세션 삭제. 이미 없는 세션이어도 오류가 아닙니다."""

    @staticmethod
    def new_sid() -> str:
        return secrets.token_urlsafe(32)


class MemorySessionStore(SessionStore):

    def __init__(self, ttl: timedelta = timedelta(days=7)):
        super().__init__(ttl)
        self._sessions: Dict[str, Tuple[int, datetime]] = {}

    def _prune(self) -> None:
        now = _utcnow()
        for sid in [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]:
            del self._sessions[sid]

    async def create(self, user_id: int) -> Tuple[str, datetime]:
        self._prune()
        sid = self.new_sid()
        expires_at = _utcnow() + self.ttl
        self._sessions[sid] = (user_id, expires_at)
        return sid, expires_at

    async def get(self, sid: str) -> Optional[int]:
        self._prune()
        entry = self._sessions.get(sid)
        return entry[0] if entry else None

    async def destroy(self, sid: str) -> None:
        self._sessions.pop(sid, None)


class DatabaseSessionStore(SessionStore):
    """sessions 테이블에 세션을 저장 (테이블은 DatabaseStorage.init에서 함께 생성)"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], ttl: timedelta = timedelta(days=7)):
        super().__init__(ttl)
        self.session_factory = session_factory

    async def create(self, user_id: int) -> Tuple[str, datetime]:
        sid = self.new_sid()
        expires_at = _utcnow() + self.ttl
        async with self.session_factory() as db:
            db.add(SessionRecord(sid=sid, user_id=user_id, expires_at=expires_at))
            await db.commit()
        return sid, expires_at

    async def get(self, sid: str) -> Optional[int]:
        async with self.session_factory() as db:
            record = await db.get(SessionRecord, sid)
            if record is None:
                return None
            if _as_utc(record.expires_at) <= _utcnow():
                logger.debug("Expired session removed")
                await db.delete(record)
                await db.commit()
                return None
            return record.user_id

    async def destroy(self, sid: str) -> None:
        async with self.session_factory() as db:
            await db.execute(delete(SessionRecord).where(SessionRecord.sid == sid))
            await db.commit()
