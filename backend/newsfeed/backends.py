import logging
from datetime import timedelta
from typing import Tuple

from .config import Config
from .database import build_engine, build_session_factory
from .storage import StorageGateway, DatabaseStorage, MemoryStorage
from .auth.sessions import SessionStore, DatabaseSessionStore, MemorySessionStore

logger = logging.getLogger(__name__)


def create_backends(config: Config) -> Tuple[StorageGateway, SessionStore]:
    """설정에 따라 저장소와 세션 저장소를 한 쌍으로 생성합니다."""
    ttl = timedelta(days=config.SESSION_EXPIRE_DAYS)

    if config.storage_backend == "database":
        if not config.DATABASE_URL:
            raise RuntimeError("STORAGE_BACKEND=database requires DATABASE_URL")
        engine = build_engine(config.DATABASE_URL, sslmode=config.POSTGRES_SSLMODE)
        session_factory = build_session_factory(engine)
        logger.info(f"Using database storage ({engine.url.get_backend_name()})")
        return DatabaseStorage(engine, session_factory), DatabaseSessionStore(session_factory, ttl=ttl)

    logger.warning("DATABASE_URL is not set; using non-persistent in-memory storage")
    return MemoryStorage(), MemorySessionStore(ttl=ttl)
