from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite는 기본적으로 FK(ON DELETE CASCADE)를 강제하지 않음
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, *, sslmode: str = "disable") -> AsyncEngine:
    if database_url.startswith("sqlite"):
        kwargs = {}
        if ":memory:" in database_url:
            # 메모리 SQLite는 하나의 커넥션을 공유해야 같은 DB를 본다
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        engine = create_async_engine(database_url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        database_url,
        pool_pre_ping=True,               # 연결 사전 체크
        pool_recycle=1800,                # 30분마다 재연결
        connect_args={
            "ssl": True if sslmode == "require" else False,
        },
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
