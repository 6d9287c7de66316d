import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Config, settings
from .db_models import *  # noqa: F401,F403
from .backends import create_backends
from .errors import register_exception_handlers
from .storage import StorageGateway
from .auth.sessions import SessionStore
from .news.client import NewsApiClient
from .auth.router import router as auth_router
from .users.router import router as users_router
from .interests.router import router as interests_router
from .articles.router import router as articles_router
from .news.router import router as news_router

# 로깅 설정 (Docker 환경 최적화)
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # stdout으로 명시적 출력
    ]
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Config = app.state.config
    if not config.DEFAULT_NEWS_API_KEY:
        logger.warning("DEFAULT_NEWS_API_KEY is not set. Users without a personal key cannot fetch news.")
    if config.USE_GEMINI and not config.DEFAULT_GEMINI_API_KEY:
        logger.warning("USE_GEMINI is enabled but DEFAULT_GEMINI_API_KEY is not set.")

    await app.state.storage.init()
    await app.state.sessions.init()
    logger.info(f"Application started (environment={config.ENVIRONMENT}, storage={config.storage_backend})")

    yield

    await app.state.sessions.close()
    await app.state.storage.close()


def create_app(
    config: Optional[Config] = None,
    *,
    storage: Optional[StorageGateway] = None,
    sessions: Optional[SessionStore] = None,
    news_client: Optional[NewsApiClient] = None,
) -> FastAPI:
    """
    애플리케이션을 생성합니다.
    저장소/세션 저장소/News API 클라이언트는 여기서 한 번 만들어 app.state에 보관하고,
    라우터에는 의존성(StorageDep 등)으로 주입합니다.
    """
    config = config or settings
    if (storage is None) != (sessions is None):
        raise ValueError("storage and sessions must be provided together")
    if storage is None:
        storage, sessions = create_backends(config)

    app = FastAPI(title="Newsfeed API", lifespan=lifespan)
    app.state.config = config
    app.state.storage = storage
    app.state.sessions = sessions
    app.state.news_client = news_client or NewsApiClient(
        config.NEWS_API_BASE_URL,
        country=config.NEWS_API_COUNTRY,
        timeout=config.NEWS_API_TIMEOUT,
    )

    register_exception_handlers(app)

    # CORS 설정 (세션 쿠키를 쓰므로 origin을 명시)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 라우터 등록
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(interests_router)
    app.include_router(articles_router)
    app.include_router(news_router)

    # 간단한 헬스 체크 엔드포인트
    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
