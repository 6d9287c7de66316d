import sys
from pathlib import Path

import httpx
import pytest
from httpx import AsyncClient, ASGITransport

# sys.path에 backend 추가하여 'newsfeed' 패키지 검색 가능하게 함
backend_path = Path(__file__).resolve().parents[1]
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

from newsfeed.config import Config
from newsfeed.database import build_engine, build_session_factory
from newsfeed.storage import DatabaseStorage, MemoryStorage
from newsfeed.auth.sessions import DatabaseSessionStore, MemorySessionStore
from newsfeed.news.client import NewsApiClient
from newsfeed.main import create_app


class FakeNewsApi:
    """News API 대역. 받은 요청을 기록하고 지정된 응답을 돌려줍니다."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload = {"status": "ok", "totalResults": 1, "articles": [{"title": "Hello"}]}
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.status_code >= 400:
            return httpx.Response(self.status_code, text='{"status":"error","code":"apiKeyInvalid"}')
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture()
def config():
    return Config(
        _env_file=None,
        ENVIRONMENT="test",
        DATABASE_URL=None,
        STORAGE_BACKEND="memory",
        SESSION_SECRET_KEY="test-secret",
        DEFAULT_NEWS_API_KEY="default-news-key",
        DEFAULT_GEMINI_API_KEY="default-gemini-key",
        NEWS_API_BASE_URL="https://newsapi.test/v2",
        CORS_ORIGINS="http://localhost:3000",
    )


@pytest.fixture(params=["memory", "sqlite"])
async def backends(request):
    """같은 테스트를 메모리 저장소와 SQLite(DB 저장소) 양쪽에서 실행"""
    if request.param == "memory":
        storage, sessions = MemoryStorage(), MemorySessionStore()
    else:
        # 메모리 SQLite로 빠른 테스트
        engine = build_engine("sqlite+aiosqlite:///:memory:")
        factory = build_session_factory(engine)
        storage, sessions = DatabaseStorage(engine, factory), DatabaseSessionStore(factory)
    await storage.init()
    yield storage, sessions
    await sessions.close()
    await storage.close()


@pytest.fixture()
def storage(backends):
    return backends[0]


@pytest.fixture()
def sessions(backends):
    return backends[1]


@pytest.fixture()
def news_api():
    return FakeNewsApi()


@pytest.fixture()
def app(config, backends, news_api):
    storage, sessions = backends
    news_client = NewsApiClient(
        config.NEWS_API_BASE_URL,
        transport=httpx.MockTransport(news_api.handler),
    )
    return create_app(config, storage=storage, sessions=sessions, news_client=news_client)


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
async def auth_client(client):
    """회원가입(=로그인)까지 마친 클라이언트"""
    response = await client.post("/api/register", json={"username": "reader", "password": "secret123"})
    assert response.status_code == 200
    return client
