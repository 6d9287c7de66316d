# backend/newsfeed/dependencies.py
"""
app.state에 준비된 구성요소(설정, 저장소, 세션 저장소, News API 클라이언트)를
라우터에 주입하기 위한 의존성 모음.

다른 모듈에서 `storage: StorageDep` 만 적으면 저장소가 주입됩니다.
"""
from typing import Annotated

from fastapi import Depends, Request

from .config import Config
from .storage import StorageGateway
from .auth.sessions import SessionStore
from .news.client import NewsApiClient


def get_config(request: Request) -> Config:
    return request.app.state.config

def get_storage(request: Request) -> StorageGateway:
    return request.app.state.storage

def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions

def get_news_client(request: Request) -> NewsApiClient:
    return request.app.state.news_client


ConfigDep = Annotated[Config, Depends(get_config)]
StorageDep = Annotated[StorageGateway, Depends(get_storage)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
NewsClientDep = Annotated[NewsApiClient, Depends(get_news_client)]
