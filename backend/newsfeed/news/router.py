from typing import Annotated, Optional

from fastapi import APIRouter, Query

from ..dependencies import ConfigDep, NewsClientDep, StorageDep
from ..auth.dependencies import CurrentUser, OptionalUser
from ..users.schema import User
from ..articles.schemas import ArticleSummary
from . import service

router = APIRouter(prefix="/api/news", tags=["news"])

PageParam = Annotated[int, Query(ge=1)]
PageSizeParam = Annotated[int, Query(ge=1, le=100, alias="pageSize")]


@router.get("/top-headlines")
async def top_headlines(
    client: NewsClientDep,
    config: ConfigDep,
    category: Optional[str] = None,
    page: PageParam = 1,
    page_size: PageSizeParam = 10,
    user: Optional[User] = OptionalUser,
):
    api_key = service.select_news_api_key(user, config)
    return await service.get_top_headlines(client, api_key, category=category, page=page, page_size=page_size)

@router.get("/search")
async def search(
    client: NewsClientDep,
    config: ConfigDep,
    q: Optional[str] = None,
    page: PageParam = 1,
    page_size: PageSizeParam = 10,
    user: Optional[User] = OptionalUser,
):
    api_key = service.select_news_api_key(user, config)
    return await service.search_news(client, api_key, query=q, page=page, page_size=page_size)

@router.get("/article/{article_id}/summary", response_model=ArticleSummary)
async def article_summary(
    article_id: int,
    storage: StorageDep,
    config: ConfigDep,
    current_user: User = CurrentUser,
):
    summary = await service.get_article_summary(storage, article_id, config, current_user)
    return ArticleSummary(summary=summary)

@router.get("/custom")
async def custom_news(
    client: NewsClientDep,
    storage: StorageDep,
    config: ConfigDep,
    page: PageParam = 1,
    page_size: PageSizeParam = 10,
    current_user: User = CurrentUser,
):
    api_key = service.select_news_api_key(current_user, config)
    return await service.get_custom_news(
        client, storage, current_user, api_key, page=page, page_size=page_size
    )
