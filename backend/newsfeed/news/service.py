import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Config
from ..errors import InternalError, NotFoundError, ValidationError
from ..storage import StorageGateway
from ..users.schema import User
from ..articles.schemas import Article, ArticleUpdate
from .client import NewsApiClient
from .summarizer import generate_news_for_interests, summarize_article

logger = logging.getLogger(__name__)


def _select_key(personal_key: Optional[str], default_key: Optional[str]) -> str:
    # 로그인 사용자의 개인 키가 있으면 우선, 없으면 공용 기본 키
    return personal_key or default_key or ""

def select_news_api_key(user: Optional[User], config: Config) -> str:
    return _select_key(user.news_api_key if user else None, config.DEFAULT_NEWS_API_KEY)

def select_gemini_api_key(user: Optional[User], config: Config) -> str:
    return _select_key(user.gemini_api_key if user else None, config.DEFAULT_GEMINI_API_KEY)


async def get_top_headlines(
    client: NewsApiClient,
    api_key: str,
    *,
    category: Optional[str] = None,
    page: int = 1,
    page_size: int = 10,
) -> Dict[str, Any]:
    try:
        return await client.top_headlines(api_key, category=category, page=page, page_size=page_size)
    except httpx.HTTPError as e:
        logger.error(f"Error fetching top headlines: {e}")
        raise InternalError("Failed to fetch news") from e

async def search_news(
    client: NewsApiClient,
    api_key: str,
    *,
    query: Optional[str],
    page: int = 1,
    page_size: int = 10,
) -> Dict[str, Any]:
    if not query or not query.strip():
        raise ValidationError("Search query is required")
    try:
        return await client.everything(api_key, query=query, page=page, page_size=page_size)
    except httpx.HTTPError as e:
        logger.error(f"Error searching news: {e}")
        raise InternalError("Failed to search news") from e

async def get_custom_news(
    client: NewsApiClient,
    storage: StorageGateway,
    user: User,
    api_key: str,
    *,
    page: int = 1,
    page_size: int = 10,
) -> Dict[str, Any]:
    """활성 관심사로 검색어를 만들어 뉴스를 조회하고, 사용한 관심사와 검색어를 응답에 덧붙입니다."""
    interests = await storage.get_interests(user.id)
    interest_names = [i.name for i in interests if i.active]
    if not interest_names:
        raise NotFoundError("No active interests found. Add interests to see personalized news.")

    query = generate_news_for_interests(interest_names)
    if not query:
        raise InternalError("Failed to generate news for interests")
    logger.info(f"Custom news query for user_id={user.id}: {query!r}")

    try:
        data = await client.everything(api_key, query=query, page=page, page_size=page_size)
    except httpx.HTTPError as e:
        logger.error(f"Error fetching custom news: {e}")
        raise InternalError("Failed to fetch custom news") from e

    return {**data, "interests": interest_names, "generatedQuery": query}

async def get_article_summary(
    storage: StorageGateway,
    article_id: int,
    config: Config,
    user: User,
) -> str:
    article: Optional[Article] = await storage.get_article_by_id(article_id)
    if article is None:
        raise NotFoundError("Article not found")
    if article.summary:
        return article.summary

    gemini_key = select_gemini_api_key(user, config) if config.USE_GEMINI else None
    summary = await summarize_article(article, api_key=gemini_key, model=config.GEMINI_MODEL)
    if not summary:
        raise InternalError("Failed to generate summary")

    # 다음 요청부터는 저장된 요약을 그대로 사용
    update = ArticleUpdate(summary=summary)
    await storage.update_article(article.id, update.model_dump(exclude_unset=True))
    return summary
