# backend/newsfeed/articles/router.py
import logging

from fastapi import APIRouter, status

from ..dependencies import StorageDep
from ..auth.dependencies import CurrentUser
from ..users.schema import User
from .schemas import Article, ArticleCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/articles", tags=["articles"])

@router.post("", response_model=Article, status_code=status.HTTP_201_CREATED)
async def save_article(body: ArticleCreate, storage: StorageDep, current_user: User = CurrentUser):
    """
    사용자가 기사를 열 때 호출됩니다.
    source_id가 같은 기사가 이미 있으면 새로 저장하지 않고 기존 기사(요약 포함)를 반환합니다.
    """
    article = await storage.save_article(body)
    logger.debug(f"Article saved/reused: id={article.id}, source_id={article.source_id!r}")
    return article
