from datetime import datetime, timezone
from itertools import count
from typing import Dict, List, Optional

from ..errors import ConstraintViolation
from ..users.schema import User, UserCreate
from ..interests.schemas import Interest, NewInterest
from ..articles.schemas import Article, ArticleCreate
from .base import StorageGateway, check_user_update


class MemoryStorage(StorageGateway):
    """
    프로세스 메모리 저장소 (DB 없이 개발/테스트용).
    단일 이벤트 루프 안에서만 사용하며, 메서드 내부에 await가 없으므로
    조회 후 저장(중복 확인)이 중간에 끼어들 틈 없이 실행됩니다.
    """

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.interests: Dict[int, Interest] = {}
        self.articles: Dict[int, Article] = {}
        self._user_ids = count(1)
        self._interest_ids = count(1)
        self._article_ids = count(1)

    # --- users ---
    async def get_user(self, user_id: int) -> Optional[User]:
        user = self.users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self.users.values():
            if user.username == username:
                return user.model_copy()
        return None

    async def create_user(self, data: UserCreate) -> User:
        if any(u.username == data.username for u in self.users.values()):
            raise ConstraintViolation(f"Username {data.username!r} already exists")
        user = User(id=next(self._user_ids), created_at=_now(), **data.model_dump())
        self.users[user.id] = user
        return user.model_copy()

    async def update_user(self, user_id: int, data: dict) -> Optional[User]:
        check_user_update(data)
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update=data)
        self.users[user_id] = updated
        return updated.model_copy()

    async def delete_user(self, user_id: int) -> bool:
        if self.users.pop(user_id, None) is None:
            return False
        # ON DELETE CASCADE와 동일하게 소유한 관심사도 삭제
        for interest_id in [i.id for i in self.interests.values() if i.user_id == user_id]:
            del self.interests[interest_id]
        return True

    # --- interests ---
    async def get_interests(self, user_id: int) -> List[Interest]:
        owned = [i for i in self.interests.values() if i.user_id == user_id]
        return [i.model_copy() for i in sorted(owned, key=lambda i: (i.name, i.id))]

    async def get_interest(self, interest_id: int) -> Optional[Interest]:
        interest = self.interests.get(interest_id)
        return interest.model_copy() if interest else None

    async def create_interest(self, data: NewInterest) -> Interest:
        interest = Interest(id=next(self._interest_ids), created_at=_now(), **data.model_dump())
        self.interests[interest.id] = interest
        return interest.model_copy()

    async def update_interest(self, interest_id: int, data: dict) -> Optional[Interest]:
        interest = self.interests.get(interest_id)
        if interest is None:
            return None
        updated = interest.model_copy(update=data)
        self.interests[interest_id] = updated
        return updated.model_copy()

    async def delete_interest(self, interest_id: int) -> bool:
        return self.interests.pop(interest_id, None) is not None

    # --- articles ---
    async def get_article_by_id(self, article_id: int) -> Optional[Article]:
        article = self.articles.get(article_id)
        return article.model_copy() if article else None

    async def get_article_by_source_id(self, source_id: str) -> Optional[Article]:
        for article in self.articles.values():
            if article.source_id == source_id:
                return article.model_copy()
        return None

    async def save_article(self, data: ArticleCreate) -> Article:
        if data.source_id:
            existing = await self.get_article_by_source_id(data.source_id)
            if existing:
                return existing
        article = Article(id=next(self._article_ids), **data.model_dump())
        self.articles[article.id] = article
        return article.model_copy()

    async def update_article(self, article_id: int, data: dict) -> Optional[Article]:
        article = self.articles.get(article_id)
        if article is None:
            return None
        updated = article.model_copy(update=data)
        self.articles[article_id] = updated
        return updated.model_copy()


def _now() -> datetime:
    return datetime.now(timezone.utc)
