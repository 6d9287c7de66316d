"""
저장소 게이트웨이 인터페이스.

두 구현(DatabaseStorage, MemoryStorage)은 동일한 계약을 따릅니다.
- 조회 대상이 없으면 예외 대신 None을 반환
- 관심사 목록은 name 오름차순 정렬
- source_id가 같은 기사는 다시 저장하지 않고 기존 행을 반환
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..users.schema import User, UserCreate
from ..interests.schemas import Interest, NewInterest
from ..articles.schemas import Article, ArticleCreate

# update_user로 변경할 수 없는 필드
IMMUTABLE_USER_FIELDS = frozenset({"id", "password", "created_at"})


class StorageGateway(ABC):

    async def init(self) -> None:
        """백엔드 준비 (테이블 생성 등)"""

    async def close(self) -> None:
        """백엔드 자원 정리"""

    # --- users ---
    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User:
        """username 중복 시 ConstraintViolation을 발생시킵니다."""

    @abstractmethod
    async def update_user(self, user_id: int, data: dict) -> Optional[User]: ...

    @abstractmethod
    async def delete_user(self, user_id: int) -> bool:
        """
        사용자와 그에 속한 관심사를 함께 삭제합니다.
        세션 행은 DB의 FK CASCADE로만 지워지며, 메모리 세션은 만료되거나 사용자 조회에 실패(401)할 때까지 남습니다.
        """

    # --- interests ---
    @abstractmethod
    async def get_interests(self, user_id: int) -> List[Interest]: ...

    @abstractmethod
    async def get_interest(self, interest_id: int) -> Optional[Interest]: ...

    @abstractmethod
    async def create_interest(self, data: NewInterest) -> Interest: ...

    @abstractmethod
    async def update_interest(self, interest_id: int, data: dict) -> Optional[Interest]: ...

    @abstractmethod
    async def delete_interest(self, interest_id: int) -> bool:
        """삭제된 행이 없으면 False"""

    # --- articles ---
    @abstractmethod
    async def get_article_by_id(self, article_id: int) -> Optional[Article]: ...

    @abstractmethod
    async def get_article_by_source_id(self, source_id: str) -> Optional[Article]: ...

    @abstractmethod
    async def save_article(self, data: ArticleCreate) -> Article: ...

    @abstractmethod
    async def update_article(self, article_id: int, data: dict) -> Optional[Article]: ...


def check_user_update(data: dict) -> dict:
    forbidden = IMMUTABLE_USER_FIELDS.intersection(data)
    if forbidden:
        raise ValueError(f"Fields cannot be updated: {', '.join(sorted(forbidden))}")
    return data
