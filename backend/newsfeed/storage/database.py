import logging
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ..database import Base
from ..errors import ConstraintViolation
from ..users.models import User as UserModel
from ..users.schema import User, UserCreate
from ..interests.models import Interest as InterestModel
from ..interests.schemas import Interest, NewInterest
from ..articles.models import Article as ArticleModel
from ..articles.schemas import Article, ArticleCreate
from .base import StorageGateway, check_user_update
from .. import db_models  # noqa: F401

logger = logging.getLogger(__name__)


class DatabaseStorage(StorageGateway):
    """SQLAlchemy(asyncio) 기반 영구 저장소"""

    def __init__(self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]):
        self.engine = engine
        self.session_factory = session_factory

    async def init(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    async def close(self) -> None:
        await self.engine.dispose()

    # --- users ---
    async def get_user(self, user_id: int) -> Optional[User]:
        async with self.session_factory() as db:
            db_user = await db.get(UserModel, user_id)
            return User.model_validate(db_user) if db_user else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        async with self.session_factory() as db:
            result = await db.execute(select(UserModel).where(UserModel.username == username))
            db_user = result.scalar_one_or_none()
            return User.model_validate(db_user) if db_user else None

    async def create_user(self, data: UserCreate) -> User:
        async with self.session_factory() as db:
            db_user = UserModel(**data.model_dump())
            db.add(db_user)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise ConstraintViolation(f"Username {data.username!r} already exists") from e
            await db.refresh(db_user)
            return User.model_validate(db_user)

    async def update_user(self, user_id: int, data: dict) -> Optional[User]:
        check_user_update(data)
        async with self.session_factory() as db:
            db_user = await db.get(UserModel, user_id)
            if db_user is None:
                return None
            for field, value in data.items():
                setattr(db_user, field, value)
            await db.commit()
            await db.refresh(db_user)
            return User.model_validate(db_user)

    async def delete_user(self, user_id: int) -> bool:
        # 관심사/세션/user_articles는 FK ON DELETE CASCADE로 함께 삭제
        async with self.session_factory() as db:
            result = await db.execute(delete(UserModel).where(UserModel.id == user_id))
            await db.commit()
            return result.rowcount > 0

    # --- interests ---
    async def get_interests(self, user_id: int) -> List[Interest]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(InterestModel)
                .where(InterestModel.user_id == user_id)
                .order_by(InterestModel.name, InterestModel.id)
            )
            return [Interest.model_validate(row) for row in result.scalars().all()]

    async def get_interest(self, interest_id: int) -> Optional[Interest]:
        async with self.session_factory() as db:
            db_interest = await db.get(InterestModel, interest_id)
            return Interest.model_validate(db_interest) if db_interest else None

    async def create_interest(self, data: NewInterest) -> Interest:
        async with self.session_factory() as db:
            db_interest = InterestModel(**data.model_dump())
            db.add(db_interest)
            await db.commit()
            await db.refresh(db_interest)
            return Interest.model_validate(db_interest)

    async def update_interest(self, interest_id: int, data: dict) -> Optional[Interest]:
        async with self.session_factory() as db:
            db_interest = await db.get(InterestModel, interest_id)
            if db_interest is None:
                return None
            for field, value in data.items():
                setattr(db_interest, field, value)
            await db.commit()
            await db.refresh(db_interest)
            return Interest.model_validate(db_interest)

    async def delete_interest(self, interest_id: int) -> bool:
        async with self.session_factory() as db:
            result = await db.execute(delete(InterestModel).where(InterestModel.id == interest_id))
            await db.commit()
            return result.rowcount > 0

    # --- articles ---
    async def get_article_by_id(self, article_id: int) -> Optional[Article]:
        async with self.session_factory() as db:
            db_article = await db.get(ArticleModel, article_id)
            return Article.model_validate(db_article) if db_article else None

    async def get_article_by_source_id(self, source_id: str) -> Optional[Article]:
        async with self.session_factory() as db:
            result = await db.execute(select(ArticleModel).where(ArticleModel.source_id == source_id))
            db_article = result.scalars().first()
            return Article.model_validate(db_article) if db_article else None

    async def save_article(self, data: ArticleCreate) -> Article:
        if data.source_id:
            existing = await self.get_article_by_source_id(data.source_id)
            if existing:
                return existing

        async with self.session_factory() as db:
            db_article = ArticleModel(**data.model_dump())
            db.add(db_article)
            try:
                await db.commit()
            except IntegrityError:
                # 동시에 같은 source_id가 저장된 경우: 먼저 저장된 행을 반환
                await db.rollback()
                if not data.source_id:
                    raise
                logger.info(f"Article with source_id={data.source_id!r} saved concurrently, returning existing row")
                existing = await self.get_article_by_source_id(data.source_id)
                if existing is None:
                    raise
                return existing
            await db.refresh(db_article)
            return Article.model_validate(db_article)

    async def update_article(self, article_id: int, data: dict) -> Optional[Article]:
        async with self.session_factory() as db:
            db_article = await db.get(ArticleModel, article_id)
            if db_article is None:
                return None
            for field, value in data.items():
                setattr(db_article, field, value)
            await db.commit()
            await db.refresh(db_article)
            return Article.model_validate(db_article)
