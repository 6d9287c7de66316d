# backend/newsfeed/articles/models.py
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Boolean, Index
from sqlalchemy.sql import func
from ..database import Base

class Article(Base):
    __tablename__ = "articles"
    __table_args__ = (
        # source_id 기준 중복 저장 방지 (NULL은 여러 건 허용)
        Index("uq_articles_source_id", "source_id", unique=True),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    content = Column(Text)
    source = Column(Text)  # 표시용 매체 이름
    source_id = Column(Text)  # 외부 API 식별자 또는 기사 URL
    url = Column(Text)
    url_to_image = Column(Text)
    published_at = Column(DateTime(timezone=True))
    category = Column(Text)
    summary = Column(Text)

    def __repr__(self) -> str:
        return f"Article(id={self.id}, source_id={self.source_id!r}, title={self.title!r})"
    def __str__(self) -> str:
        return self.title

class UserArticle(Base):
    __tablename__ = "user_articles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False)
    read = Column(Boolean, default=False, server_default="0", nullable=False)
    saved = Column(Boolean, default=False, server_default="0", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"UserArticle(id={self.id}, user_id={self.user_id}, article_id={self.article_id})"
