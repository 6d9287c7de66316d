# backend/newsfeed/users/models.py
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt 해시만 저장
    news_api_key = Column(Text)
    gemini_api_key = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    interests = relationship("Interest", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username!r})"
    def __str__(self) -> str:
        return self.username
