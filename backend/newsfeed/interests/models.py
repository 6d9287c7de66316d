# backend/newsfeed/interests/models.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base

class Interest(Base):
    __tablename__ = "interests"
    __table_args__ = (
        Index("ix_interests_user_id_name", "user_id", "name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 이름 중복 허용 (유일성 제약 없음)
    name = Column(String(50), nullable=False)
    active = Column(Boolean, default=True, server_default="1", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="interests")

    def __repr__(self) -> str:
        return f"Interest(id={self.id}, user_id={self.user_id}, name={self.name!r}, active={self.active})"
    def __str__(self) -> str:
        return self.name
