# backend/newsfeed/articles/schemas.py
from datetime import datetime, timezone
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from ..models import CustomModel

class ArticleCreate(CustomModel):
    # 클라이언트는 뉴스 API 응답을 그대로 가공해서 보내므로 알 수 없는 필드는 무시
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    content: Optional[str] = None
    source: Optional[str] = None
    source_id: Optional[str] = None
    url: Optional[str] = None
    url_to_image: Optional[str] = None
    published_at: Optional[datetime] = None
    category: Optional[str] = None
    summary: Optional[str] = None

    @field_validator("source_id", mode="before")
    @classmethod
    def _blank_source_id(cls, v):
        # 빈 문자열은 중복 판별 키로 쓰지 않음
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("published_at", mode="before")
    @classmethod
    def _coerce_published_at(cls, v):
        """날짜 문자열을 datetime으로 변환. 해석할 수 없는 값은 거부하지 않고 None으로 처리합니다."""
        if v is None or isinstance(v, datetime):
            return v
        if isinstance(v, str):
            raw = v.strip()
            if not raw:
                return None
            try:
                return datetime.fromisoformat(raw.replace("Z", "+00:00"))
            except ValueError:
                return None
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            # JS Date 타임스탬프 (밀리초)
            try:
                return datetime.fromtimestamp(v / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                return None
        return None

class ArticleUpdate(CustomModel):
    summary: Optional[str] = None

class Article(CustomModel):
    id: int
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    source: Optional[str] = None
    source_id: Optional[str] = None
    url: Optional[str] = None
    url_to_image: Optional[str] = None
    published_at: Optional[datetime] = None
    category: Optional[str] = None
    summary: Optional[str] = None

class ArticleSummary(CustomModel):
    summary: str
