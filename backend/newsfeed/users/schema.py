from pydantic import ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from ..models import CustomModel

class UserCreate(CustomModel):
    """저장소에 전달되는 신규 사용자 데이터 (password는 이미 해시된 값)"""
    username: str = Field(..., min_length=1, max_length=50)
    password: str
    news_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

class User(CustomModel):
    id: int
    username: str
    password: str
    news_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    created_at: datetime

class UserPublic(CustomModel):
    """응답용 사용자 스키마. password 필드는 절대 포함하지 않습니다."""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., json_schema_extra={"example": 1})
    username: str = Field(..., json_schema_extra={"example": "reader"})
    news_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    created_at: datetime

class ApiKeysUpdate(CustomModel):
    news_api_key: Optional[str] = Field(None, json_schema_extra={"example": "newsapi-key"})
    gemini_api_key: Optional[str] = Field(None, json_schema_extra={"example": "gemini-key"})

    @field_validator("news_api_key", "gemini_api_key", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        # 빈 문자열은 "키 없음"으로 저장
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v
