from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from ..models import CustomModel

class InterestCreate(CustomModel):
    name: str = Field(..., min_length=2, max_length=50, json_schema_extra={"example": "Quantum Computing"})

class NewInterest(CustomModel):
    user_id: int
    name: str = Field(..., min_length=2, max_length=50)
    active: bool = True

class InterestUpdate(CustomModel):
    active: Optional[bool] = None
    name: Optional[str] = Field(None, min_length=2, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def _blank_name_to_none(cls, v):
        # 빈 이름은 "변경 없음"으로 처리
        if isinstance(v, str) and not v.strip():
            return None
        return v

class Interest(CustomModel):
    id: int
    user_id: int
    name: str
    active: bool
    created_at: datetime
