import json
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file="../.env", env_file_encoding="utf-8", extra="ignore")

    # FastAPI 애플리케이션 설정
    ENVIRONMENT: str = "development"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"  # 로그 레벨 설정

    # 데이터베이스 설정 (없으면 메모리 저장소로 동작)
    DATABASE_URL: str | None = None
    POSTGRES_SSLMODE: str = "disable"
    # 저장소 선택: "auto" | "database" | "memory"
    STORAGE_BACKEND: str = "auto"

    # 세션 쿠키 설정
    SESSION_SECRET_KEY: str = "your-secret-key"
    SESSION_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "newsfeed.sid"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_EXPIRE_DAYS: int = 7

    # CORS 설정
    CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost",
    ]

    # News API 설정
    DEFAULT_NEWS_API_KEY: str | None = None
    NEWS_API_BASE_URL: str = "https://newsapi.org/v2"
    NEWS_API_COUNTRY: str = "us"
    NEWS_API_TIMEOUT: float = 30.0

    # Gemini API 설정
    DEFAULT_GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    USE_GEMINI: bool = False  # Gemini 요약 사용 여부 플래그

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _normalise_cors(cls, value):
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            raw = value.strip()
            if raw.startswith("[") and raw.endswith("]"):
                try:
                    parsed = json.loads(raw)
                    if isinstance(parsed, list):
                        return parsed
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in raw.split(",") if item.strip()]
        raise ValueError("CORS_ORIGINS must be a string or list of strings")

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _normalise_database_url(cls, value):
        """postgres:// 형식의 URL을 asyncpg 드라이버 URL로 변환합니다."""
        if not value:
            return None
        if isinstance(value, str):
            for prefix in ("postgres://", "postgresql://"):
                if value.startswith(prefix):
                    return "postgresql+asyncpg://" + value[len(prefix):]
        return value

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def _check_storage_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("auto", "database", "memory"):
            raise ValueError("STORAGE_BACKEND must be one of: auto, database, memory")
        return value

    @property
    def storage_backend(self) -> str:
        """실제로 사용할 저장소 종류 ("database" 또는 "memory")"""
        if self.STORAGE_BACKEND == "auto":
            return "database" if self.DATABASE_URL else "memory"
        return self.STORAGE_BACKEND


settings = Config()
