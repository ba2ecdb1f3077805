# 파일 위치: backend/pomodoro/core/config.py

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # MONGO_URI가 비어 있으면 메모리 세션 로그를 사용합니다. (로컬 개발/테스트용)
    MONGO_URI: Optional[str] = None
    MONGO_DB_NAME: str = "pomodoro"
    SESSIONS_COLLECTION: str = "completed_sessions"

    # 카운트다운 틱 주기 (초)
    TICK_SECONDS: float = 1.0

    # 타이머 기본 설정 (분 단위)
    WORK_DURATION_MINUTES: int = 25
    SHORT_BREAK_DURATION_MINUTES: int = 5
    LONG_BREAK_DURATION_MINUTES: int = 15
    LONG_BREAK_INTERVAL: int = 4

    CORS_ORIGINS: List[str] = [
        "http://localhost:8080",
        "http://127.0.0.1:8080",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
