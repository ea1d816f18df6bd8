"""TalkSync 시그널링 서버 설정.

서버 주소, 로깅, CORS, WebSocket 연결 관련 설정을 환경변수 기반으로 관리합니다.
.env 파일(config/.env)이나 시스템 환경 변수에서 값을 자동으로 로딩합니다.

사용 예시:
    from talksync.config import get_settings
    settings = get_settings()
    print(settings.WS_PATH)
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

_env_path = Path(__file__).parent.parent / "config" / ".env"
load_dotenv(_env_path)


DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5174",
    "https://talksync0001.netlify.app",
    "https://talksync-a9da2.web.app",
]


class Settings(BaseSettings):
    """시그널링 서버 설정 클래스.

    환경 변수를 Python 객체로 매핑하고 유효성을 검증합니다.
    """

    # ==========================================
    # 서버 설정
    # ==========================================
    APP_NAME: str = Field(
        default="TalkSync Signaling Server",
        description="서비스 이름"
    )

    ENV: str = Field(
        default="development",
        description="실행 환경 (development | production)"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="서버 호스트"
    )

    PORT: int = Field(
        default=5000,
        description="서버 포트"
    )

    # ==========================================
    # 로깅 설정
    # ==========================================
    LOG_LEVEL: str = Field(
        default="INFO",
        description="로그 레벨"
    )

    LOG_DIR: str = Field(
        default="logs",
        description="로그 파일 디렉토리"
    )

    LOG_FILE_ENABLED: bool = Field(
        default=True,
        description="일자별 로그 파일 저장 여부"
    )

    LOG_RETENTION_DAYS: int = Field(
        default=60,
        description="로그 파일 보관 기간 (일)"
    )

    # ==========================================
    # 접근 제어 / CORS
    # ==========================================
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS),
        description="허용할 프론트엔드 Origin 목록"
    )

    ACCESS_PASSWORD: str = Field(
        default="",
        description="접근 비밀번호 (비어 있으면 인증 없이 허용)"
    )

    # ==========================================
    # WebSocket 연결 설정
    # ==========================================
    WS_PATH: str = Field(
        default="/ws",
        description="시그널링 WebSocket 엔드포인트 경로"
    )

    OUTBOX_MAX_SIZE: int = Field(
        default=256,
        description="연결별 송신 대기열 최대 길이"
    )

    SEND_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="프레임 하나를 전송할 때의 최대 대기 시간 (초)"
    )

    # ==========================================
    # 유효성 검증
    # ==========================================
    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """로그 레벨 유효성 검증"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL은 {allowed} 중 하나여야 합니다.")
        return v.upper()

    @field_validator("ENV")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """실행 환경 유효성 검증"""
        allowed = ["development", "production"]
        if v.lower() not in allowed:
            raise ValueError(f"ENV는 {allowed} 중 하나여야 합니다.")
        return v.lower()

    @field_validator("OUTBOX_MAX_SIZE", "SEND_TIMEOUT_SECONDS")
    @classmethod
    def validate_positive(cls, v):
        """양수 검증"""
        if v <= 0:
            raise ValueError("0보다 큰 값이어야 합니다.")
        return v

    @property
    def is_production(self) -> bool:
        """운영 환경 여부."""
        return self.ENV == "production"

    class Config:
        """Pydantic 설정"""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """설정 싱글톤 인스턴스 반환.

    lru_cache 데코레이터로 인해 한 번만 로딩됩니다.
    설정 재로딩이 필요하면 get_settings.cache_clear()를 호출하세요.

    Returns:
        Settings: 설정 객체
    """
    return Settings()
