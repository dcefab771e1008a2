"""
Settings
환경 변수(.env 포함)에서 서버 설정을 한 번 읽어 앱 전체에 전달
"""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

MB = 1024 * 1024

DEFAULT_API_URL = "https://api.sightengine.com/1.0/check.json"
DEFAULT_MODELS = "nudity,wad,offensive,genai"


class Settings(BaseModel):
    """서버 설정 (시작 시 1회 로드)"""

    host: str = "0.0.0.0"
    port: int = 3000
    api_url: str = DEFAULT_API_URL
    api_user: Optional[str] = None
    api_secret: Optional[str] = None
    models: str = DEFAULT_MODELS
    max_upload_bytes: int = 10 * MB
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    model_config = {"frozen": True}

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_user) and bool(self.api_secret)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """
        환경 변수에서 설정 생성

        Args:
            env_file: 추가로 읽을 .env 파일 경로 (없으면 기본 탐색)
        """
        load_dotenv(env_file)

        origins = os.getenv("CORS_ALLOW_ORIGINS", "*")

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            api_url=os.getenv("EXTERNAL_API_URL") or DEFAULT_API_URL,
            api_user=os.getenv("SIGHTENGINE_API_USER") or None,
            api_secret=os.getenv("SIGHTENGINE_API_SECRET") or None,
            models=os.getenv("SIGHTENGINE_MODELS") or DEFAULT_MODELS,
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * MB))),
            cors_allow_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
