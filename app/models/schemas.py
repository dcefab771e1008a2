"""
API Schemas
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field


class AnalysisResult(BaseModel):
    """정규화된 분석 결과 (요청마다 1회 생성, 저장하지 않음)"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_ai_generated: bool = Field(alias="isAIGenerated")
    confidence: float = Field(description="0~100 스케일 확신도")
    details: Dict[str, Any] = Field(default_factory=dict)
    status: Literal["success"] = "success"


class ErrorResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str


class UploadedMedia(BaseModel):
    """업로드된 파일 (메모리에만 존재)"""

    model_config = ConfigDict(frozen=True)

    content: bytes
    filename: str
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)
