"""
API Routes - AI 생성 콘텐츠 탐지 엔드포인트
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from app.core.config import Settings
from app.core.errors import InternalError, MissingUpload, ServerMisconfigured, UploadTooLarge
from app.models.schemas import AnalysisResult, ErrorResponse
from app.services.analysis_service import AnalysisService

logger = logging.getLogger(__name__)

router = APIRouter()

CHUNK_SIZE = 1024 * 1024


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_analysis_service(request: Request) -> AnalysisService:
    return request.app.state.analysis_service


async def read_upload(file: UploadFile, max_bytes: int) -> bytes:
    """업로드를 메모리로 읽기 (max_bytes 초과 시 즉시 거부)"""
    chunks = []
    total = 0
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            logger.warning("Rejected upload %s: larger than %d bytes", file.filename, max_bytes)
            raise UploadTooLarge()
        chunks.append(chunk)
    return b"".join(chunks)


@router.post(
    "/detect",
    response_model=AnalysisResult,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def detect(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    단일 이미지/비디오 분석

    외부 분석 API 결과를 {isAIGenerated, confidence, details, status}로 반환합니다.
    """
    if file is None or not file.filename:
        raise MissingUpload()

    contents = await read_upload(file, settings.max_upload_bytes)

    # 요청마다 확인 (캐시하지 않음)
    if not settings.has_credentials:
        logger.error("Analysis API credentials are not configured")
        raise ServerMisconfigured()

    try:
        return await service.analyze(
            contents,
            file.filename,
            file.content_type,
        )
    except Exception:
        logger.exception("Error processing detection request for %s", file.filename)
        raise InternalError()
