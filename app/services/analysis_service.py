"""
Analysis Service
외부 콘텐츠 분석 API(Sightengine)에 미디어를 업로드하고 응답을 정규화
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Tuple

import requests

from app.core.config import Settings
from app.core.errors import AnalysisFailed
from app.models.schemas import AnalysisResult, UploadedMedia
from app.services.interpreter import interpret

logger = logging.getLogger(__name__)


class AnalysisService:
    """외부 분석 API 클라이언트 (요청당 1회 호출, 재시도 없음)"""

    MEDIA_FIELD = "media"

    def __init__(self, settings: Settings, post: Callable[..., requests.Response] = requests.post):
        self.settings = settings
        # 요청마다 새 연결 (Session/쿠키를 요청 간 공유하지 않음)
        self._http_post = post

    def build_form(self, media: UploadedMedia) -> Tuple[Dict[str, str], Dict[str, Any]]:
        """multipart 요청 본문 구성 (data, files)"""
        data = {
            "models": self.settings.models,
            "api_user": self.settings.api_user or "",
            "api_secret": self.settings.api_secret or "",
        }
        files = {
            self.MEDIA_FIELD: (media.filename, media.content, media.content_type),
        }
        return data, files

    def _post(self, media: UploadedMedia) -> Dict[str, Any]:
        data, files = self.build_form(media)

        logger.info("Sending %s (%d bytes) to analysis API", media.filename, media.size)
        logger.debug("API user: %s, models: %s", self.settings.api_user, self.settings.models)

        try:
            response = self._http_post(self.settings.api_url, data=data, files=files)
        except requests.RequestException as e:
            logger.error("Analysis API request failed: %s", e)
            raise AnalysisFailed() from e

        logger.info("Analysis API responded with status %s", response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(
                "Analysis API returned non-JSON body (status %s): %s",
                response.status_code, response.text[:500]
            )
            raise AnalysisFailed() from e

        logger.debug("Full API response: %s", payload)

        if not isinstance(payload, dict) or payload.get("status") != "success":
            logger.error(
                "Analysis API error (status %s): %s", response.status_code, payload
            )
            raise AnalysisFailed()

        return payload

    async def analyze(self, content: bytes, filename: str, content_type: str) -> AnalysisResult:
        """
        미디어 분석

        Returns:
            AnalysisResult (isAIGenerated, confidence, details, status)

        Raises:
            AnalysisFailed: 네트워크/인증/응답 형식 문제 전부
        """
        media = UploadedMedia(
            content=content,
            filename=filename or "upload",
            content_type=content_type or "application/octet-stream",
        )

        loop = asyncio.get_running_loop()
        payload = await loop.run_in_executor(None, lambda: self._post(media))

        return interpret(payload)
