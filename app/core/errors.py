"""
Error taxonomy
모든 실패는 {"message": ...} JSON으로 변환되며 내부 상세는 로그에만 남김
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Server error processing request"


class DetectorError(Exception):
    """사용자에게 보여줄 메시지와 HTTP 상태 코드를 가진 기본 예외"""

    status_code = 500
    message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingUpload(DetectorError):
    status_code = 400
    message = "No file uploaded"


class UploadTooLarge(DetectorError):
    status_code = 413
    message = "File too large"


class ServerMisconfigured(DetectorError):
    status_code = 500
    message = "API credentials not configured on server"


class AnalysisFailed(DetectorError):
    """외부 분석 API 호출 실패 (상세 내용은 로그로만)"""

    status_code = 500
    message = "Failed to analyze content. Please try again."


class InternalError(DetectorError):
    status_code = 500
    message = GENERIC_ERROR_MESSAGE


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """DetectorError / 검증 오류 / 그 외 예외를 JSON 메시지로 변환"""

    @app.exception_handler(DetectorError)
    async def detector_error_handler(request: Request, exc: DetectorError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # multipart 필드 누락 등은 업로드 없음으로 취급
        logger.warning("Request validation failed on %s: %s", request.url.path, exc.errors())
        return error_response(MissingUpload.status_code, MissingUpload.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return error_response(InternalError.status_code, InternalError.message)
