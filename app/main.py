"""
AI Content Detector - FastAPI Backend
업로드된 이미지/비디오를 외부 분석 API로 전달하여 AI 생성 여부를 판정
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import routes
from app.core.config import Settings
from app.core.errors import register_exception_handlers
from app.models.schemas import HealthResponse
from app.services.analysis_service import AnalysisService

logger = logging.getLogger("app")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행되는 로직"""
    settings: Settings = app.state.settings
    # Startup
    logger.info("✅ Service initialized (Stateless), analysis API: %s", settings.api_url)
    if not settings.has_credentials:
        logger.warning("⚠️ SIGHTENGINE_API_USER / SIGHTENGINE_API_SECRET not set")
    yield
    # Shutdown
    logger.info("👋 Shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="AI Content Detector",
        description="""
        ## AI 생성 이미지/비디오 탐지

        업로드된 파일을 외부 콘텐츠 분석 API로 전달하고 결과를 정규화합니다.

        - **POST /api/detect**: multipart `file` 필드 (최대 10MB)
        - 응답: `{isAIGenerated, confidence, details, status}`

        *Stateless 서비스 - 파일은 디스크에 저장되지 않음*
        """,
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.analysis_service = AnalysisService(settings)

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(routes.router, prefix="/api", tags=["Detection"])

    @app.get("/", tags=["Health"])
    async def root():
        return {
            "message": "AI Content Detector API",
            "docs": "/docs",
            "health": "ok"
        }

    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check():
        return HealthResponse(status="healthy")

    return app


app = create_app()


def main():
    settings: Settings = app.state.settings
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
