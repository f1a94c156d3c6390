"""FastAPI application factory."""

from __future__ import annotations

import datetime
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from transcript_analyzer.api.routes import settings as settings_routes
from transcript_analyzer.api.routes import workflow
from transcript_analyzer.config.settings import AnalyzerSettings, GatewaySettings
from transcript_analyzer.gateway.service import HttpCompletionGateway
from transcript_analyzer.gateway.types import CompletionGateway

logger = logging.getLogger(__name__)


def create_app(
    gateway: CompletionGateway | None = None,
    analyzer_settings: AnalyzerSettings | None = None,
) -> FastAPI:
    """Build the API.

    Args:
        gateway: Completion gateway shared by all requests.  When omitted an
            :class:`HttpCompletionGateway` is created at startup and closed
            at shutdown.
        analyzer_settings: Pipeline thresholds; loaded from config when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned: HttpCompletionGateway | None = None
        if gateway is None:
            owned = HttpCompletionGateway(GatewaySettings())
        app.state.gateway = gateway or owned
        app.state.analyzer_settings = analyzer_settings or AnalyzerSettings()
        logger.info("API started")
        try:
            yield
        finally:
            if owned is not None:
                owned.close()
            logger.info("API stopped")

    app = FastAPI(title="Transcript Analyzer", lifespan=lifespan)
    app.include_router(workflow.router, prefix="/api/workflow")
    app.include_router(settings_routes.router, prefix="/api/settings")

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "message": str(exc.errors())},
        )

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {
            "status": "ok",
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        }

    return app
