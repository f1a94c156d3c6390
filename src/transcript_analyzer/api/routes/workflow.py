"""Legal transcript workflow and model catalog endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from transcript_analyzer.analyzer import HierarchicalAnalyzer, analyze_transcript
from transcript_analyzer.analyzer.types import ErrorKind, Strategy
from transcript_analyzer.api.routes import STATUS_BY_ERROR_KIND
from transcript_analyzer.gateway.pricing import available_models

logger = logging.getLogger(__name__)

router = APIRouter(tags=["workflow"])

class TranscriptRequest(BaseModel):
    """Body of ``POST /legal-transcript``.

    Fields default to empty so missing values get the workflow's own 400
    messages rather than a schema error.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str = ""
    provider: str = ""
    model: str = ""
    api_key: str = Field(default="", repr=False)
    strategy: str = Strategy.BALANCED.value


def _bad_request(error: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": error})


@router.post("/legal-transcript")
def process_legal_transcript(body: TranscriptRequest, request: Request) -> JSONResponse:
    """Analyze a transcript and return takeaways, summary, action items and cost."""
    if not body.text:
        return _bad_request("Transcript text is required")
    if not body.provider or not body.model:
        return _bad_request("Provider and model are required")
    if not body.api_key:
        return _bad_request("API key is required. Please configure it in Settings.")

    analyzer = HierarchicalAnalyzer(
        request.app.state.gateway, request.app.state.analyzer_settings
    )
    outcome = analyze_transcript(
        analyzer,
        text=body.text,
        provider=body.provider,
        model=body.model,
        api_key=body.api_key,
        strategy=body.strategy or Strategy.BALANCED.value,
    )

    if not outcome.success or outcome.result is None:
        kind = outcome.error_kind or ErrorKind.PROVIDER
        logger.error("Error processing legal transcript (%s): %s", kind.value, outcome.error)
        return JSONResponse(
            status_code=STATUS_BY_ERROR_KIND[kind],
            content={"error": "Failed to process transcript", "message": outcome.error},
        )

    return JSONResponse(
        content={
            "success": True,
            "results": outcome.result.model_dump(mode="json", by_alias=True),
        }
    )


@router.get("/models/{provider}")
def list_models(provider: str) -> dict[str, object]:
    """Return the selectable models for *provider* (empty for unknown providers)."""
    models = available_models(provider)
    return {
        "success": True,
        "models": [m.model_dump(by_alias=True) for m in models],
    }
