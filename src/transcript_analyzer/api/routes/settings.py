"""API key validation and provider listing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from transcript_analyzer.analyzer import classify_error
from transcript_analyzer.analyzer.types import ErrorKind
from transcript_analyzer.api.routes import STATUS_BY_ERROR_KIND
from transcript_analyzer.errors import TranscriptAnalyzerError
from transcript_analyzer.gateway.pricing import fast_model_for
from transcript_analyzer.gateway.types import CompletionRequest, Message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["settings"])

PROVIDERS: list[dict[str, object]] = [
    {
        "id": "anthropic",
        "name": "Anthropic Claude",
        "requiresKey": True,
        "docsUrl": "https://console.anthropic.com/",
    },
    {
        "id": "openai",
        "name": "OpenAI GPT",
        "requiresKey": True,
        "docsUrl": "https://platform.openai.com/",
    },
    {
        "id": "google",
        "name": "Google Gemini",
        "requiresKey": True,
        "docsUrl": "https://ai.google.dev/",
    },
]

# Only a rejected key is reported as invalid; other failures say what went wrong
_VALIDATION_ERRORS: dict[ErrorKind, str] = {
    ErrorKind.AUTHENTICATION: "Invalid API key",
    ErrorKind.VALIDATION: "Invalid request",
    ErrorKind.CONFIGURATION: "Unknown provider",
    ErrorKind.PROVIDER: "Provider unavailable",
}


class ValidateKeyRequest(BaseModel):
    """Body of ``POST /validate-key``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    provider: str = ""
    api_key: str = Field(default="", repr=False)


@router.post("/validate-key")
def validate_key(body: ValidateKeyRequest, request: Request) -> JSONResponse:
    """Validate an API key with a minimal call to the provider's fast model."""
    if not body.provider or not body.api_key:
        return JSONResponse(
            status_code=400,
            content={"error": "Provider and API key are required"},
        )

    key_check = CompletionRequest(
        provider=body.provider,
        model=fast_model_for(body.provider),
        messages=[Message(role="user", content='Say "test successful"')],
        system_prompt="",
        temperature=0.5,
        max_tokens=10,
        api_key=body.api_key,
    )
    try:
        request.app.state.gateway.complete(key_check)
    except TranscriptAnalyzerError as e:
        kind = classify_error(e)
        logger.info(
            "API key validation failed for %s (%s): %s", body.provider, kind.value, e.message
        )
        return JSONResponse(
            status_code=STATUS_BY_ERROR_KIND[kind],
            content={"success": False, "error": _VALIDATION_ERRORS[kind], "message": e.message},
        )

    return JSONResponse(content={"success": True, "message": "API key is valid"})


@router.get("/providers")
def list_providers() -> dict[str, object]:
    """Return the supported providers."""
    return {"success": True, "providers": PROVIDERS}
