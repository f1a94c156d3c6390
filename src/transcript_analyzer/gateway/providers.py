"""Provider-specific request building and response decoding over httpx.

Each adapter sends one request and returns ``(content, input_tokens,
output_tokens)``.  Adapters call ``raise_for_status`` and index into the
decoded JSON directly; the gateway service maps the resulting httpx,
KeyError and IndexError failures onto the error taxonomy.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from transcript_analyzer.config.settings import GatewaySettings
from transcript_analyzer.gateway.types import CompletionRequest, Provider

logger = logging.getLogger(__name__)

ProviderAdapter = Callable[
    [httpx.Client, GatewaySettings, CompletionRequest], tuple[str, int, int]
]


def _post_json(
    client: httpx.Client, url: str, headers: dict[str, str], payload: dict[str, Any]
) -> dict[str, Any]:
    response = client.post(url, headers=headers, json=payload)
    response.raise_for_status()
    return response.json()


def call_anthropic(
    client: httpx.Client, settings: GatewaySettings, request: CompletionRequest
) -> tuple[str, int, int]:
    """Anthropic Messages API; the system prompt travels in ``system``."""
    payload: dict[str, Any] = {
        "model": request.model,
        "max_tokens": request.max_tokens,
        "temperature": request.temperature,
        "messages": [{"role": m.role, "content": m.content} for m in request.messages],
    }
    if request.system_prompt:
        payload["system"] = request.system_prompt

    body = _post_json(
        client,
        f"{settings.anthropic_base_url.rstrip('/')}/v1/messages",
        {
            "x-api-key": request.api_key,
            "anthropic-version": settings.anthropic_version,
        },
        payload,
    )
    content = "".join(
        block["text"] for block in body["content"] if block.get("type") == "text"
    )
    usage = body["usage"]
    return content, int(usage["input_tokens"]), int(usage["output_tokens"])


def call_openai(
    client: httpx.Client, settings: GatewaySettings, request: CompletionRequest
) -> tuple[str, int, int]:
    """OpenAI Chat Completions; the system prompt is prepended as a message."""
    messages = [{"role": m.role, "content": m.content} for m in request.messages]
    if request.system_prompt:
        messages.insert(0, {"role": "system", "content": request.system_prompt})

    body = _post_json(
        client,
        f"{settings.openai_base_url.rstrip('/')}/v1/chat/completions",
        {"Authorization": f"Bearer {request.api_key}"},
        {
            "model": request.model,
            "messages": messages,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        },
    )
    content = body["choices"][0]["message"]["content"] or ""
    usage = body["usage"]
    return content, int(usage["prompt_tokens"]), int(usage["completion_tokens"])


def _fold_google_prompt(request: CompletionRequest) -> str:
    # Gemini gets one user turn: system prompt first, then "role: content" lines
    if request.system_prompt:
        turns = "\n".join(f"{m.role}: {m.content}" for m in request.messages)
        return f"{request.system_prompt}\n\n{turns}"
    return "\n".join(m.content for m in request.messages)


def call_google(
    client: httpx.Client, settings: GatewaySettings, request: CompletionRequest
) -> tuple[str, int, int]:
    """Gemini generateContent."""
    body = _post_json(
        client,
        f"{settings.google_base_url.rstrip('/')}/v1beta/models/{request.model}:generateContent",
        {"x-goog-api-key": request.api_key},
        {
            "contents": [{"role": "user", "parts": [{"text": _fold_google_prompt(request)}]}],
            "generationConfig": {
                "temperature": request.temperature,
                "maxOutputTokens": request.max_tokens,
            },
        },
    )
    parts = body["candidates"][0]["content"]["parts"]
    content = "".join(part.get("text", "") for part in parts)
    usage = body.get("usageMetadata") or {}
    return (
        content,
        int(usage.get("promptTokenCount", 0)),
        int(usage.get("candidatesTokenCount", 0)),
    )


PROVIDER_ADAPTERS: dict[str, ProviderAdapter] = {
    Provider.ANTHROPIC.value: call_anthropic,
    Provider.OPENAI.value: call_openai,
    Provider.GOOGLE.value: call_google,
}
