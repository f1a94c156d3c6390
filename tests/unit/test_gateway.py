"""Tests for HttpCompletionGateway against mocked provider endpoints."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from transcript_analyzer.config.settings import GatewaySettings
from transcript_analyzer.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderError,
    ValidationError,
)
from transcript_analyzer.gateway import (
    CompletionGateway,
    CompletionRequest,
    HttpCompletionGateway,
    Message,
)

Handler = Callable[[httpx.Request], httpx.Response]


def _settings(**overrides: object) -> GatewaySettings:
    values: dict[str, object] = {
        "anthropic_base_url": "https://anthropic.test",
        "openai_base_url": "https://openai.test",
        "google_base_url": "https://google.test",
        "max_attempts": 1,
        "backoff_min_seconds": 0,
        "backoff_max_seconds": 0,
    }
    values.update(overrides)
    return GatewaySettings(**values)


def _gateway(handler: Handler, **overrides: object) -> HttpCompletionGateway:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpCompletionGateway(_settings(**overrides), client=client)


def _request(provider: str = "anthropic", model: str = "claude-3-haiku-20240307") -> CompletionRequest:
    return CompletionRequest(
        provider=provider,
        model=model,
        messages=[Message(role="user", content="Summarize this.")],
        system_prompt="You are a paralegal.",
        temperature=0.5,
        max_tokens=500,
        api_key="sk-test",
    )


def _anthropic_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "content": [{"type": "text", "text": "Anthropic says hi."}],
            "usage": {"input_tokens": 1_000_000, "output_tokens": 200_000},
        },
    )


def test_satisfies_gateway_protocol() -> None:
    assert isinstance(_gateway(_anthropic_ok), CompletionGateway)


class TestAnthropic:
    def test_request_shape_and_normalized_response(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _anthropic_ok(request)

        response = _gateway(handler).complete(_request())

        sent = seen[0]
        body = json.loads(sent.content)
        assert sent.url == "https://anthropic.test/v1/messages"
        assert sent.headers["x-api-key"] == "sk-test"
        assert sent.headers["anthropic-version"] == "2023-06-01"
        assert body["system"] == "You are a paralegal."
        assert body["messages"] == [{"role": "user", "content": "Summarize this."}]
        assert body["max_tokens"] == 500

        assert response.content == "Anthropic says hi."
        assert response.usage.input_tokens == 1_000_000
        assert response.usage.total_tokens == 1_200_000
        # haiku: $0.25/M in, $1.25/M out
        assert response.cost.input_cost == pytest.approx(0.25)
        assert response.cost.output_cost == pytest.approx(0.25)
        assert response.cost.total_cost == pytest.approx(0.5)
        assert response.provider == "anthropic"
        assert response.model == "claude-3-haiku-20240307"
        assert response.latency_ms >= 0


class TestOpenAI:
    def test_system_prompt_prepended(self) -> None:
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["authorization"] == "Bearer sk-test"
            seen.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={
                    "choices": [{"message": {"role": "assistant", "content": "OpenAI reply."}}],
                    "usage": {"prompt_tokens": 12, "completion_tokens": 4},
                },
            )

        response = _gateway(handler).complete(_request("openai", "gpt-4o-mini"))

        assert seen[0]["messages"][0] == {"role": "system", "content": "You are a paralegal."}
        assert seen[0]["messages"][1]["role"] == "user"
        assert response.content == "OpenAI reply."
        assert (response.usage.input_tokens, response.usage.output_tokens) == (12, 4)


class TestGoogle:
    def test_prompt_folded_into_single_turn(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "candidates": [{"content": {"parts": [{"text": "Gemini "}, {"text": "reply."}]}}],
                    "usageMetadata": {"promptTokenCount": 30, "candidatesTokenCount": 6},
                },
            )

        response = _gateway(handler).complete(_request("google", "gemini-1.5-flash"))

        sent = seen[0]
        body = json.loads(sent.content)
        assert sent.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
        assert sent.headers["x-goog-api-key"] == "sk-test"
        assert body["contents"][0]["parts"][0]["text"] == (
            "You are a paralegal.\n\nuser: Summarize this."
        )
        assert body["generationConfig"] == {"temperature": 0.5, "maxOutputTokens": 500}
        assert response.content == "Gemini reply."
        assert response.usage.output_tokens == 6

    def test_invalid_key_400_is_authentication_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": {"message": "API key not valid.", "status": "INVALID_ARGUMENT"}},
            )

        with pytest.raises(AuthenticationError):
            _gateway(handler).complete(_request("google", "gemini-1.5-flash"))


class TestErrorMapping:
    def test_unknown_provider(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown provider: acme"):
            _gateway(_anthropic_ok).complete(_request("acme"))

    def test_missing_key(self) -> None:
        request = _request().model_copy(update={"api_key": ""})
        with pytest.raises(ValidationError):
            _gateway(_anthropic_ok).complete(request)

    @pytest.mark.parametrize("status", [401, 403])
    def test_rejected_key(self, status: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"error": {"message": "invalid x-api-key"}})

        with pytest.raises(AuthenticationError, match="invalid x-api-key"):
            _gateway(handler).complete(_request())

    @pytest.mark.parametrize("status", [400, 429, 500, 529])
    def test_upstream_failure(self, status: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"error": {"message": "upstream trouble"}})

        with pytest.raises(ProviderError, match=r"LLM API Error \(anthropic\)"):
            _gateway(handler).complete(_request())

    def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProviderError, match="connection refused"):
            _gateway(handler).complete(_request())

    def test_malformed_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        with pytest.raises(ProviderError, match="malformed response"):
            _gateway(handler).complete(_request())


class TestRetry:
    def test_single_attempt_by_default(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(503, text="overloaded")

        with pytest.raises(ProviderError):
            _gateway(handler).complete(_request())
        assert len(calls) == 1

    def test_transient_failure_retried_when_enabled(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) == 1:
                return httpx.Response(503, text="overloaded")
            return _anthropic_ok(request)

        response = _gateway(handler, max_attempts=3).complete(_request())
        assert response.content == "Anthropic says hi."
        assert len(calls) == 2

    def test_auth_failure_not_retried(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(401, json={"error": {"message": "bad key"}})

        with pytest.raises(AuthenticationError):
            _gateway(handler, max_attempts=3).complete(_request())
        assert len(calls) == 1
