"""httpx-backed completion gateway with cost accounting and error mapping.

Dispatches a CompletionRequest to the provider adapter, measures latency,
prices the reported usage against the static price table, and translates
every failure into the error taxonomy:

- unknown provider                        -> ConfigurationError
- missing API key                         -> ValidationError
- HTTP 401/403, or Google invalid-key 400 -> AuthenticationError
- other HTTP status, transport failure,
  undecodable or malformed body           -> ProviderError

Transient failures (429, 5xx, transport errors) are retried by tenacity
up to ``GatewaySettings.max_attempts`` attempts.  The default of 1 means
no retry: a single failure ends the call.
"""

from __future__ import annotations

import json
import logging
import time

import httpx
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_random_exponential,
)

from transcript_analyzer.config.settings import GatewaySettings
from transcript_analyzer.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderError,
    ValidationError,
)
from transcript_analyzer.gateway.pricing import PriceTable
from transcript_analyzer.gateway.providers import PROVIDER_ADAPTERS, ProviderAdapter
from transcript_analyzer.gateway.types import CompletionRequest, CompletionResponse, Usage

logger = logging.getLogger(__name__)

_AUTH_STATUS_CODES = frozenset({401, 403})
_GOOGLE_INVALID_KEY_MARKERS = ("API_KEY_INVALID", "API key not valid")


def _is_transient(exc: BaseException) -> bool:
    """Return True for failures worth retrying: 429, 5xx and transport errors."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return isinstance(exc, httpx.TransportError)


def _is_auth_failure(provider: str, response: httpx.Response) -> bool:
    if response.status_code in _AUTH_STATUS_CODES:
        return True
    if provider == "google" and response.status_code == 400:
        return any(marker in response.text for marker in _GOOGLE_INVALID_KEY_MARKERS)
    return False


def _error_detail(response: httpx.Response) -> str:
    """Pull a human-readable message out of a provider error body."""
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        return response.text[:200] or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str):
        return error
    return response.text[:200]


class HttpCompletionGateway:
    """CompletionGateway implementation calling provider REST APIs directly.

    Args:
        settings: Endpoint, timeout and retry configuration.
        pricing: Price table used to cost each call.
        client: Optional pre-built httpx client (tests pass one backed by
            ``httpx.MockTransport``).  A client created here is closed by
            :meth:`close`.
    """

    def __init__(
        self,
        settings: GatewaySettings | None = None,
        pricing: PriceTable | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or GatewaySettings()
        self._pricing = pricing or PriceTable()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self._settings.timeout_seconds)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpCompletionGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _send(self, adapter: ProviderAdapter, request: CompletionRequest) -> tuple[str, int, int]:
        retrying = Retrying(
            stop=stop_after_attempt(max(1, self._settings.max_attempts)),
            wait=wait_random_exponential(
                multiplier=1,
                min=self._settings.backoff_min_seconds,
                max=self._settings.backoff_max_seconds,
            ),
            retry=retry_if_exception(_is_transient),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(adapter, self._client, self._settings, request)

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Execute one generation request and return normalized content, usage and cost."""
        provider = request.provider
        adapter = PROVIDER_ADAPTERS.get(provider)
        if adapter is None:
            raise ConfigurationError(f"Unknown provider: {provider}")
        if not request.api_key:
            raise ValidationError(f"API key not provided for {provider}")

        logger.debug(
            "Calling %s model=%s max_tokens=%d", provider, request.model, request.max_tokens
        )
        start = time.monotonic()
        try:
            content, input_tokens, output_tokens = self._send(adapter, request)
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            if _is_auth_failure(provider, e.response):
                logger.warning("%s rejected the API key (HTTP %d)", provider, e.response.status_code)
                raise AuthenticationError(
                    f"LLM API Error ({provider}): authentication failed: {detail}"
                ) from e
            logger.error("%s returned HTTP %d: %s", provider, e.response.status_code, detail)
            raise ProviderError(
                f"LLM API Error ({provider}): HTTP {e.response.status_code}: {detail}"
            ) from e
        except httpx.TransportError as e:
            logger.error("%s transport failure: %s", provider, e)
            raise ProviderError(f"LLM API Error ({provider}): {e}") from e
        except (
            json.JSONDecodeError,
            AttributeError,
            IndexError,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            logger.error("%s returned a malformed response: %r", provider, e)
            raise ProviderError(f"LLM API Error ({provider}): malformed response") from e
        latency_ms = int(round((time.monotonic() - start) * 1000))

        cost = self._pricing.cost(request.model, input_tokens, output_tokens)
        logger.info(
            "%s/%s completed in %dms (tokens=%d/%d, cost=$%.6f)",
            provider,
            request.model,
            latency_ms,
            input_tokens,
            output_tokens,
            cost.total_cost,
        )
        return CompletionResponse(
            content=content,
            usage=Usage(input_tokens=input_tokens, output_tokens=output_tokens),
            cost=cost,
            latency_ms=latency_ms,
            provider=provider,
            model=request.model,
        )
