"""Pydantic v2 models for the completion gateway contract.

These models are the boundary between the analysis pipeline and the
text-generation providers.  They serialize with camelCase aliases
(``inputCost``, ``latencyMs``, ...) so API responses keep the wire format
clients expect, while Python code uses snake_case attribute names.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class Provider(str, Enum):
    """Supported text-generation providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Message(_CamelModel):
    """A single chat turn."""

    role: str
    content: str


class CompletionRequest(_CamelModel):
    """One generation request.

    ``provider`` is a plain string so an unrecognised value reaches the
    gateway and is rejected there with ConfigurationError.
    """

    provider: str
    model: str
    messages: list[Message]
    system_prompt: str = ""
    temperature: float = 0.7
    max_tokens: int = 4096
    api_key: str = Field(default="", repr=False)


class Usage(_CamelModel):
    """Token usage reported by the provider."""

    input_tokens: int = 0
    output_tokens: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class CostEntry(_CamelModel):
    """Monetary cost of one generation call, in USD, rounded to 6 decimals."""

    input_cost: float = Field(default=0.0, ge=0)
    output_cost: float = Field(default=0.0, ge=0)
    total_cost: float = Field(default=0.0, ge=0)


class CompletionResponse(_CamelModel):
    """Normalized result of one generation call."""

    content: str
    usage: Usage = Field(default_factory=Usage)
    cost: CostEntry = Field(default_factory=CostEntry)
    latency_ms: int = 0
    provider: str
    model: str


class ModelInfo(_CamelModel):
    """Catalog entry for a selectable model."""

    id: str
    name: str
    tier: str  # "premium" | "fast"


@runtime_checkable
class CompletionGateway(Protocol):
    """Executes a single generation request.

    Implementations raise AuthenticationError when the key is rejected,
    ProviderError for any other upstream failure, and ConfigurationError
    for an unrecognised provider.
    """

    def complete(self, request: CompletionRequest) -> CompletionResponse: ...
