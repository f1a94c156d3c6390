"""Completion gateway -- provider-agnostic text generation with cost tracking.

Public API:
    CompletionGateway                 (Protocol consumed by the analyzer)
    HttpCompletionGateway(settings, pricing, client)
        .complete(request)            -> CompletionResponse
    PriceTable(prices).cost(model, input_tokens, output_tokens)
                                      -> CostEntry
    sum_costs(entries)                -> float
    available_models(provider)        -> list[ModelInfo]
    fast_model_for(provider)          -> str
"""

from transcript_analyzer.gateway.pricing import (
    DEFAULT_PRICING,
    FAST_MODELS,
    MODEL_CATALOG,
    ModelPrice,
    PriceTable,
    available_models,
    fast_model_for,
    sum_costs,
)
from transcript_analyzer.gateway.service import HttpCompletionGateway
from transcript_analyzer.gateway.types import (
    CompletionGateway,
    CompletionRequest,
    CompletionResponse,
    CostEntry,
    Message,
    ModelInfo,
    Provider,
    Usage,
)

__all__ = [
    "CompletionGateway",
    "CompletionRequest",
    "CompletionResponse",
    "CostEntry",
    "DEFAULT_PRICING",
    "FAST_MODELS",
    "HttpCompletionGateway",
    "MODEL_CATALOG",
    "Message",
    "ModelInfo",
    "ModelPrice",
    "PriceTable",
    "Provider",
    "Usage",
    "available_models",
    "fast_model_for",
    "sum_costs",
]
