"""Static price table, model catalog and fast-tier model mapping.

Prices are USD per million tokens.  A model missing from the table costs
nothing rather than raising, so new models can be used before the table
is updated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from transcript_analyzer.gateway.types import CostEntry, ModelInfo, Provider

logger = logging.getLogger(__name__)

_COST_PRECISION = 6
_PER_MILLION = 1_000_000


@dataclass(frozen=True)
class ModelPrice:
    """Per-million-token prices for one model."""

    input: float
    output: float


DEFAULT_PRICING: dict[str, ModelPrice] = {
    "claude-3-5-sonnet-20241022": ModelPrice(input=3.0, output=15.0),
    "claude-3-haiku-20240307": ModelPrice(input=0.25, output=1.25),
    "gpt-4-turbo-preview": ModelPrice(input=10.0, output=30.0),
    "gpt-4o-mini": ModelPrice(input=0.15, output=0.6),
    "gemini-1.5-pro": ModelPrice(input=1.25, output=5.0),
    "gemini-1.5-flash": ModelPrice(input=0.075, output=0.3),
}

MODEL_CATALOG: dict[str, tuple[ModelInfo, ...]] = {
    Provider.ANTHROPIC.value: (
        ModelInfo(id="claude-3-5-sonnet-20241022", name="Claude 3.5 Sonnet", tier="premium"),
        ModelInfo(id="claude-3-haiku-20240307", name="Claude 3 Haiku", tier="fast"),
    ),
    Provider.OPENAI.value: (
        ModelInfo(id="gpt-4-turbo-preview", name="GPT-4 Turbo", tier="premium"),
        ModelInfo(id="gpt-4o-mini", name="GPT-4o Mini", tier="fast"),
    ),
    Provider.GOOGLE.value: (
        ModelInfo(id="gemini-1.5-pro", name="Gemini 1.5 Pro", tier="premium"),
        ModelInfo(id="gemini-1.5-flash", name="Gemini 1.5 Flash", tier="fast"),
    ),
}

FAST_MODELS: dict[str, str] = {
    Provider.ANTHROPIC.value: "claude-3-haiku-20240307",
    Provider.OPENAI.value: "gpt-4o-mini",
    Provider.GOOGLE.value: "gemini-1.5-flash",
}


def fast_model_for(provider: str, fast_models: Mapping[str, str] | None = None) -> str:
    """Return the cheap/fast model for *provider*, defaulting to anthropic's."""
    table = FAST_MODELS if fast_models is None else fast_models
    return table.get(provider) or table[Provider.ANTHROPIC.value]


def available_models(provider: str) -> list[ModelInfo]:
    """Return the selectable models for *provider* (empty if unknown)."""
    return list(MODEL_CATALOG.get(provider, ()))


class PriceTable:
    """Looks up model prices and turns token usage into a CostEntry."""

    def __init__(self, prices: Mapping[str, ModelPrice] | None = None) -> None:
        self._prices = dict(DEFAULT_PRICING if prices is None else prices)

    def __contains__(self, model: str) -> bool:
        return model in self._prices

    def cost(self, model: str, input_tokens: int, output_tokens: int) -> CostEntry:
        """Compute the cost of one call; unknown models cost zero."""
        price = self._prices.get(model)
        if price is None:
            logger.debug("No price for model %s; recording zero cost", model)
            return CostEntry()

        input_cost = input_tokens / _PER_MILLION * price.input
        output_cost = output_tokens / _PER_MILLION * price.output
        return CostEntry(
            input_cost=round(input_cost, _COST_PRECISION),
            output_cost=round(output_cost, _COST_PRECISION),
            total_cost=round(input_cost + output_cost, _COST_PRECISION),
        )


def sum_costs(entries: Iterable[CostEntry]) -> float:
    """Sum ``total_cost`` over *entries*, rounded to 6 decimals."""
    return round(sum(entry.total_cost for entry in entries), _COST_PRECISION)
