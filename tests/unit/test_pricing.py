"""Tests for the price table, cost aggregation and model catalog."""

from __future__ import annotations

import pytest

from transcript_analyzer.gateway import (
    CostEntry,
    ModelPrice,
    PriceTable,
    available_models,
    fast_model_for,
    sum_costs,
)


class TestPriceTable:
    def test_cost_per_million_tokens(self) -> None:
        table = PriceTable({"test-model": ModelPrice(input=1.0, output=2.0)})
        cost = table.cost("test-model", input_tokens=1_000_000, output_tokens=500_000)
        assert cost == CostEntry(input_cost=1.0, output_cost=1.0, total_cost=2.0)

    def test_unknown_model_costs_nothing(self) -> None:
        cost = PriceTable().cost("model-from-the-future", 10_000, 10_000)
        assert cost == CostEntry(input_cost=0.0, output_cost=0.0, total_cost=0.0)

    def test_rounded_to_six_decimals(self) -> None:
        cost = PriceTable().cost("gpt-4o-mini", input_tokens=7, output_tokens=3)
        # 7 * 0.15e-6 = 1.05e-6, 3 * 0.6e-6 = 1.8e-6
        assert cost.input_cost == pytest.approx(0.000001)
        assert cost.output_cost == pytest.approx(0.000002)
        assert cost.total_cost == pytest.approx(0.000003)
        for value in (cost.input_cost, cost.output_cost, cost.total_cost):
            assert round(value, 6) == value

    def test_default_table_prices(self) -> None:
        cost = PriceTable().cost("claude-3-5-sonnet-20241022", 2_000_000, 1_000_000)
        assert cost.total_cost == pytest.approx(21.0)

    def test_membership(self) -> None:
        assert "gemini-1.5-flash" in PriceTable()
        assert "gemini-9" not in PriceTable()


class TestSumCosts:
    def test_sums_total_cost_with_rounding(self) -> None:
        entries = [
            CostEntry(input_cost=0.05, output_cost=0.05, total_cost=0.1),
            CostEntry(input_cost=0.1, output_cost=0.1, total_cost=0.2),
        ]
        assert sum_costs(entries) == 0.3

    def test_empty(self) -> None:
        assert sum_costs([]) == 0.0


class TestModelCatalog:
    @pytest.mark.parametrize(
        ("provider", "expected"),
        [
            ("anthropic", "claude-3-haiku-20240307"),
            ("openai", "gpt-4o-mini"),
            ("google", "gemini-1.5-flash"),
            ("acme", "claude-3-haiku-20240307"),
        ],
    )
    def test_fast_model_for(self, provider: str, expected: str) -> None:
        assert fast_model_for(provider) == expected

    def test_custom_fast_model_table(self) -> None:
        table = {"anthropic": "claude-fast", "openai": "gpt-fast"}
        assert fast_model_for("openai", table) == "gpt-fast"
        assert fast_model_for("google", table) == "claude-fast"

    def test_available_models(self) -> None:
        models = available_models("google")
        assert [(m.id, m.tier) for m in models] == [
            ("gemini-1.5-pro", "premium"),
            ("gemini-1.5-flash", "fast"),
        ]
        assert available_models("acme") == []

    def test_every_catalog_model_is_priced(self) -> None:
        table = PriceTable()
        for provider in ("anthropic", "openai", "google"):
            for model in available_models(provider):
                assert model.id in table
