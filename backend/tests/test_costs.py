"""
Tests for token and cost estimates.
"""
import pytest

from core.config import settings
from domain.evaluation.costs import (
    calculate_embedding_cost,
    calculate_llm_cost,
    count_tokens,
    get_metric_unit,
)


class TestCountTokens:
    """Test count_tokens()."""

    def test_rounds_up_four_characters_per_token(self):
        assert count_tokens("abcd") == 1
        assert count_tokens("abcde") == 2

    def test_empty_text(self):
        assert count_tokens("") == 0
        assert count_tokens(None) == 0


class TestCosts:
    """Test embedding and LLM cost estimates."""

    def test_embedding_cost_per_model(self):
        assert calculate_embedding_cost(1000, settings.openai_embedding_small) == pytest.approx(0.00002)
        assert calculate_embedding_cost(1000, settings.openai_embedding_large) == pytest.approx(0.00013)
        assert calculate_embedding_cost(1000, settings.gemini_embedding_stable) == pytest.approx(0.00001)

    def test_unknown_embedding_model_uses_default_rate(self):
        assert calculate_embedding_cost(2000, "some-embedder") == pytest.approx(0.0002)

    def test_llm_cost_splits_input_and_output(self):
        assert calculate_llm_cost(1000, 1000, settings.openai_model) == pytest.approx(0.002)
        assert calculate_llm_cost(2000, 500, settings.gemini_pro_model) == pytest.approx(0.0025 + 0.005)

    def test_unknown_llm_uses_default_rates(self):
        assert calculate_llm_cost(1000, 0, "llama-3.3-70b") == pytest.approx(0.0004)


class TestMetricUnit:
    """Test get_metric_unit()."""

    @pytest.mark.parametrize("metric,unit", [
        ("embedding_time", "ms"),
        ("total_cost", "USD"),
        ("context_tokens", "tokens"),
        ("keyword_match_percentage", "%"),
        ("keywords_matched", ""),
    ])
    def test_units(self, metric, unit):
        assert get_metric_unit(metric) == unit
