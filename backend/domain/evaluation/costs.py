"""
Token and cost estimates
"""

import math
from typing import Dict, Optional

from core.config import settings

DEFAULT_EMBEDDING_RATE = 0.0001
DEFAULT_LLM_INPUT_RATE = 0.0004
DEFAULT_LLM_OUTPUT_RATE = 0.0016

# USD per 1K tokens. Gemini embeddings are priced the same for both models.
EMBEDDING_RATES: Dict[str, float] = {
    settings.openai_embedding_small: 0.00002,
    settings.openai_embedding_large: 0.00013,
    settings.gemini_embedding_stable: 0.00001,
    settings.gemini_embedding_beta: 0.00001,
}

LLM_INPUT_RATES: Dict[str, float] = {
    settings.openai_model: 0.0004,
    settings.gemini_flash_model: 0.00015,
    settings.gemini_pro_model: 0.00125,
}

LLM_OUTPUT_RATES: Dict[str, float] = {
    settings.openai_model: 0.0016,
    settings.gemini_flash_model: 0.0006,
    settings.gemini_pro_model: 0.01,
}


def count_tokens(text: Optional[str]) -> int:
    """Rough token count: about four characters per token"""
    if not text:
        return 0
    return math.ceil(len(text) / 4)


def calculate_embedding_cost(tokens: int, model: str) -> float:
    rate = EMBEDDING_RATES.get(model, DEFAULT_EMBEDDING_RATE)
    return tokens / 1000 * rate


def calculate_llm_cost(input_tokens: int, output_tokens: int, model: str) -> float:
    input_rate = LLM_INPUT_RATES.get(model, DEFAULT_LLM_INPUT_RATE)
    output_rate = LLM_OUTPUT_RATES.get(model, DEFAULT_LLM_OUTPUT_RATE)
    return input_tokens / 1000 * input_rate + output_tokens / 1000 * output_rate


def get_metric_unit(metric_name: str) -> str:
    """Unit stored next to a metric value, derived from the metric name"""
    name = metric_name.lower()
    if "time" in name:
        return "ms"
    if "cost" in name:
        return "USD"
    if "tokens" in name:
        return "tokens"
    if "percentage" in name:
        return "%"
    return ""
