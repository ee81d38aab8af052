"""
Named benchmark configurations
"""

from typing import Dict, List, Optional

from domain.evaluation.types import BenchmarkConfig
from core.config import settings

# The combined strategy is benchmarked by its own context-size sweep
DEFAULT_STRATEGIES = ["vector-search", "hybrid-search"]

# Number of retrieved documents placed in the prompt
CONTEXT_SIZES: Dict[str, int] = {"small": 1, "medium": 5, "large": 10}

PRESET_DESCRIPTIONS: Dict[str, str] = {
    "all": "Run all combinations",
    "openai": "Run only OpenAI models",
    "gemini": "Run only Gemini models",
    "fastest": "Run configuration optimized for speed",
    "cheapest": "Run configuration optimized for cost",
    "hybrid": "Run hybrid search configuration",
    "combined": "Run combined search across small, medium and large context sizes",
}


def available_llm_models() -> List[str]:
    return [settings.openai_model, settings.gemini_flash_model, settings.gemini_pro_model]


def available_embedding_models() -> List[str]:
    return [
        settings.openai_embedding_small,
        settings.openai_embedding_large,
        settings.gemini_embedding_stable,
        settings.gemini_embedding_beta,
    ]


def _presets() -> Dict[str, BenchmarkConfig]:
    return {
        "all": BenchmarkConfig(
            search_strategies=DEFAULT_STRATEGIES,
            llm_models=available_llm_models(),
            embedding_models=available_embedding_models(),
            num_queries=10,
            top_k_values=[5],
            output_file="benchmark-all.json",
        ),
        "openai": BenchmarkConfig(
            search_strategies=DEFAULT_STRATEGIES,
            llm_models=[settings.openai_model],
            embedding_models=[settings.openai_embedding_small, settings.openai_embedding_large],
            num_queries=10,
            top_k_values=[5],
            output_file="benchmark-openai.json",
        ),
        "gemini": BenchmarkConfig(
            search_strategies=DEFAULT_STRATEGIES,
            llm_models=[settings.gemini_flash_model, settings.gemini_pro_model],
            embedding_models=[settings.gemini_embedding_stable, settings.gemini_embedding_beta],
            num_queries=10,
            top_k_values=[5],
            output_file="benchmark-gemini.json",
        ),
        "fastest": BenchmarkConfig(
            search_strategies=["vector-search"],
            llm_models=[settings.gemini_flash_model],
            embedding_models=[settings.openai_embedding_small],
            content_types=["xeto"],
            num_queries=5,
            top_k_values=[3],
            output_file="benchmark-fastest.json",
        ),
        "cheapest": BenchmarkConfig(
            search_strategies=["vector-search"],
            llm_models=[settings.gemini_flash_model],
            embedding_models=[settings.gemini_embedding_stable],
            content_types=["xeto"],
            num_queries=5,
            top_k_values=[3],
            output_file="benchmark-cheapest.json",
        ),
        "hybrid": BenchmarkConfig(
            search_strategies=["hybrid-search"],
            llm_models=[settings.openai_model],
            embedding_models=[settings.openai_embedding_large],
            content_types=["documentation"],
            num_queries=5,
            top_k_values=[3],
            output_file="benchmark-hybrid.json",
        ),
        "combined": BenchmarkConfig(
            search_strategies=["combined-search"],
            llm_models=available_llm_models(),
            embedding_models=[
                settings.openai_embedding_small,
                settings.openai_embedding_large,
                settings.gemini_embedding_stable,
            ],
            num_queries=1,
            top_k_values=list(CONTEXT_SIZES.values()),
            output_file="combined-benchmark.json",
        ),
    }


def get_preset_names() -> List[str]:
    return list(PRESET_DESCRIPTIONS.keys())


def get_preset(name: str) -> BenchmarkConfig:
    """
    Look up a preset by name. Returns a fresh config each call.

    Raises:
        KeyError: If the preset does not exist
    """
    presets = _presets()
    if name not in presets:
        raise KeyError(f"Unknown preset '{name}'. Available presets: {', '.join(get_preset_names())}")
    return presets[name]


def build_config(
    preset: Optional[str] = None,
    search_strategies: Optional[List[str]] = None,
    llm_models: Optional[List[str]] = None,
    embedding_models: Optional[List[str]] = None,
    content_types: Optional[List[str]] = None,
    num_queries: Optional[int] = None,
    top_k_values: Optional[List[int]] = None,
    output_file: Optional[str] = None
) -> BenchmarkConfig:
    """
    Benchmark configuration from a preset and/or explicit options.

    Explicit options override the preset. Without a preset, strategies default to
    DEFAULT_STRATEGIES (combined-search runs through its own preset), and unset
    model and content type lists to every available option.
    """
    if preset:
        base = get_preset(preset)
    else:
        base = BenchmarkConfig(
            search_strategies=DEFAULT_STRATEGIES,
            llm_models=available_llm_models(),
            embedding_models=available_embedding_models(),
        )

    overrides = {
        "search_strategies": search_strategies,
        "llm_models": llm_models,
        "embedding_models": embedding_models,
        "content_types": content_types,
        "num_queries": num_queries,
        "top_k_values": top_k_values,
        "output_file": output_file,
    }
    # Re-validate so overrides get the same checks as the constructor
    return BenchmarkConfig(**{
        **base.model_dump(),
        **{field: value for field, value in overrides.items() if value is not None},
    })
