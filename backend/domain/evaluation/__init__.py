"""
Answer grading, cost estimation and benchmark reporting
"""

from domain.evaluation.grader import count_keyword_matches, keyword_match_percentage, NEGATION_PHRASES
from domain.evaluation.costs import count_tokens, calculate_embedding_cost, calculate_llm_cost, get_metric_unit
from domain.evaluation.types import BenchmarkConfig, BenchmarkMetrics, BenchmarkResult, BenchmarkRun
from domain.evaluation.presets import build_config, get_preset, get_preset_names, CONTEXT_SIZES
from domain.evaluation.reporter import BenchmarkReporter, summarize

__all__ = [
    "count_keyword_matches",
    "keyword_match_percentage",
    "NEGATION_PHRASES",
    "count_tokens",
    "calculate_embedding_cost",
    "calculate_llm_cost",
    "get_metric_unit",
    "BenchmarkConfig",
    "BenchmarkMetrics",
    "BenchmarkResult",
    "BenchmarkRun",
    "build_config",
    "get_preset",
    "get_preset_names",
    "CONTEXT_SIZES",
    "BenchmarkReporter",
    "summarize",
]
