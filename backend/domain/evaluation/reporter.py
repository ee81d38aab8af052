"""
Benchmark summary and report generation
"""

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from domain.evaluation.presets import CONTEXT_SIZES
from domain.evaluation.types import BenchmarkResult, BenchmarkRun
from core.config import settings

logger = logging.getLogger(__name__)

# Group key -> metrics averaged within each group
GROUPINGS: Dict[str, tuple] = {
    "by_strategy": ("search_strategy", ("search_time", "keyword_match_percentage")),
    "by_llm": ("llm_model", ("llm_response_time", "llm_cost", "keyword_match_percentage")),
    "by_embedding": ("embedding_model", ("search_time", "embedding_cost")),
    "by_content_type": ("content_type", ("total_time", "keyword_match_percentage")),
    "by_top_k": ("top_k", ("llm_response_time", "context_tokens", "llm_cost", "keyword_match_percentage")),
}


def _average(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _group(results: List[BenchmarkResult], field: str, metrics: tuple) -> Dict[str, Dict[str, float]]:
    groups: Dict[str, List[BenchmarkResult]] = defaultdict(list)
    for result in results:
        groups[str(getattr(result, field))].append(result)

    return {
        key: {
            "count": len(members),
            **{f"avg_{metric}": _average([getattr(r.metrics, metric) for r in members]) for metric in metrics},
        }
        for key, members in groups.items()
    }


def _best(results: List[BenchmarkResult], key: Callable[[BenchmarkResult], float], metric: str) -> Optional[Dict[str, Any]]:
    if not results:
        return None
    best = min(results, key=key)
    return {
        "combination": best.combination,
        "search_strategy": best.search_strategy,
        "llm_model": best.llm_model,
        "embedding_model": best.embedding_model,
        "content_type": best.content_type,
        "top_k": best.top_k,
        metric: getattr(best.metrics, metric),
    }


def summarize(results: List[BenchmarkResult]) -> Dict[str, Any]:
    """
    Aggregate successful results by strategy, LLM, embedding model, content type and top_k,
    and pick the fastest, cheapest and most accurate combination.

    Failed results are counted but excluded from every average and best pick.
    """
    successful = [r for r in results if r.success]
    summary: Dict[str, Any] = {
        "total": len(results),
        "successful": len(successful),
        "failed": len(results) - len(successful),
    }
    for name, (field, metrics) in GROUPINGS.items():
        summary[name] = _group(successful, field, metrics)

    summary["fastest"] = _best(successful, lambda r: r.metrics.total_time, "total_time")
    summary["cheapest"] = _best(successful, lambda r: r.metrics.total_cost, "total_cost")
    summary["most_accurate"] = _best(
        successful, lambda r: -r.metrics.keyword_match_percentage, "keyword_match_percentage"
    )
    return summary


def context_size_label(top_k: int) -> str:
    for name, size in CONTEXT_SIZES.items():
        if size == top_k:
            return f"{name} ({top_k})"
    return str(top_k)


class BenchmarkReporter:
    """Write benchmark runs to disk and render summaries"""

    def __init__(self, results_dir: Optional[Path] = None):
        self.results_dir = Path(results_dir or settings.results_dir)
        self.results_dir.mkdir(parents=True, exist_ok=True)

    def save_json(self, run: BenchmarkRun, filename: str) -> Path:
        """
        Save the run (config, results, summary) as JSON.

        Only the final path component of `filename` is used; reports are always
        written inside results_dir.

        Raises:
            ValueError: If `filename` has no usable file name
        """
        name = Path(filename).name
        if name in ("", ".", ".."):
            raise ValueError(f"Invalid report file name: {filename!r}")
        file_path = self.results_dir / name

        with open(file_path, "w") as f:
            json.dump(run.model_dump(mode="json"), f, indent=2)
        logger.info(f"Saved JSON report to {file_path}")
        return file_path

    def format_summary(self, summary: Dict[str, Any]) -> str:
        lines = ["", "=== Benchmark Summary ==="]
        lines.append(
            f"Results: {summary['successful']} successful, {summary['failed']} failed ({summary['total']} total)"
        )
        if not summary["successful"]:
            lines.append("No successful benchmark results to summarize")
            return "\n".join(lines)

        titles = {
            "by_strategy": "By Search Strategy",
            "by_llm": "By LLM Model",
            "by_embedding": "By Embedding Model",
            "by_content_type": "By Content Type",
            "by_top_k": "By Context Size",
        }
        for name, title in titles.items():
            lines.append(f"\n{title}:")
            for key, stats in summary[name].items():
                label = context_size_label(int(key)) if name == "by_top_k" else key
                lines.append(f"  {label}:")
                for stat, value in stats.items():
                    if stat == "count":
                        continue
                    lines.append(f"    {stat}: {self._format_value(stat, value)}")

        lines.append("\nBest Combinations:")
        for name, metric in (("fastest", "total_time"), ("cheapest", "total_cost"), ("most_accurate", "keyword_match_percentage")):
            best = summary[name]
            lines.append(f"  {name}: {best['combination']} (top_k={best['top_k']})")
            lines.append(f"    {metric}: {self._format_value(metric, best[metric])}")

        return "\n".join(lines)

    def print_console(self, summary: Dict[str, Any]):
        """Print summary to console"""
        print(self.format_summary(summary))

    @staticmethod
    def _format_value(stat: str, value: float) -> str:
        if "cost" in stat:
            return f"${value:.6f}"
        if "time" in stat:
            return f"{value:.2f}ms"
        if "percentage" in stat:
            return f"{value:.2f}%"
        return f"{value:.0f}"
