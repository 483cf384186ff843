"""Summary helpers for codemap-core artifacts."""

from artifacts.summaries.builders import build_summary, compute_fan_stats

__all__ = ["build_summary", "compute_fan_stats"]
