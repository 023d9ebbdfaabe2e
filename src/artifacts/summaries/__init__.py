"""Summary builders for dependency reports."""

from artifacts.summaries.builders import compute_fan_stats, compute_metrics

__all__ = ["compute_fan_stats", "compute_metrics"]
