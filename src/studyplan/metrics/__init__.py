"""Plan metrics."""

from .collector import collect_metrics, summarize_plan

__all__ = ["collect_metrics", "summarize_plan"]
