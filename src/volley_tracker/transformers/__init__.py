"""Pure transformers turning recorded shots into statistics."""

from .aggregation import (
    aggregate_team,
    detailed_summarize,
    merge_summaries,
    player_summary,
    success_rate,
    summarize,
    top_results,
)

__all__ = [
    "aggregate_team",
    "detailed_summarize",
    "merge_summaries",
    "player_summary",
    "success_rate",
    "summarize",
    "top_results",
]
