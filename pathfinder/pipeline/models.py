"""Data models for match run tracking and reporting."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class MatchRunStats:
    """
    Statistics for a single match pipeline run.

    Attributes:
        run_id: Identifier carried by every log line of the run
        started_at: UTC timestamp when the run began
        candidate_count: Jobs returned by the unified search
        scored_count: Jobs sent to the scorer
        fallback_count: Scores that fell back to the neutral match
        kept_count: Matches at or above the minimum score
        persisted_count: Matches written to the job store
        persist_errors: Failed job store writes
        duration_seconds: Total time for the run
    """

    run_id: str
    started_at: datetime
    candidate_count: int = 0
    scored_count: int = 0
    fallback_count: int = 0
    kept_count: int = 0
    persisted_count: int = 0
    persist_errors: int = 0
    duration_seconds: float = 0.0
