"""Match pipeline: search, score, filter, rank and persist."""

import contextvars
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional
from uuid import uuid4

from pathfinder.config.models import PipelineConfig
from pathfinder.domain.models import Job, JobMatch, SkillProfile
from pathfinder.logging import get_logger
from pathfinder.logging.context import log_context
from pathfinder.matching.scorer import MatchScorer, ScoreOutcome
from pathfinder.persistence.exceptions import PersistenceError
from pathfinder.persistence.store import JobStore
from pathfinder.search.aggregator import UnifiedJobSearch
from pathfinder.utils.timestamps import utc_now

from .exceptions import PipelineError
from .models import MatchRunStats

logger = get_logger(__name__, component="pipeline")


class MatchPipeline:
    """
    Finds and ranks jobs for a skill profile and target role.

    A run searches every provider for the target role, scores the first
    ``max_candidates`` jobs concurrently, keeps the ones scoring at least
    ``min_match_score``, sorts them best first, and stores the top
    ``persist_top`` in the job store.
    """

    def __init__(
        self,
        search: UnifiedJobSearch,
        scorer: MatchScorer,
        job_store: JobStore,
        config: Optional[PipelineConfig] = None,
    ):
        """
        Initialize the match pipeline.

        Args:
            search: Aggregator used to collect candidate jobs
            scorer: Scorer producing a JobMatch per candidate
            job_store: Store receiving the top matches
            config: Pipeline bounds and thresholds (defaults if omitted)
        """
        self.search = search
        self.scorer = scorer
        self.job_store = job_store
        self.config = config or PipelineConfig()

    def find_matching_jobs(
        self,
        profile: SkillProfile,
        target_role: str,
        location: Optional[str] = None,
        remote: Optional[bool] = None,
    ) -> List[JobMatch]:
        """
        Run the pipeline once.

        Scoring failures become neutral fallback matches and storage failures
        are logged; neither changes the returned list.

        Args:
            profile: The user's skill profile
            target_role: Role the user is looking for; used as search query
            location: Optional location filter
            remote: Optional remote filter

        Returns:
            Matches with score >= min_match_score, highest score first

        Raises:
            PipelineError: On any other failure
        """
        run_id = uuid4().hex
        stats = MatchRunStats(run_id=run_id, started_at=utc_now())
        started = time.monotonic()

        with log_context(run_id=run_id):
            logger.info(
                "Match run started",
                extra={
                    "event": "pipeline.run.started",
                    "target_role": target_role,
                    "location": location,
                    "remote": remote,
                },
            )

            try:
                matches = self._run(profile, target_role, location, remote, stats)
            except Exception as e:
                logger.error(
                    f"Match run failed: {e}",
                    exc_info=True,
                    extra={"event": "pipeline.run.failed", "error_type": type(e).__name__},
                )
                raise PipelineError(f"Failed to match jobs: {e}") from e

            stats.duration_seconds = time.monotonic() - started
            logger.info(
                "Match run completed",
                extra={
                    "event": "pipeline.run.completed",
                    "duration_ms": int(stats.duration_seconds * 1000),
                    "candidate_count": stats.candidate_count,
                    "scored_count": stats.scored_count,
                    "fallback_count": stats.fallback_count,
                    "kept_count": stats.kept_count,
                    "persisted_count": stats.persisted_count,
                    "persist_errors": stats.persist_errors,
                },
            )
            return matches

    def _run(
        self,
        profile: SkillProfile,
        target_role: str,
        location: Optional[str],
        remote: Optional[bool],
        stats: MatchRunStats,
    ) -> List[JobMatch]:
        candidates = self.search.search_jobs(
            target_role, location=location, remote=remote, limit=self.config.search_limit
        )
        stats.candidate_count = len(candidates)

        if not candidates:
            logger.info("No candidate jobs found", extra={"event": "pipeline.no_candidates"})
            return []

        to_score = candidates[: self.config.max_candidates]
        outcomes = self._score_all(to_score, profile, target_role)
        stats.scored_count = len(outcomes)
        stats.fallback_count = sum(1 for outcome in outcomes if outcome.fell_back)

        kept = [
            outcome.match
            for outcome in outcomes
            if outcome.match.match_score >= self.config.min_match_score
        ]
        # sorted() is stable, so equal scores keep candidate order
        ranked = sorted(kept, key=lambda match: match.match_score, reverse=True)
        stats.kept_count = len(ranked)

        logger.info(
            f"Found {len(ranked)} matches at or above {self.config.min_match_score}",
            extra={
                "event": "pipeline.matches.ranked",
                "kept_count": len(ranked),
                "dropped_count": len(outcomes) - len(ranked),
            },
        )

        self._persist_top_matches(ranked[: self.config.persist_top], stats)
        return ranked

    def _score_all(
        self, jobs: List[Job], profile: SkillProfile, target_role: str
    ) -> List[ScoreOutcome]:
        """Score ``jobs`` concurrently; outcomes are returned in job order."""
        workers = min(self.config.scoring_concurrency, len(jobs))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scorer") as executor:
            futures = [
                executor.submit(
                    contextvars.copy_context().run,
                    self.scorer.evaluate,
                    job,
                    profile,
                    target_role,
                )
                for job in jobs
            ]
            return [future.result() for future in futures]

    def _persist_top_matches(self, matches: List[JobMatch], stats: MatchRunStats) -> None:
        for match in matches:
            try:
                self.job_store.upsert(match.job, match.matched_skills)
                stats.persisted_count += 1
            except PersistenceError as e:
                stats.persist_errors += 1
                logger.error(
                    f"Failed to store job {match.job.identity_key}: {e}",
                    extra={
                        "event": "pipeline.persist.failed",
                        "job_key": match.job.identity_key,
                        "error_type": type(e).__name__,
                    },
                )
