"""LLM-backed match scoring.

``MatchScorer`` asks a completion client to compare one job with a skill
profile and target role. It never raises: a failed call or an unusable
response yields the neutral fallback match.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import field_validator

from pathfinder.domain.models import (
    FALLBACK_MATCH_SCORE,
    CamelModel,
    Job,
    JobMatch,
    SkillProfile,
)
from pathfinder.logging import get_logger

from .completion import CompletionClient
from .prompt import SYSTEM_PROMPT, build_match_prompt

logger = get_logger(__name__, component="matching")


class ScoreResponse(CamelModel):
    """JSON object returned by the completion.

    Absent fields take neutral defaults; the score is clamped to 0..100.
    """

    match_score: float = FALLBACK_MATCH_SCORE
    match_reason: str = ""
    missing_skills: List[str] = []
    matched_skills: List[str] = []
    recommendation: str = ""

    model_config = {"extra": "ignore"}

    @field_validator("match_score", mode="before")
    @classmethod
    def null_score_is_default(cls, v: Any) -> Any:
        if v is None:
            return FALLBACK_MATCH_SCORE
        if isinstance(v, bool):
            raise ValueError("matchScore must be a number")
        return v

    @field_validator("match_score")
    @classmethod
    def clamp_score(cls, v: float) -> float:
        return min(max(v, 0.0), 100.0)

    @field_validator("match_reason", "recommendation", mode="before")
    @classmethod
    def null_text_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("missing_skills", "matched_skills", mode="before")
    @classmethod
    def normalize_skill_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v if item is not None]
        return v

    def to_match(self, job: Job) -> JobMatch:
        return JobMatch(
            job=job,
            match_score=int(round(self.match_score)),
            match_reason=self.match_reason,
            recommendation=self.recommendation,
            matched_skills=self.matched_skills,
            missing_skills=self.missing_skills,
        )


@dataclass
class ScoreOutcome:
    """
    Result of scoring one job.

    Attributes:
        match: The match to use (real or fallback)
        fell_back: Whether ``match`` is the neutral fallback
        error: What made scoring fall back, if it did
    """

    match: JobMatch
    fell_back: bool = False
    error: Optional[Exception] = None


class MatchScorer:
    """Scores jobs against a skill profile through a completion client."""

    def __init__(self, client: CompletionClient):
        self.client = client

    def evaluate(self, job: Job, profile: SkillProfile, target_role: str) -> ScoreOutcome:
        """Score ``job`` and report whether the fallback match was used."""
        prompt = build_match_prompt(job, profile, target_role)

        try:
            content = self.client.complete_json(SYSTEM_PROMPT, prompt)
            payload = json.loads(content)
            if not isinstance(payload, dict):
                raise ValueError(f"Expected JSON object, got {type(payload).__name__}")
            match = ScoreResponse.model_validate(payload).to_match(job)
        except Exception as e:
            logger.warning(
                f"Scoring failed for {job.title} at {job.company}, using fallback match",
                extra={
                    "event": "scoring.fallback",
                    "job_key": job.identity_key,
                    "error_type": type(e).__name__,
                },
            )
            return ScoreOutcome(match=JobMatch.fallback(job), fell_back=True, error=e)

        logger.debug(
            "Job scored",
            extra={
                "event": "scoring.completed",
                "job_key": job.identity_key,
                "match_score": match.match_score,
            },
        )
        return ScoreOutcome(match=match)

    def score(self, job: Job, profile: SkillProfile, target_role: str) -> JobMatch:
        """Score ``job``; returns the fallback match on any failure."""
        return self.evaluate(job, profile, target_role).match
