"""Domain models shared by the adapters, the match pipeline and the API.

Models serialize with camelCase aliases (``jobType``, ``sourceUrl``,
``matchScore`` ...) because that is the shape the web client consumes, and
accept either the alias or the Python field name on input.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from pathfinder.utils.identity import compute_identity_key
from pathfinder.utils.timestamps import ensure_utc, utc_now

FALLBACK_MATCH_SCORE = 50
FALLBACK_MATCH_REASON = "Basic match"
FALLBACK_RECOMMENDATION = "Review manually"


class CamelModel(BaseModel):
    """Base model using camelCase aliases on the wire."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_api(self) -> dict:
        """Serialize with aliases and JSON-safe values."""
        return self.model_dump(by_alias=True, mode="json")


class Job(CamelModel):
    """Provider-agnostic job posting.

    Every adapter converts its provider payload into this shape exactly once.
    Text fields never hold None; ``salary`` is the only optional field.
    """

    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    location: str = Field("", description="Free-text location; 'Remote' is valid")
    description: str = Field("", description="Job description text")
    requirements: str = Field("", description="Skills or category text, may be empty")
    salary: Optional[str] = Field(None, description="Free-text salary range")
    job_type: str = Field("full-time", description="Employment type as given by the provider")
    remote: bool = Field(False, description="Remote flag (explicit or heuristic)")
    source: str = Field(..., description="Provider label, e.g. 'Adzuna'")
    source_url: str = Field("", description="Canonical job URL or apply link")
    posted_date: datetime = Field(default_factory=utc_now, description="When the job was posted (UTC)")

    @field_validator("title", "company", mode="before")
    @classmethod
    def require_text(cls, v: Optional[str]) -> str:
        """Title and company feed the identity key and must be non-empty.

        Surrounding whitespace is stripped, so it never affects the key.
        """
        if v is None or not str(v).strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return str(v).strip()

    @field_validator("location", "description", "requirements", "source_url", "source", mode="before")
    @classmethod
    def default_text(cls, v: Optional[str]) -> str:
        """Missing text becomes an empty string, never None."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("job_type", mode="before")
    @classmethod
    def default_job_type(cls, v: Optional[str]) -> str:
        if v is None or not str(v).strip():
            return "full-time"
        return str(v).strip()

    @field_validator("salary", mode="before")
    @classmethod
    def blank_salary_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = str(v).strip()
        return stripped or None

    @field_validator("posted_date", mode="before")
    @classmethod
    def default_posted_date(cls, v):
        if v is None or v == "":
            return utc_now()
        return v

    @field_validator("posted_date")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Ensure datetime is timezone-aware and in UTC."""
        return ensure_utc(v)

    @property
    def identity_key(self) -> str:
        """Case-insensitive title+company key used for dedup and storage."""
        return compute_identity_key(self.title, self.company)


class SkillLevel(CamelModel):
    """One ranked skill from the user's profile."""

    skill: str
    level: str = ""
    percentage: float = 0.0

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}


class SkillProfile(CamelModel):
    """Skill profile derived from the user's GitHub activity.

    Produced by an external collaborator and treated as read-only input.
    """

    top_languages: Dict[str, int] = Field(
        default_factory=dict, description="Language name -> repository count"
    )
    top_skills: List[SkillLevel] = Field(default_factory=list, description="Ranked skills")
    activity_score: int = Field(0, ge=0, le=100, description="Aggregate activity score")
    total_repos: int = Field(0, ge=0)
    total_commits: int = Field(0, ge=0)

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}

    @property
    def language_names(self) -> List[str]:
        return list(self.top_languages.keys())

    @property
    def skill_names(self) -> List[str]:
        return [entry.skill for entry in self.top_skills]


class JobMatch(CamelModel):
    """A job scored against a skill profile and target role."""

    job: Job
    match_score: int = Field(..., ge=0, le=100)
    match_reason: str = ""
    recommendation: str = ""
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)

    @classmethod
    def fallback(cls, job: Job) -> "JobMatch":
        """Neutral match used whenever scoring fails."""
        return cls(
            job=job,
            match_score=FALLBACK_MATCH_SCORE,
            match_reason=FALLBACK_MATCH_REASON,
            recommendation=FALLBACK_RECOMMENDATION,
            matched_skills=[],
            missing_skills=[],
        )


class StoredJob(Job):
    """A job as persisted in the job store."""

    id: Optional[int] = Field(None, description="Database row id")
    skills: List[str] = Field(default_factory=list, description="Matched skills at write time")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_api(self) -> dict:
        data = super().to_api()
        data["identityKey"] = self.identity_key
        return data
