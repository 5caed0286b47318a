"""Request and response bodies of the HTTP API."""

from typing import List, Optional

from pydantic import BaseModel, Field

from pathfinder.domain.models import CamelModel, SkillProfile


class MatchRequest(CamelModel):
    """Body of ``POST /api/jobs/match``.

    ``userSkills`` and ``targetRole`` are optional at the schema level so a
    missing field yields the API's own 400 message rather than a validation
    error list.
    """

    user_skills: Optional[SkillProfile] = None
    target_role: Optional[str] = None
    location: Optional[str] = None
    remote: Optional[bool] = None


class HealthResponse(BaseModel):
    status: str = "ok"


class MatchResponse(BaseModel):
    matches: List[dict] = Field(default_factory=list)


class SearchResponse(BaseModel):
    jobs: List[dict] = Field(default_factory=list)
    count: int = 0


class SavedJobsResponse(BaseModel):
    jobs: List[dict] = Field(default_factory=list)
