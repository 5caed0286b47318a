"""Adzuna adapter (classifieds-style search API)."""

from typing import List, Optional

from pydantic import BaseModel, field_validator

from pathfinder.domain.models import Job
from pathfinder.logging import get_logger
from pathfinder.utils.text import format_salary_range, location_mentions_remote
from pathfinder.utils.timestamps import parse_posted_date

from .base import HTTPAdapter

logger = get_logger(__name__, component="adapter")

# Adzuna has no Sri Lanka index; the UK index is the closest English market
COUNTRY_CODES = {
    "sri lanka": "gb",
    "srilanka": "gb",
    "india": "in",
    "united states": "us",
    "usa": "us",
    "uk": "gb",
    "united kingdom": "gb",
}

DEFAULT_RESULTS_PER_PAGE = 50


class AdzunaCompany(BaseModel):
    display_name: str


class AdzunaLocation(BaseModel):
    display_name: str = ""


class AdzunaCategory(BaseModel):
    label: Optional[str] = None


class AdzunaPosting(BaseModel):
    """One entry of the ``results`` array returned by the search endpoint."""

    id: Optional[int | str] = None
    title: str
    company: AdzunaCompany
    location: AdzunaLocation = AdzunaLocation()
    description: Optional[str] = None
    category: Optional[AdzunaCategory] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    contract_type: Optional[str] = None
    redirect_url: Optional[str] = None
    created: Optional[str] = None

    @field_validator("location", mode="before")
    @classmethod
    def null_location_is_blank(cls, v):
        return v or {}


def resolve_country_code(country: str) -> str:
    """Map a country name to an Adzuna index code; codes pass through."""
    normalized = (country or "us").strip().lower()
    return COUNTRY_CODES.get(normalized, normalized)


class AdzunaAdapter(HTTPAdapter):
    """Adapter for the Adzuna job search API.

    API Details:
        Endpoint: https://api.adzuna.com/v1/api/jobs/{country}/search/1
        Method: GET with app_id, app_key, what, where, results_per_page
        Authentication: app_id/app_key query parameters
        Response: JSON object with a ``results`` array
    """

    PROVIDER_NAME = "adzuna"
    SOURCE_LABEL = "Adzuna"
    API_BASE_URL = "https://api.adzuna.com/v1/api/jobs"

    def __init__(self, app_id: str, api_key: str, country: str = "us", **kwargs) -> None:
        super().__init__(**kwargs)
        self.app_id = app_id or ""
        self.api_key = api_key or ""
        self.country = resolve_country_code(country)

    @property
    def is_configured(self) -> bool:
        return bool(self.app_id and self.api_key)

    def _search(
        self,
        query: str,
        location: Optional[str],
        remote: Optional[bool],
        limit: Optional[int],
    ) -> List[Job]:
        url = f"{self.API_BASE_URL}/{self.country}/search/1"
        params = {
            "app_id": self.app_id,
            "app_key": self.api_key,
            "what": query,
            "where": location or "",
            "results_per_page": limit or DEFAULT_RESULTS_PER_PAGE,
        }

        logger.info(
            "Fetching jobs from Adzuna",
            extra={
                "event": "adapter.fetch.started",
                "provider": self.PROVIDER_NAME,
                "country": self.country,
                "what": query,
                "where": location or "",
            },
        )

        response = self._make_request(url, params=params)
        postings = self._extract_list(response, "results")
        jobs = self._convert_postings(postings, AdzunaPosting.model_validate, self._to_job)

        logger.info(
            "Fetched jobs from Adzuna",
            extra={
                "event": "adapter.fetch.completed",
                "provider": self.PROVIDER_NAME,
                "received": len(postings),
                "count": len(jobs),
            },
        )
        return jobs

    def _to_job(self, posting: AdzunaPosting) -> Job:
        location = posting.location.display_name
        return Job(
            title=posting.title,
            company=posting.company.display_name,
            location=location,
            description=self._clean_html(posting.description),
            requirements=posting.category.label if posting.category else "",
            salary=format_salary_range(posting.salary_min, posting.salary_max, prefix="$"),
            job_type=posting.contract_type,
            remote=location_mentions_remote(location),
            source=self.SOURCE_LABEL,
            source_url=posting.redirect_url,
            posted_date=parse_posted_date(posting.created),
        )
