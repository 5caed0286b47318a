"""TheirStack adapter.

TheirStack's job search endpoint is used as a bulk feed: the request carries
only a page size, and title/location/remote filtering happens client-side
after the page is fetched.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator

from pathfinder.domain.models import Job
from pathfinder.logging import get_logger
from pathfinder.utils.text import format_salary_range, location_mentions_remote
from pathfinder.utils.timestamps import parse_posted_date

from .base import HTTPAdapter

logger = get_logger(__name__, component="adapter")

LOCATION_FIELDS = ("location", "long_location", "country")


class TheirStackCompany(BaseModel):
    name: Optional[str] = None


class TheirStackPosting(BaseModel):
    """One entry of the ``data`` array returned by ``POST /jobs/search``."""

    id: Optional[int | str] = None
    job_title: str
    company: Optional[str] = None
    company_object: Optional[TheirStackCompany] = None
    location: Optional[str] = None
    long_location: Optional[str] = None
    country: Optional[str] = None
    remote: Optional[bool] = None
    description: Optional[str] = None
    url: Optional[str] = None
    final_url: Optional[str] = None
    source_url: Optional[str] = None
    date_posted: Optional[str] = None
    salary_string: Optional[str] = None
    min_annual_salary: Optional[float] = None
    max_annual_salary: Optional[float] = None
    employment_statuses: List[str] = []
    technology_slugs: List[str] = []

    @field_validator("employment_statuses", "technology_slugs", mode="before")
    @classmethod
    def null_list_is_empty(cls, v):
        return v or []

    @property
    def company_name(self) -> Optional[str]:
        if self.company:
            return self.company
        if self.company_object:
            return self.company_object.name
        return None

    @property
    def location_text(self) -> str:
        return self.location or self.long_location or self.country or ""


class TheirStackAdapter(HTTPAdapter):
    """Adapter for the TheirStack jobs API.

    API Details:
        Endpoint: {api_url}/jobs/search
        Method: POST, body ``{"limit": N}``
        Authentication: ``Authorization: Bearer <key>``
        Response: JSON object with a ``data`` array
    """

    PROVIDER_NAME = "theirstack"
    SOURCE_LABEL = "TheirStack"

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.theirstack.com/v1",
        bulk_size: int = 200,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key or ""
        self.api_url = api_url.rstrip("/")
        self.bulk_size = bulk_size

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def fetch_bulk(self, limit: Optional[int] = None, location: Optional[str] = None) -> List[Job]:
        """Fetch one page of jobs.

        With ``location`` set, only postings whose location, long location or
        country mentions it are converted.
        """
        url = f"{self.api_url}/jobs/search"
        response = self._make_request(
            url,
            method="POST",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json_data={"limit": limit or self.bulk_size},
        )
        postings = self._extract_list(response, "data")
        received = len(postings)
        if location:
            postings = filter_by_location(postings, location)
        jobs = self._convert_postings(postings, TheirStackPosting.model_validate, self._to_job)

        logger.info(
            "Fetched bulk page from TheirStack",
            extra={
                "event": "adapter.fetch.completed",
                "provider": self.PROVIDER_NAME,
                "received": received,
                "count": len(jobs),
            },
        )
        return jobs

    def _search(
        self,
        query: str,
        location: Optional[str],
        remote: Optional[bool],
        limit: Optional[int],
    ) -> List[Job]:
        jobs = self.fetch_bulk(location=location)
        if not jobs:
            return []

        jobs = filter_by_title(jobs, query)
        if remote is not None:
            jobs = [job for job in jobs if job.remote == remote]

        return jobs

    def _to_job(self, posting: TheirStackPosting) -> Job:
        location = posting.location_text
        return Job(
            title=posting.job_title,
            company=posting.company_name,
            location=location,
            description=posting.description,
            requirements=", ".join(posting.technology_slugs),
            salary=posting.salary_string
            or format_salary_range(posting.min_annual_salary, posting.max_annual_salary),
            job_type=posting.employment_statuses[0] if posting.employment_statuses else None,
            remote=bool(posting.remote) or location_mentions_remote(location),
            source=self.SOURCE_LABEL,
            source_url=posting.url or posting.final_url or posting.source_url,
            posted_date=parse_posted_date(posting.date_posted),
        )


def filter_by_title(jobs: List[Job], title: str) -> List[Job]:
    """Keep jobs whose title contains ``title`` (case-insensitive)."""
    needle = (title or "").lower()
    return [job for job in jobs if needle in job.title.lower()]


def filter_by_location(postings: List[Dict[str, Any]], location: str) -> List[Dict[str, Any]]:
    """Keep raw postings whose location, long location or country contains ``location``.

    Matching is case-insensitive. Runs before conversion because a ``Job`` only
    keeps the first non-empty of the three fields.
    """
    needle = location.lower()
    return [
        posting
        for posting in postings
        if any(needle in str(posting.get(field) or "").lower() for field in LOCATION_FIELDS)
    ]
