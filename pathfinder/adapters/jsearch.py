"""JSearch adapter (RapidAPI keyword search over LinkedIn/Indeed listings)."""

from typing import List, Optional

from pydantic import BaseModel, field_validator

from pathfinder.domain.models import Job
from pathfinder.logging import get_logger
from pathfinder.utils.text import format_salary_range, location_mentions_remote
from pathfinder.utils.timestamps import parse_posted_date

from .base import HTTPAdapter

logger = get_logger(__name__, component="adapter")


class JSearchPosting(BaseModel):
    """One entry of the ``data`` array returned by ``GET /search``."""

    job_id: Optional[str] = None
    job_title: str
    employer_name: str
    job_city: Optional[str] = None
    job_state: Optional[str] = None
    job_country: Optional[str] = None
    job_description: Optional[str] = None
    job_required_skills: List[str] = []
    job_salary: Optional[str] = None
    job_min_salary: Optional[float] = None
    job_max_salary: Optional[float] = None
    job_salary_currency: Optional[str] = None
    job_salary_period: Optional[str] = None
    job_employment_type: Optional[str] = None
    job_is_remote: Optional[bool] = None
    job_apply_link: Optional[str] = None
    job_google_link: Optional[str] = None
    job_posted_at_datetime_utc: Optional[str] = None

    @field_validator("job_required_skills", mode="before")
    @classmethod
    def null_list_is_empty(cls, v):
        return v or []

    @property
    def location_text(self) -> str:
        return self.job_city or self.job_state or self.job_country or ""

    @property
    def salary_text(self) -> Optional[str]:
        if self.job_salary:
            return self.job_salary
        salary = format_salary_range(self.job_min_salary, self.job_max_salary)
        if salary is None:
            return None
        if self.job_salary_currency:
            salary = f"{salary} {self.job_salary_currency}"
        if self.job_salary_period:
            salary = f"{salary}/{self.job_salary_period.lower()}"
        return salary


class JSearchAdapter(HTTPAdapter):
    """Adapter for the JSearch API on RapidAPI.

    API Details:
        Endpoint: https://{host}/search
        Method: GET with query, page, num_pages, location, remote_jobs_only
        Authentication: X-RapidAPI-Key / X-RapidAPI-Host headers
        Response: JSON object with a ``data`` array
    """

    PROVIDER_NAME = "jsearch"
    SOURCE_LABEL = "LinkedIn/Indeed"

    def __init__(
        self,
        api_key: str,
        host: str = "jsearch.p.rapidapi.com",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key or ""
        self.host = host

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _search(
        self,
        query: str,
        location: Optional[str],
        remote: Optional[bool],
        limit: Optional[int],
    ) -> List[Job]:
        params = {"query": query, "page": 1, "num_pages": 1}
        if location:
            params["location"] = location
        if remote:
            params["remote_jobs_only"] = "true"

        url = f"https://{self.host}/search"
        response = self._make_request(
            url,
            params=params,
            headers={
                "X-RapidAPI-Key": self.api_key,
                "X-RapidAPI-Host": self.host,
            },
        )
        postings = self._extract_list(response, "data")
        jobs = self._convert_postings(postings, JSearchPosting.model_validate, self._to_job)

        logger.info(
            "Fetched jobs from JSearch",
            extra={
                "event": "adapter.fetch.completed",
                "provider": self.PROVIDER_NAME,
                "received": len(postings),
                "count": len(jobs),
            },
        )
        return jobs

    def _to_job(self, posting: JSearchPosting) -> Job:
        location = posting.location_text
        return Job(
            title=posting.job_title,
            company=posting.employer_name,
            location=location or "Remote",
            description=posting.job_description,
            requirements=", ".join(posting.job_required_skills),
            salary=posting.salary_text,
            job_type=posting.job_employment_type,
            remote=bool(posting.job_is_remote) or location_mentions_remote(location),
            source=self.SOURCE_LABEL,
            source_url=posting.job_apply_link or posting.job_google_link,
            posted_date=parse_posted_date(posting.job_posted_at_datetime_utc),
        )
