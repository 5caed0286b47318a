"""Static fallback adapter.

Serves a small fixed catalog of synthetic postings so that a search always
has something to show when no real provider returns results. It makes no
network calls and is always configured.
"""

from typing import List, Optional, Sequence

from pathfinder.domain.models import Job
from pathfinder.utils.timestamps import utc_now

from .base import BaseAdapter

MOCK_SOURCE_LABEL = "Mock"

MOCK_CATALOG = (
    {
        "title": "Senior Full Stack Developer",
        "company": "TechCorp Sri Lanka",
        "location": "Colombo, Sri Lanka",
        "description": (
            "We are looking for an experienced Full Stack Developer to join our Colombo office. "
            "Work on cutting-edge web applications using modern technologies."
        ),
        "requirements": "Required: 5+ years JavaScript, React, Node.js, TypeScript, PostgreSQL. AWS/Docker preferred.",
        "salary": "LKR 200k - 300k",
        "remote": False,
        "source_url": "https://example.com/job/1",
    },
    {
        "title": "Web Developer",
        "company": "Digital Solutions Lanka",
        "location": "Kandy, Sri Lanka",
        "description": "Join our team to build modern web applications for international clients.",
        "requirements": "Required: HTML, CSS, JavaScript, React. 2+ years experience.",
        "salary": "LKR 120k - 180k",
        "remote": True,
        "source_url": "https://example.com/job/2",
    },
    {
        "title": "Frontend Developer",
        "company": "StartupLK",
        "location": "Colombo, Sri Lanka",
        "description": "Create beautiful, responsive web interfaces using React and modern CSS.",
        "requirements": "Required: React, TypeScript, Tailwind CSS. 3+ years experience.",
        "salary": "LKR 150k - 220k",
        "remote": False,
        "source_url": "https://example.com/job/3",
    },
    {
        "title": "Backend Engineer",
        "company": "CloudTech Lanka",
        "location": "Remote, Sri Lanka",
        "description": "Build scalable microservices and APIs for global clients.",
        "requirements": "Required: Node.js, Express, MongoDB, Redis. GraphQL, Kubernetes preferred.",
        "salary": "LKR 180k - 250k",
        "remote": True,
        "source_url": "https://example.com/job/4",
    },
    {
        "title": "Full Stack Engineer",
        "company": "FinTech Lanka",
        "location": "Colombo, Sri Lanka",
        "description": "Build financial applications using React, Node.js, and PostgreSQL.",
        "requirements": "Required: JavaScript, React, Node.js, SQL. Financial systems experience a plus.",
        "salary": "LKR 200k - 280k",
        "remote": False,
        "source_url": "https://example.com/job/5",
    },
)


class MockAdapter(BaseAdapter):
    """Fallback adapter over ``MOCK_CATALOG``.

    Filtering is keyword containment: a posting is kept when any search term
    is a case-insensitive substring of its title, description and
    requirements, and (if given) the location is a substring of its location.
    """

    PROVIDER_NAME = "mock"
    SOURCE_LABEL = MOCK_SOURCE_LABEL

    def __init__(self, catalog: Sequence[dict] = MOCK_CATALOG, max_jobs: int = 0) -> None:
        super().__init__(max_jobs=max_jobs)
        self.catalog = tuple(catalog)

    def _search(
        self,
        query: str,
        location: Optional[str],
        remote: Optional[bool],
        limit: Optional[int],
    ) -> List[Job]:
        return self.search_by_skills([query or ""], location)

    def search_by_skills(self, skills: Sequence[str], location: Optional[str] = None) -> List[Job]:
        """Return catalog jobs matching any of ``skills`` and ``location``."""
        posted = utc_now()
        jobs = [
            Job(job_type="full-time", source=self.SOURCE_LABEL, posted_date=posted, **entry)
            for entry in self.catalog
        ]

        if location:
            needle = location.lower()
            jobs = [job for job in jobs if needle in job.location.lower()]

        terms = [skill.lower() for skill in skills]
        if terms:
            jobs = [job for job in jobs if any(term in _search_text(job) for term in terms)]

        return jobs


def _search_text(job: Job) -> str:
    return f"{job.title} {job.description} {job.requirements}".lower()
