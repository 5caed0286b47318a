"""Shared pytest fixtures."""

from datetime import datetime, timezone

import pytest

from pathfinder.domain.models import Job, SkillProfile
from pathfinder.logging.context import clear_log_context
from pathfinder.persistence import close_database, init_database

PATHFINDER_ENV_VARS = (
    "THEIRSTACK_API_KEY",
    "THEIRSTACK_API_URL",
    "RAPIDAPI_KEY",
    "RAPIDAPI_HOST",
    "ADZUNA_APP_ID",
    "ADZUNA_API_KEY",
    "ADZUNA_COUNTRY",
    "OPENAI_API_KEY",
    "DATABASE_URL",
    "LOG_LEVEL",
    "PORT",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Hide the developer's real credentials from every test."""
    for name in PATHFINDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def make_job():
    """Factory for Job instances with sensible defaults."""

    def _make_job(title="Backend Engineer", company="Acme Cloud", **overrides):
        fields = {
            "title": title,
            "company": company,
            "location": "Remote",
            "description": "Build and run backend services.",
            "requirements": "Python, PostgreSQL",
            "source": "TheirStack",
            "source_url": "https://jobs.example.com/1",
            "posted_date": datetime(2025, 10, 1, 9, 30, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Job(**fields)

    return _make_job


@pytest.fixture
def skill_profile():
    """A typical profile as produced by the GitHub analysis."""
    return SkillProfile.model_validate(
        {
            "topLanguages": {"TypeScript": 12, "Python": 7, "Go": 2},
            "topSkills": [
                {"skill": "Node.js", "level": "advanced", "percentage": 80},
                {"skill": "PostgreSQL", "level": "intermediate", "percentage": 55},
                {"skill": "Docker", "level": "intermediate", "percentage": 40},
            ],
            "activityScore": 72,
            "totalRepos": 21,
            "totalCommits": 1430,
        }
    )


@pytest.fixture
def memory_database():
    """Initialize a fresh in-memory database for one test."""
    init_database("sqlite:///:memory:")
    yield
    close_database()
