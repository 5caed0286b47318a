"""End-to-end tests: configuration -> services -> search -> scoring -> storage."""

import pytest
from fastapi.testclient import TestClient

from pathfinder.api import create_app
from pathfinder.config import AppConfig, load_environment_config
from pathfinder.persistence import JobRepository, get_session
from pathfinder.services import build_services
from tests.helpers.fake_completion import FakeCompletionClient, FailingCompletionClient

SCORE_RESPONSE = {
    "matchScore": 70,
    "matchReason": "Node.js and PostgreSQL overlap",
    "recommendation": "Worth applying",
    "matchedSkills": ["Node.js"],
    "missingSkills": ["Kubernetes"],
}


@pytest.fixture
def services(tmp_path, monkeypatch):
    """Services built from defaults with no provider credentials."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'data' / 'pathfinder.db'}")

    built = build_services(AppConfig(), load_environment_config())
    built.scorer.client = FakeCompletionClient(response=SCORE_RESPONSE)
    yield built
    built.close()


def stored_keys():
    with get_session() as session:
        return [job.identity_key for job in JobRepository(session).list_recent()]


class TestMatchRunWithoutProviders:
    """With every provider unconfigured, runs are served from the mock catalog."""

    def test_backend_engineer_remote(self, services, skill_profile):
        matches = services.pipeline.find_matching_jobs(
            skill_profile, "Backend Engineer", location="Remote"
        )

        assert len(matches) == 1
        match = matches[0]
        assert match.job.title == "Backend Engineer"
        assert match.job.company == "CloudTech Lanka"
        assert match.job.source == "Mock"
        assert match.match_score == 70
        assert match.missing_skills == ["Kubernetes"]
        assert stored_keys() == ["backend engineer-cloudtech lanka"]

    def test_second_run_updates_instead_of_duplicating(self, services, skill_profile):
        services.pipeline.find_matching_jobs(skill_profile, "Backend Engineer", location="Remote")
        services.pipeline.find_matching_jobs(skill_profile, "Backend Engineer", location="Remote")

        assert stored_keys() == ["backend engineer-cloudtech lanka"]
        saved = services.job_store.list_recent()
        assert saved[0].skills == ["Node.js"]
        assert saved[0].created_at <= saved[0].updated_at

    def test_scoring_outage_keeps_neutral_matches(self, services, skill_profile):
        services.scorer.client = FailingCompletionClient()

        matches = services.pipeline.find_matching_jobs(skill_profile, "Developer")

        # Every catalog posting mentioning "developer" survives at the neutral score
        assert [match.match_score for match in matches] == [50, 50, 50]
        assert {match.recommendation for match in matches} == {"Review manually"}
        assert len(stored_keys()) == 3

    def test_low_scores_are_dropped(self, services, skill_profile):
        services.scorer.client = FakeCompletionClient(response={"matchScore": 20})

        assert services.pipeline.find_matching_jobs(skill_profile, "Backend Engineer") == []
        assert stored_keys() == []

    def test_no_candidates(self, services, skill_profile):
        assert services.pipeline.find_matching_jobs(skill_profile, "Astronaut") == []


class TestHTTPFlow:
    """The same flow driven through the HTTP API."""

    def test_match_then_saved(self, services):
        client = TestClient(create_app(services))

        match_response = client.post(
            "/api/jobs/match",
            json={
                "userSkills": {"topLanguages": {"TypeScript": 4}, "activityScore": 50},
                "targetRole": "Backend Engineer",
                "location": "Remote",
            },
        )
        saved_response = client.get("/api/jobs/saved")

        assert match_response.status_code == 200
        assert match_response.json()["matches"][0]["matchScore"] == 70
        saved = saved_response.json()["jobs"]
        assert [job["company"] for job in saved] == ["CloudTech Lanka"]
        assert saved[0]["skills"] == ["Node.js"]

    def test_search_returns_mock_catalog(self, services):
        client = TestClient(create_app(services))

        body = client.get("/api/jobs/search", params={"query": "React"}).json()

        assert body["count"] == 4
        assert {job["source"] for job in body["jobs"]} == {"Mock"}
