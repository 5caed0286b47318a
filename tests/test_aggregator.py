"""Tests for the unified search aggregator."""

import threading
import time

import pytest

from pathfinder.adapters.exceptions import AdapterHTTPError
from pathfinder.adapters.mock import MockAdapter
from pathfinder.logging.context import get_log_context, log_context
from pathfinder.search import ProviderStatus, UnifiedJobSearch, deduplicate_jobs
from tests.helpers.fixture_adapter import FailingAdapter, FixtureAdapter


def job_dict(title, company, **extra):
    return {"title": title, "company": company, **extra}


class SlowAdapter(FixtureAdapter):
    """Fixture adapter that sleeps before answering."""

    def __init__(self, provider, jobs, delay):
        super().__init__(provider, jobs=jobs)
        self.delay = delay

    def _search(self, query, location, remote, limit):
        time.sleep(self.delay)
        return super()._search(query, location, remote, limit)


class BarrierAdapter(FixtureAdapter):
    """Fixture adapter that only answers once every peer is running."""

    def __init__(self, provider, jobs, barrier):
        super().__init__(provider, jobs=jobs)
        self.barrier = barrier

    def _search(self, query, location, remote, limit):
        self.barrier.wait()
        return super()._search(query, location, remote, limit)


class ContextRecordingAdapter(FixtureAdapter):
    """Fixture adapter that captures the log context seen by its thread."""

    def _search(self, query, location, remote, limit):
        self.seen_context = get_log_context()
        return super()._search(query, location, remote, limit)


class TestDeduplicateJobs:
    """Tests for identity-key deduplication."""

    def test_case_insensitive_first_seen_wins(self, make_job):
        jobs = [
            make_job("Backend Engineer", "Acme Cloud", source="TheirStack"),
            make_job("BACKEND ENGINEER", "acme cloud", source="Adzuna"),
            make_job("Backend Engineer", "Globex"),
        ]

        unique = deduplicate_jobs(jobs)

        assert [job.company for job in unique] == ["Acme Cloud", "Globex"]
        assert unique[0].source == "TheirStack"

    def test_location_is_not_part_of_identity(self, make_job):
        jobs = [
            make_job(location="London, UK"),
            make_job(location="Austin, TX"),
        ]

        assert len(deduplicate_jobs(jobs)) == 1

    def test_empty(self):
        assert deduplicate_jobs([]) == []


class TestUnifiedJobSearch:
    """Tests for the fan-out, merge and fallback behaviour."""

    def test_merges_in_provider_order_and_dedups(self):
        search = UnifiedJobSearch(
            [FixtureAdapter("theirstack"), FixtureAdapter("jsearch"), FixtureAdapter("adzuna")]
        )

        jobs = search.search_jobs("backend engineer")

        assert [job.identity_key for job in jobs] == [
            "backend engineer-acme cloud",
            "platform engineer-acme cloud",
            "backend engineer-globex",
        ]
        assert jobs[0].source == "Fixture:theirstack"

    def test_order_does_not_depend_on_completion_order(self):
        slow = SlowAdapter("theirstack", [job_dict("Slow Job", "First Co")], delay=0.2)
        fast = SlowAdapter("jsearch", [job_dict("Fast Job", "Second Co")], delay=0.0)

        jobs = UnifiedJobSearch([slow, fast]).search_jobs("job")

        assert [job.title for job in jobs] == ["Slow Job", "Fast Job"]

    def test_providers_run_concurrently(self):
        barrier = threading.Barrier(3, timeout=5)
        adapters = [
            BarrierAdapter(name, [job_dict(f"{name} role", name)], barrier)
            for name in ("theirstack", "jsearch", "adzuna")
        ]

        jobs = UnifiedJobSearch(adapters).search_jobs("role")

        # Sequential calls would break the barrier and return nothing
        assert len(jobs) == 3

    def test_failed_provider_contributes_nothing(self):
        search = UnifiedJobSearch(
            [
                FailingAdapter("theirstack"),
                FixtureAdapter("jsearch"),
                FailingAdapter("adzuna", error=RuntimeError("unexpected")),
            ],
            fallback_adapter=MockAdapter(),
        )

        jobs = search.search_jobs("backend engineer")

        assert {job.company.lower() for job in jobs} == {"acme cloud", "globex"}
        assert all(job.source == "Fixture:jsearch" for job in jobs)

    def test_disabled_provider_is_not_called(self):
        disabled = FixtureAdapter("theirstack", configured=False)
        enabled = FixtureAdapter("jsearch")

        UnifiedJobSearch([disabled, enabled]).search_jobs("backend")

        assert disabled.calls == []
        assert len(enabled.calls) == 1

    def test_arguments_reach_every_provider(self):
        adapters = [FixtureAdapter("theirstack"), FixtureAdapter("adzuna")]

        UnifiedJobSearch(adapters).search_jobs("backend", location="Austin", remote=True, limit=5)

        for adapter in adapters:
            assert adapter.calls == [
                {"query": "backend", "location": "Austin", "remote": True, "limit": 5}
            ]

    def test_fallback_used_when_all_providers_fail(self):
        search = UnifiedJobSearch(
            [FailingAdapter("theirstack"), FailingAdapter("jsearch"), FailingAdapter("adzuna")],
            fallback_adapter=MockAdapter(),
        )

        jobs = search.search_jobs("Backend Engineer", location="Remote")

        assert [job.identity_key for job in jobs] == ["backend engineer-cloudtech lanka"]
        assert jobs[0].source == "Mock"

    def test_fallback_used_when_all_providers_empty(self):
        search = UnifiedJobSearch(
            [FixtureAdapter("theirstack", jobs=[]), FixtureAdapter("jsearch", configured=False)],
            fallback_adapter=MockAdapter(),
        )

        jobs = search.search_jobs("react")

        assert len(jobs) == 4
        assert all(job.source == "Mock" for job in jobs)

    def test_fallback_not_used_when_any_provider_has_results(self):
        fallback = FixtureAdapter("mock", jobs=[job_dict("Fallback", "Nobody")])
        search = UnifiedJobSearch(
            [FailingAdapter("theirstack"), FixtureAdapter("jsearch")],
            fallback_adapter=fallback,
        )

        search.search_jobs("backend engineer")

        assert fallback.calls == []

    def test_no_adapters_and_no_fallback(self):
        assert UnifiedJobSearch([]).search_jobs("anything") == []

    def test_failing_fallback_returns_empty(self):
        search = UnifiedJobSearch(
            [FailingAdapter("theirstack")], fallback_adapter=FailingAdapter("mock")
        )

        assert search.search_jobs("backend") == []

    def test_log_context_reaches_worker_threads(self):
        adapter = ContextRecordingAdapter("theirstack", jobs=[])

        with log_context(request_id="req-123"):
            UnifiedJobSearch([adapter]).search_jobs("backend")

        assert adapter.seen_context["request_id"] == "req-123"


class TestProviderResults:
    """Tests for the per-provider result objects."""

    def test_statuses(self):
        error = AdapterHTTPError("HTTP 503: Service Unavailable", status_code=503, url="https://x")
        search = UnifiedJobSearch(
            [
                FixtureAdapter("theirstack"),
                FailingAdapter("jsearch", error=error),
                FixtureAdapter("adzuna", configured=False),
            ]
        )

        results = search._search_providers("backend", None, None, None)

        assert [r.provider for r in results] == ["theirstack", "jsearch", "adzuna"]
        assert [r.status for r in results] == [
            ProviderStatus.SUCCESS,
            ProviderStatus.FAILED,
            ProviderStatus.DISABLED,
        ]
        assert results[0].job_count == 2
        assert results[1].failed is True
        assert results[1].error is error
        assert results[1].jobs == []
        assert results[2].jobs == []
