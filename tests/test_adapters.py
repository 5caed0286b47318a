"""Unit tests for job provider adapters."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

from pathfinder.adapters import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
    AdzunaAdapter,
    JSearchAdapter,
    MockAdapter,
    TheirStackAdapter,
    build_provider_adapters,
    get_adapter,
)
from pathfinder.adapters.adzuna import resolve_country_code
from pathfinder.config.environment import EnvironmentConfig
from pathfinder.config.models import AdvancedConfig, AppConfig, ProviderName, ProvidersConfig

RESPONSES_DIR = Path(__file__).parent / "fixtures" / "provider_responses"


def load_response(name):
    with open(RESPONSES_DIR / name) as f:
        return json.load(f)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def theirstack_response():
    return load_response("theirstack_sample_response.json")


@pytest.fixture
def jsearch_response():
    return load_response("jsearch_sample_response.json")


@pytest.fixture
def adzuna_response():
    return load_response("adzuna_sample_response.json")


@pytest.fixture
def theirstack_adapter():
    return TheirStackAdapter(api_key="ts-key", api_url="https://api.theirstack.com/v1")


@pytest.fixture
def jsearch_adapter():
    return JSearchAdapter(api_key="rapid-key")


@pytest.fixture
def adzuna_adapter():
    return AdzunaAdapter(app_id="app-id", api_key="app-key", country="uk")


# ============================================================================
# Shared HTTP plumbing
# ============================================================================


class TestHTTPAdapter:
    """Tests for request handling shared by the real providers."""

    def test_timeout_out_of_range_rejected(self):
        with pytest.raises(AdapterConfigurationError, match="Timeout"):
            JSearchAdapter(api_key="k", timeout=2)

    def test_empty_user_agent_rejected(self):
        with pytest.raises(AdapterConfigurationError, match="user_agent"):
            JSearchAdapter(api_key="k", user_agent="   ")

    def test_user_agent_set_on_session(self):
        adapter = JSearchAdapter(api_key="k", user_agent="PathfinderTest/2.0")
        assert adapter._session.headers["User-Agent"] == "PathfinderTest/2.0"

    def test_timeout_maps_to_adapter_timeout_error(self, jsearch_adapter):
        with patch.object(
            jsearch_adapter._session, "request", side_effect=requests.exceptions.Timeout()
        ):
            with pytest.raises(AdapterTimeoutError) as exc_info:
                jsearch_adapter.search("backend")

        assert exc_info.value.url == "https://jsearch.p.rapidapi.com/search"

    def test_connection_error_maps_to_http_error(self, jsearch_adapter):
        with patch.object(
            jsearch_adapter._session,
            "request",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ):
            with pytest.raises(AdapterHTTPError) as exc_info:
                jsearch_adapter.search("backend")

        assert exc_info.value.status_code == 0

    @pytest.mark.parametrize("status_code", [401, 429, 503])
    def test_error_status_maps_to_http_error(self, jsearch_adapter, status_code):
        response = Mock(status_code=status_code, reason="Error")
        with patch.object(jsearch_adapter._session, "request", return_value=response):
            with pytest.raises(AdapterHTTPError) as exc_info:
                jsearch_adapter.search("backend")

        assert exc_info.value.status_code == status_code

    def test_invalid_json_maps_to_response_error(self, jsearch_adapter):
        response = Mock(status_code=200)
        response.json.side_effect = ValueError("Expecting value")
        with patch.object(jsearch_adapter._session, "request", return_value=response):
            with pytest.raises(AdapterResponseError):
                jsearch_adapter.search("backend")

    def test_non_object_body_is_response_error(self, jsearch_adapter):
        with patch.object(jsearch_adapter, "_make_request", return_value=["not", "an", "object"]):
            with pytest.raises(AdapterResponseError, match="JSON object"):
                jsearch_adapter.search("backend")

    def test_missing_data_field_is_empty_page(self, jsearch_adapter):
        with patch.object(jsearch_adapter, "_make_request", return_value={"status": "OK"}):
            assert jsearch_adapter.search("backend") == []

    def test_clean_html(self, adzuna_adapter):
        cleaned = adzuna_adapter._clean_html("<p>One &amp; two</p><p>Three<br/>Four</p>")
        assert cleaned == "One & two\n\nThree\nFour"
        assert adzuna_adapter._clean_html(None) == ""


# ============================================================================
# TheirStack
# ============================================================================


class TestTheirStackAdapter:
    """Tests for the bulk-fetch TheirStack adapter."""

    def test_unconfigured_adapter_makes_no_request(self):
        adapter = TheirStackAdapter(api_key="")
        assert adapter.is_configured is False

        with patch.object(adapter, "_make_request") as mock_request:
            assert adapter.search("backend engineer") == []

        mock_request.assert_not_called()

    def test_request_is_bulk_post_with_limit_only(self, theirstack_adapter, theirstack_response):
        with patch.object(
            theirstack_adapter, "_make_request", return_value=theirstack_response
        ) as mock_request:
            theirstack_adapter.search("backend engineer", location="berlin", remote=False)

        args, kwargs = mock_request.call_args
        assert args[0] == "https://api.theirstack.com/v1/jobs/search"
        assert kwargs["method"] == "POST"
        assert kwargs["json_data"] == {"limit": 200}
        assert kwargs["headers"]["Authorization"] == "Bearer ts-key"

    def test_title_filter_is_client_side(self, theirstack_adapter, theirstack_response):
        with patch.object(theirstack_adapter, "_make_request", return_value=theirstack_response):
            jobs = theirstack_adapter.search("backend engineer")

        assert [job.title for job in jobs] == ["Backend Engineer", "Senior Backend Engineer"]

    def test_field_mapping(self, theirstack_adapter, theirstack_response):
        with patch.object(theirstack_adapter, "_make_request", return_value=theirstack_response):
            first, second = theirstack_adapter.search("backend engineer")

        assert first.company == "Acme Cloud"
        assert first.location == "Remote"
        assert first.requirements == "python, postgresql, kubernetes"
        assert first.salary == "$140k - $170k"
        assert first.job_type == "full_time"
        assert first.remote is True
        assert first.source == "TheirStack"
        assert first.source_url == "https://jobs.acme.example/backend-engineer"
        assert first.posted_date == datetime(2025, 10, 1, 9, 30, tzinfo=timezone.utc)

        # Fallbacks: company object, long location, min/max salary, final URL
        assert second.company == "Northwind Data"
        assert second.location == "Berlin, Germany"
        assert second.salary == "90000 - 120000"
        assert second.job_type == "full-time"
        assert second.requirements == ""
        assert second.remote is False
        assert second.source_url == "https://northwind.example/careers/42"
        assert second.posted_date == datetime(2025, 9, 28, tzinfo=timezone.utc)

    def test_invalid_posting_is_skipped(self, theirstack_adapter, theirstack_response):
        with patch.object(theirstack_adapter, "_make_request", return_value=theirstack_response):
            jobs = theirstack_adapter.search("")

        # Four postings, one without a title
        assert len(jobs) == 3
        assert all(job.company != "Broken Posting Ltd" for job in jobs)

    def test_location_filter(self, theirstack_adapter, theirstack_response):
        with patch.object(theirstack_adapter, "_make_request", return_value=theirstack_response):
            jobs = theirstack_adapter.search("engineer", location="BERLIN")

        assert [job.company for job in jobs] == ["Northwind Data"]

    def test_location_filter_matches_country(self, theirstack_adapter):
        response = {
            "data": [
                {
                    "job_title": "Backend Engineer",
                    "company": "Spree Systems",
                    "location": "Berlin",
                    "country": "Germany",
                },
                {
                    "job_title": "Backend Engineer",
                    "company": "Thames Tech",
                    "location": "London",
                    "country": "United Kingdom",
                },
            ]
        }
        with patch.object(theirstack_adapter, "_make_request", return_value=response):
            jobs = theirstack_adapter.search("Backend", location="Germany")

        assert [job.company for job in jobs] == ["Spree Systems"]
        assert jobs[0].location == "Berlin"

    @pytest.mark.parametrize(
        "remote,expected",
        [(True, ["Acme Cloud"]), (False, ["Northwind Data"]), (None, ["Acme Cloud", "Northwind Data"])],
    )
    def test_remote_filter(self, theirstack_adapter, theirstack_response, remote, expected):
        with patch.object(theirstack_adapter, "_make_request", return_value=theirstack_response):
            jobs = theirstack_adapter.search("backend", remote=remote)

        assert [job.company for job in jobs] == expected

    def test_limit_caps_results(self, theirstack_adapter, theirstack_response):
        with patch.object(theirstack_adapter, "_make_request", return_value=theirstack_response):
            jobs = theirstack_adapter.search("", limit=1)

        assert len(jobs) == 1

    def test_empty_bulk_page(self, theirstack_adapter):
        with patch.object(theirstack_adapter, "_make_request", return_value={"data": []}):
            assert theirstack_adapter.search("backend") == []


# ============================================================================
# JSearch
# ============================================================================


class TestJSearchAdapter:
    """Tests for the RapidAPI JSearch adapter."""

    def test_unconfigured_adapter_makes_no_request(self):
        adapter = JSearchAdapter(api_key=None)
        with patch.object(adapter, "_make_request") as mock_request:
            assert adapter.search("backend") == []
        mock_request.assert_not_called()

    def test_request_parameters(self, jsearch_adapter, jsearch_response):
        with patch.object(
            jsearch_adapter, "_make_request", return_value=jsearch_response
        ) as mock_request:
            jsearch_adapter.search("Backend Engineer", location="Austin", remote=True)

        args, kwargs = mock_request.call_args
        assert args[0] == "https://jsearch.p.rapidapi.com/search"
        assert kwargs["params"] == {
            "query": "Backend Engineer",
            "page": 1,
            "num_pages": 1,
            "location": "Austin",
            "remote_jobs_only": "true",
        }
        assert kwargs["headers"]["X-RapidAPI-Key"] == "rapid-key"
        assert kwargs["headers"]["X-RapidAPI-Host"] == "jsearch.p.rapidapi.com"

    def test_optional_parameters_omitted(self, jsearch_adapter, jsearch_response):
        with patch.object(
            jsearch_adapter, "_make_request", return_value=jsearch_response
        ) as mock_request:
            jsearch_adapter.search("Backend Engineer")

        params = mock_request.call_args.kwargs["params"]
        assert "location" not in params
        assert "remote_jobs_only" not in params

    def test_field_mapping(self, jsearch_adapter, jsearch_response):
        with patch.object(jsearch_adapter, "_make_request", return_value=jsearch_response):
            jobs = jsearch_adapter.search("engineer")

        assert len(jobs) == 3
        first, second, third = jobs

        assert first.company == "Globex"
        assert first.location == "Austin"
        assert first.requirements == "Node.js, PostgreSQL"
        assert first.salary == "120000 - 150000 USD/year"
        assert first.job_type == "FULLTIME"
        assert first.remote is False
        assert first.source == "LinkedIn/Indeed"
        assert first.source_url == "https://globex.example/apply/1"
        assert first.posted_date == datetime(2025, 10, 3, 8, 0, tzinfo=timezone.utc)

        # No location at all falls back to "Remote"; missing fields default
        assert second.location == "Remote"
        assert second.remote is True
        assert second.requirements == ""
        assert second.salary is None
        assert second.job_type == "full-time"
        assert second.source_url == "https://www.google.com/search?q=initech"
        assert datetime.now(timezone.utc) - second.posted_date < timedelta(minutes=1)

        # Remote detected from the location text
        assert third.location == "Remote - EMEA"
        assert third.remote is True


# ============================================================================
# Adzuna
# ============================================================================


class TestAdzunaAdapter:
    """Tests for the Adzuna adapter."""

    @pytest.mark.parametrize(
        "country,code",
        [
            ("Sri Lanka", "gb"),
            ("india", "in"),
            ("United Kingdom", "gb"),
            ("UK", "gb"),
            ("usa", "us"),
            ("United States", "us"),
            ("de", "de"),
            ("", "us"),
        ],
    )
    def test_resolve_country_code(self, country, code):
        assert resolve_country_code(country) == code

    def test_requires_both_credentials(self):
        assert AdzunaAdapter(app_id="id", api_key="").is_configured is False
        assert AdzunaAdapter(app_id="", api_key="key").is_configured is False
        assert AdzunaAdapter(app_id="id", api_key="key").is_configured is True

    def test_request_parameters(self, adzuna_adapter, adzuna_response):
        with patch.object(
            adzuna_adapter, "_make_request", return_value=adzuna_response
        ) as mock_request:
            adzuna_adapter.search("backend", location="London", limit=10)

        args, kwargs = mock_request.call_args
        assert args[0] == "https://api.adzuna.com/v1/api/jobs/gb/search/1"
        assert kwargs["params"] == {
            "app_id": "app-id",
            "app_key": "app-key",
            "what": "backend",
            "where": "London",
            "results_per_page": 10,
        }

    def test_default_page_size(self, adzuna_adapter, adzuna_response):
        with patch.object(
            adzuna_adapter, "_make_request", return_value=adzuna_response
        ) as mock_request:
            adzuna_adapter.search("backend")

        params = mock_request.call_args.kwargs["params"]
        assert params["results_per_page"] == 50
        assert params["where"] == ""

    def test_field_mapping(self, adzuna_adapter, adzuna_response):
        with patch.object(adzuna_adapter, "_make_request", return_value=adzuna_response):
            jobs = adzuna_adapter.search("engineer")

        # The posting without a company is skipped
        assert [job.company for job in jobs] == ["Hooli", "Pied Piper", "Vandelay"]
        first, second, third = jobs

        assert first.location == "London, UK"
        assert first.description == "Work on distributed systems & APIs.\n\nPython preferred."
        assert first.requirements == "IT Jobs"
        assert first.salary == "$60000 - $75000"
        assert first.job_type == "permanent"
        assert first.remote is False
        assert first.source == "Adzuna"
        assert first.source_url == "https://www.adzuna.co.uk/jobs/land/ad/4512345678"

        # Remote is inferred from location only, never from the description
        assert second.location == ""
        assert second.remote is False
        assert second.requirements == ""
        assert second.salary is None

        assert third.remote is True
        assert third.salary == "$55000"


# ============================================================================
# Mock fallback
# ============================================================================


class TestMockAdapter:
    """Tests for the static fallback catalog."""

    def test_always_configured(self):
        assert MockAdapter().is_configured is True

    def test_skill_terms_match_any(self):
        jobs = MockAdapter().search_by_skills(["react"])

        assert [job.company for job in jobs] == [
            "TechCorp Sri Lanka",
            "Digital Solutions Lanka",
            "StartupLK",
            "FinTech Lanka",
        ]

    def test_location_filter(self):
        jobs = MockAdapter().search_by_skills(["node.js"], "colombo")

        assert [job.title for job in jobs] == ["Senior Full Stack Developer", "Full Stack Engineer"]

    def test_search_uses_whole_query_as_one_term(self):
        jobs = MockAdapter().search("Backend Engineer", location="Remote")

        assert len(jobs) == 1
        job = jobs[0]
        assert job.identity_key == "backend engineer-cloudtech lanka"
        assert job.location == "Remote, Sri Lanka"
        assert job.remote is True
        assert job.salary == "LKR 180k - 250k"
        assert job.source_url == "https://example.com/job/4"

    def test_catalog_defaults(self):
        jobs = MockAdapter().search_by_skills([""])

        assert len(jobs) == 5
        for job in jobs:
            assert job.source == "Mock"
            assert job.job_type == "full-time"
            assert datetime.now(timezone.utc) - job.posted_date < timedelta(minutes=1)

    def test_no_match(self):
        assert MockAdapter().search("COBOL mainframe wizard") == []


# ============================================================================
# Factory
# ============================================================================


class TestAdapterFactory:
    """Tests for building adapters from configuration."""

    def test_builds_enabled_providers_in_order(self):
        adapters = build_provider_adapters(AppConfig(), EnvironmentConfig())

        assert [a.PROVIDER_NAME for a in adapters] == ["theirstack", "jsearch", "adzuna"]
        assert not any(a.is_configured for a in adapters)

    def test_disabled_provider_is_left_out(self):
        app_config = AppConfig(providers=ProvidersConfig(jsearch_enabled=False))
        adapters = build_provider_adapters(app_config, EnvironmentConfig(rapidapi_key="k"))

        assert [a.PROVIDER_NAME for a in adapters] == ["theirstack", "adzuna"]

    def test_settings_flow_into_adapter(self):
        app_config = AppConfig(
            advanced=AdvancedConfig(http_request_timeout=45, user_agent="Agent/9", max_jobs_per_provider=25)
        )
        env_config = EnvironmentConfig(
            adzuna_app_id="id", adzuna_api_key="key", adzuna_country="india"
        )

        adapter = get_adapter(ProviderName.ADZUNA, app_config, env_config)

        assert isinstance(adapter, AdzunaAdapter)
        assert adapter.is_configured is True
        assert adapter.country == "in"
        assert adapter.timeout == 45
        assert adapter.user_agent == "Agent/9"
        assert adapter.max_jobs == 25

    def test_theirstack_bulk_size_from_config(self):
        app_config = AppConfig(providers=ProvidersConfig(theirstack_bulk_size=50))
        adapter = get_adapter("theirstack", app_config, EnvironmentConfig(theirstack_api_key="k"))

        assert adapter.bulk_size == 50

    def test_unknown_provider(self):
        with pytest.raises(AdapterConfigurationError, match="Unknown provider"):
            get_adapter("monster", AppConfig(), EnvironmentConfig())
