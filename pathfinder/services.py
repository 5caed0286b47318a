"""Process-wide service wiring.

``build_services`` constructs every collaborator once, at startup, from the
loaded configuration. The CLI and the FastAPI app both receive the resulting
``Services`` object instead of reaching for module-level singletons.
"""

from dataclasses import dataclass
from typing import Optional

from pathfinder.adapters.exceptions import AdapterConfigurationError
from pathfinder.adapters.factory import build_fallback_adapter, build_provider_adapters
from pathfinder.config.environment import EnvironmentConfig
from pathfinder.config.exceptions import ConfigurationError
from pathfinder.config.models import AppConfig
from pathfinder.logging import get_logger
from pathfinder.matching.completion import OpenAICompletionClient
from pathfinder.matching.exceptions import ScorerConfigurationError
from pathfinder.matching.scorer import MatchScorer
from pathfinder.persistence.database import close_database, init_database
from pathfinder.persistence.store import JobStore
from pathfinder.pipeline.runner import MatchPipeline
from pathfinder.search.aggregator import UnifiedJobSearch

logger = get_logger(__name__, component="services")


@dataclass
class Services:
    """
    Collaborators shared by the CLI and the HTTP API.

    Attributes:
        search: Unified job search over every enabled provider
        job_store: Persistent job store
        scorer: Match scorer (None when built without one)
        pipeline: Match pipeline (None when built without a scorer)
    """

    search: UnifiedJobSearch
    job_store: JobStore
    scorer: Optional[MatchScorer] = None
    pipeline: Optional[MatchPipeline] = None

    def close(self) -> None:
        """Release database connections."""
        close_database()


def build_services(
    app_config: AppConfig,
    env_config: EnvironmentConfig,
    require_scorer: bool = True,
) -> Services:
    """
    Build every service from configuration and initialize the database.

    Args:
        app_config: Application configuration
        env_config: Environment configuration (credentials, database URL)
        require_scorer: Fail when the scorer cannot be built. Commands that
            only search or list stored jobs pass False.

    Returns:
        Services ready for use

    Raises:
        ConfigurationError: If an adapter or the scorer is misconfigured
        DatabaseConnectionError: If the database cannot be initialized
    """
    try:
        adapters = build_provider_adapters(app_config, env_config)
    except AdapterConfigurationError as e:
        raise ConfigurationError(
            "Invalid provider configuration",
            errors=[str(e)],
            suggestions=["Check the 'advanced' section of your configuration file"],
        ) from e

    search = UnifiedJobSearch(adapters, fallback_adapter=build_fallback_adapter())

    scorer = None
    try:
        client = OpenAICompletionClient(
            api_key=env_config.openai_api_key,
            model=app_config.llm.model,
            temperature=app_config.llm.temperature,
            timeout_seconds=app_config.llm.timeout_seconds,
            max_retries=app_config.llm.max_retries,
        )
        scorer = MatchScorer(client)
    except ScorerConfigurationError as e:
        if require_scorer:
            raise ConfigurationError(
                "Match scorer is not configured",
                errors=[str(e)],
                suggestions=["Set OPENAI_API_KEY in your environment or .env file"],
            ) from e
        logger.warning(
            "Match scorer not configured; matching is unavailable",
            extra={"event": "services.scorer.unavailable"},
        )

    init_database(env_config.database_url)
    job_store = JobStore()

    pipeline = None
    if scorer is not None:
        pipeline = MatchPipeline(search, scorer, job_store, config=app_config.pipeline)

    logger.info(
        "Services built",
        extra={
            "event": "services.built",
            "providers": [adapter.PROVIDER_NAME for adapter in adapters],
            "configured_providers": [a.PROVIDER_NAME for a in adapters if a.is_configured],
            "scorer_available": scorer is not None,
        },
    )
    return Services(search=search, job_store=job_store, scorer=scorer, pipeline=pipeline)
