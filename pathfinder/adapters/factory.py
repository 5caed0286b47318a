"""Factory functions for building provider adapters from configuration."""

from typing import Dict, List, Type

from pathfinder.config.environment import EnvironmentConfig
from pathfinder.config.models import AppConfig, ProviderName
from pathfinder.logging import get_logger

from .adzuna import AdzunaAdapter
from .base import BaseAdapter, HTTPAdapter
from .exceptions import AdapterConfigurationError
from .jsearch import JSearchAdapter
from .mock import MockAdapter
from .theirstack import TheirStackAdapter

logger = get_logger(__name__, component="adapter")

# Merge order of provider results
PROVIDER_ORDER = (ProviderName.THEIRSTACK, ProviderName.JSEARCH, ProviderName.ADZUNA)

ADAPTER_CLASSES: Dict[ProviderName, Type[HTTPAdapter]] = {
    ProviderName.THEIRSTACK: TheirStackAdapter,
    ProviderName.JSEARCH: JSearchAdapter,
    ProviderName.ADZUNA: AdzunaAdapter,
}


def get_adapter(
    provider: ProviderName, app_config: AppConfig, env_config: EnvironmentConfig
) -> HTTPAdapter:
    """Instantiate the adapter for one real provider.

    Credentials come from the environment; timeouts, user agent and caps come
    from ``app_config.advanced``. Missing credentials do not fail here: the
    adapter is built soft-disabled.

    Raises:
        AdapterConfigurationError: If the provider is unknown or settings are invalid
    """
    try:
        provider = ProviderName(provider)
    except ValueError:
        supported = ", ".join(p.value for p in PROVIDER_ORDER)
        raise AdapterConfigurationError(
            f"Unknown provider: {provider}. Supported providers: {supported}"
        ) from None

    advanced = app_config.advanced
    http_settings = {
        "timeout": advanced.http_request_timeout,
        "user_agent": advanced.user_agent,
        "max_jobs": advanced.max_jobs_per_provider,
    }

    if provider is ProviderName.THEIRSTACK:
        credentials = {
            "api_key": env_config.theirstack_api_key,
            "api_url": env_config.theirstack_api_url,
            "bulk_size": app_config.providers.theirstack_bulk_size,
        }
    elif provider is ProviderName.JSEARCH:
        credentials = {
            "api_key": env_config.rapidapi_key,
            "host": env_config.rapidapi_host,
        }
    else:
        credentials = {
            "app_id": env_config.adzuna_app_id,
            "api_key": env_config.adzuna_api_key,
            "country": env_config.adzuna_country,
        }

    adapter_class = ADAPTER_CLASSES[provider]
    try:
        adapter = adapter_class(**credentials, **http_settings)
    except AdapterConfigurationError:
        raise
    except Exception as e:
        raise AdapterConfigurationError(f"Failed to create {provider.value} adapter: {e}") from e

    logger.debug(
        "Created provider adapter",
        extra={
            "event": "adapter.created",
            "provider": provider.value,
            "adapter_class": adapter_class.__name__,
            "configured": adapter.is_configured,
        },
    )
    return adapter


def build_provider_adapters(
    app_config: AppConfig, env_config: EnvironmentConfig
) -> List[BaseAdapter]:
    """Build the adapters of every enabled provider, in merge order."""
    adapters: List[BaseAdapter] = []
    for provider in PROVIDER_ORDER:
        if not app_config.providers.is_enabled(provider):
            logger.info(
                f"Provider {provider.value} disabled in configuration",
                extra={"event": "adapter.disabled", "provider": provider.value},
            )
            continue

        adapter = get_adapter(provider, app_config, env_config)
        if not adapter.is_configured:
            logger.warning(
                f"No credentials for {provider.value}; provider will return no jobs",
                extra={"event": "adapter.unconfigured", "provider": provider.value},
            )
        adapters.append(adapter)

    return adapters


def build_fallback_adapter() -> MockAdapter:
    """Build the static fallback adapter."""
    return MockAdapter()
