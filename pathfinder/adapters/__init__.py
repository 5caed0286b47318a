"""Job provider adapters.

Four adapters normalize their provider into ``pathfinder.domain.Job``:
- TheirStack: theirstack.TheirStackAdapter (bulk fetch, client-side filters)
- JSearch (RapidAPI): jsearch.JSearchAdapter
- Adzuna: adzuna.AdzunaAdapter
- Static fallback catalog: mock.MockAdapter

Build them from configuration with:
    from pathfinder.adapters.factory import build_provider_adapters
    adapters = build_provider_adapters(app_config, env_config)
"""

from .adzuna import AdzunaAdapter
from .base import BaseAdapter, HTTPAdapter
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .factory import (
    PROVIDER_ORDER,
    build_fallback_adapter,
    build_provider_adapters,
    get_adapter,
)
from .jsearch import JSearchAdapter
from .mock import MOCK_CATALOG, MOCK_SOURCE_LABEL, MockAdapter
from .theirstack import TheirStackAdapter

__all__ = [
    # Base classes and factory
    "BaseAdapter",
    "HTTPAdapter",
    "get_adapter",
    "build_provider_adapters",
    "build_fallback_adapter",
    "PROVIDER_ORDER",
    # Adapters
    "TheirStackAdapter",
    "JSearchAdapter",
    "AdzunaAdapter",
    "MockAdapter",
    "MOCK_CATALOG",
    "MOCK_SOURCE_LABEL",
    # Exceptions
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
]
