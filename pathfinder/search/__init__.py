"""Aggregated job search across providers."""

from .aggregator import UnifiedJobSearch, deduplicate_jobs
from .models import ProviderResult, ProviderStatus

__all__ = ["UnifiedJobSearch", "deduplicate_jobs", "ProviderResult", "ProviderStatus"]
