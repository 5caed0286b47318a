"""Unified search across every configured job provider."""

import contextvars
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, List, Optional, Sequence

from pathfinder.adapters.base import BaseAdapter
from pathfinder.domain.models import Job
from pathfinder.logging import get_logger

from .models import ProviderResult, ProviderStatus

logger = get_logger(__name__, component="search")


def deduplicate_jobs(jobs: Iterable[Job]) -> List[Job]:
    """Drop jobs whose identity key was already seen, keeping first-seen order.

    The key is lowercase title plus lowercase company, so the same role posted
    at two different locations collapses into one.
    """
    seen = set()
    unique = []
    for job in jobs:
        key = job.identity_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(job)
    return unique


class UnifiedJobSearch:
    """
    Fans a query out to every provider adapter and merges the results.

    Providers are queried concurrently, one worker per adapter, and all of
    them are awaited before merging. Results are concatenated in adapter
    order regardless of which provider answered first. When no real provider
    returns anything the fallback adapter is used instead.
    """

    def __init__(
        self,
        adapters: Sequence[BaseAdapter],
        fallback_adapter: Optional[BaseAdapter] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            adapters: Real provider adapters, in merge order
            fallback_adapter: Adapter used when every real provider is empty
        """
        self.adapters = list(adapters)
        self.fallback_adapter = fallback_adapter

    def search_jobs(
        self,
        query: str,
        location: Optional[str] = None,
        remote: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> List[Job]:
        """
        Search all providers and return deduplicated jobs.

        This method never raises: provider failures are logged and count as
        zero results, and the worst case is an empty list.

        Args:
            query: Free-text query, usually a job title
            location: Optional location filter passed to every provider
            remote: Optional remote filter; None means "don't care"
            limit: Optional per-provider result cap

        Returns:
            Unique jobs in provider order
        """
        started = time.monotonic()
        logger.info(
            "Unified search started",
            extra={
                "event": "search.started",
                "query": query,
                "location": location,
                "remote": remote,
                "limit": limit,
                "provider_count": len(self.adapters),
            },
        )

        results = self._search_providers(query, location, remote, limit)

        combined: List[Job] = []
        for result in results:
            combined.extend(result.jobs)

        used_fallback = False
        if not combined and self.fallback_adapter is not None:
            combined = self._search_fallback(query, location, limit)
            used_fallback = True

        jobs = deduplicate_jobs(combined)

        logger.info(
            "Unified search completed",
            extra={
                "event": "search.completed",
                "total": len(combined),
                "unique": len(jobs),
                "used_fallback": used_fallback,
                "failed_providers": [r.provider for r in results if r.failed],
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return jobs

    def _search_providers(
        self,
        query: str,
        location: Optional[str],
        remote: Optional[bool],
        limit: Optional[int],
    ) -> List[ProviderResult]:
        """Run every adapter concurrently and return results in adapter order."""
        if not self.adapters:
            return []

        with ThreadPoolExecutor(
            max_workers=len(self.adapters), thread_name_prefix="provider"
        ) as executor:
            futures = [
                executor.submit(
                    contextvars.copy_context().run,
                    self._search_provider,
                    adapter,
                    query,
                    location,
                    remote,
                    limit,
                )
                for adapter in self.adapters
            ]
            wait(futures)

        return [future.result() for future in futures]

    def _search_provider(
        self,
        adapter: BaseAdapter,
        query: str,
        location: Optional[str],
        remote: Optional[bool],
        limit: Optional[int],
    ) -> ProviderResult:
        """Call one adapter and wrap the outcome. Never raises."""
        provider = adapter.PROVIDER_NAME
        if not adapter.is_configured:
            return ProviderResult(provider=provider, status=ProviderStatus.DISABLED)

        started = time.monotonic()
        try:
            jobs = adapter.search(query, location=location, remote=remote, limit=limit)
        except Exception as e:
            duration = time.monotonic() - started
            logger.warning(
                f"Provider {provider} failed: {e}",
                extra={
                    "event": "search.provider.failed",
                    "provider": provider,
                    "error_type": type(e).__name__,
                    "duration_ms": int(duration * 1000),
                },
            )
            return ProviderResult(
                provider=provider,
                status=ProviderStatus.FAILED,
                error=e,
                duration_seconds=duration,
            )

        duration = time.monotonic() - started
        logger.debug(
            f"Provider {provider} returned {len(jobs)} jobs",
            extra={
                "event": "search.provider.completed",
                "provider": provider,
                "count": len(jobs),
                "duration_ms": int(duration * 1000),
            },
        )
        return ProviderResult(
            provider=provider,
            status=ProviderStatus.SUCCESS,
            jobs=jobs,
            duration_seconds=duration,
        )

    def _search_fallback(
        self, query: str, location: Optional[str], limit: Optional[int]
    ) -> List[Job]:
        logger.info(
            "No results from providers, using fallback catalog",
            extra={"event": "search.fallback.used", "provider": self.fallback_adapter.PROVIDER_NAME},
        )
        try:
            return self.fallback_adapter.search(query, location=location, limit=limit)
        except Exception as e:
            logger.error(
                f"Fallback search failed: {e}",
                extra={"event": "search.fallback.failed", "error_type": type(e).__name__},
            )
            return []
