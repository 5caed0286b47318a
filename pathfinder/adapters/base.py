"""Base adapter classes shared by every job provider.

``BaseAdapter`` defines the search contract and the soft-disable behaviour;
``HTTPAdapter`` adds the requests-based plumbing used by the real providers.
"""

import html
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import requests
from pydantic import ValidationError

from pathfinder.domain.models import Job
from pathfinder.logging import get_logger

from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")

T = TypeVar("T")


class BaseAdapter(ABC):
    """Base class for all job provider adapters.

    Subclasses implement ``_search``; callers use ``search``, which applies
    the soft-disable rule and the result caps.

    Attributes:
        PROVIDER_NAME: Stable provider identifier used in logs
        SOURCE_LABEL: Value written to ``Job.source``
        max_jobs: Maximum jobs returned per call (0 = unlimited)
    """

    PROVIDER_NAME = "base"
    SOURCE_LABEL = "unknown"

    def __init__(self, max_jobs: int = 200) -> None:
        if max_jobs < 0:
            raise AdapterConfigurationError(f"max_jobs cannot be negative, got: {max_jobs}")
        self.max_jobs = max_jobs

    @property
    def is_configured(self) -> bool:
        """Whether the adapter has the credentials it needs."""
        return True

    def search(
        self,
        query: str,
        location: Optional[str] = None,
        remote: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> List[Job]:
        """Search the provider and return normalized jobs.

        An adapter without credentials returns an empty list without making
        any request. Upstream failures raise ``AdapterError``.

        Args:
            query: Free-text query (job title or keywords)
            location: Optional location filter
            remote: Optional remote filter; None means "don't care"
            limit: Optional maximum number of jobs to return

        Returns:
            List of Job models

        Raises:
            AdapterError: On HTTP errors, timeouts, or malformed responses
        """
        if not self.is_configured:
            logger.debug(
                "Provider not configured, skipping",
                extra={"event": "adapter.search.disabled", "provider": self.PROVIDER_NAME},
            )
            return []

        jobs = self._search(query, location=location, remote=remote, limit=limit)
        return self._truncate_jobs(jobs, limit)

    @abstractmethod
    def _search(
        self,
        query: str,
        location: Optional[str],
        remote: Optional[bool],
        limit: Optional[int],
    ) -> List[Job]:
        """Provider-specific search. Only called when ``is_configured``."""

    def _convert_postings(
        self,
        postings: Iterable[Dict[str, Any]],
        parse: Callable[[Dict[str, Any]], T],
        convert: Callable[[T], Job],
    ) -> List[Job]:
        """Parse and convert raw postings, skipping the ones that fail.

        Args:
            postings: Raw posting dicts from the provider
            parse: Builds the provider's payload model from a raw dict
            convert: Maps the payload model to a Job

        Returns:
            Jobs for every posting that converted cleanly
        """
        jobs = []
        for raw in postings:
            try:
                jobs.append(convert(parse(raw)))
            except (ValidationError, KeyError, ValueError, TypeError) as e:
                logger.warning(
                    f"Failed to convert {self.PROVIDER_NAME} posting",
                    extra={
                        "event": "adapter.posting.skipped",
                        "provider": self.PROVIDER_NAME,
                        "error_type": type(e).__name__,
                        "error": str(e).splitlines()[0] if str(e) else "",
                    },
                )
        return jobs

    def _truncate_jobs(self, jobs: List[Job], limit: Optional[int] = None) -> List[Job]:
        """Cap ``jobs`` at the smaller of ``limit`` and ``max_jobs``."""
        caps = [cap for cap in (limit, self.max_jobs) if cap]
        if not caps:
            return jobs

        cap = min(caps)
        if len(jobs) > cap:
            logger.debug(
                "Truncating provider results",
                extra={
                    "event": "adapter.search.truncated",
                    "provider": self.PROVIDER_NAME,
                    "total": len(jobs),
                    "max": cap,
                },
            )
            return jobs[:cap]
        return jobs


class HTTPAdapter(BaseAdapter):
    """Adapter backed by a JSON HTTP API.

    One ``requests.Session`` per adapter carries the User-Agent header;
    ``_make_request`` turns every transport problem into an ``AdapterError``.
    """

    MIN_TIMEOUT = 5
    MAX_TIMEOUT = 300

    def __init__(
        self,
        timeout: int = 15,
        user_agent: str = "Pathfinder/1.0",
        max_jobs: int = 200,
    ) -> None:
        super().__init__(max_jobs=max_jobs)

        if not self.MIN_TIMEOUT <= timeout <= self.MAX_TIMEOUT:
            raise AdapterConfigurationError(
                f"Timeout must be {self.MIN_TIMEOUT}-{self.MAX_TIMEOUT} seconds, got {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent must not be blank")

        self.timeout = timeout
        self.user_agent = user_agent.strip()
        self._session = requests.Session()
        self._session.headers["User-Agent"] = self.user_agent

    def _log_failure(self, level: int, message: str, event: str, url: str, **fields: Any) -> None:
        logger.log(
            level,
            message,
            extra={"event": event, "provider": self.PROVIDER_NAME, "url": url, **fields},
        )

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            AdapterTimeoutError: No answer within ``timeout``
            AdapterHTTPError: 4xx/5xx status, or no connection (status 0)
            AdapterResponseError: Body is not valid JSON
        """
        logger.debug(
            f"{method} {url}",
            extra={"event": "adapter.fetch.request", "provider": self.PROVIDER_NAME, "url": url},
        )

        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            message = f"{self.PROVIDER_NAME} did not answer within {self.timeout}s"
            self._log_failure(logging.WARNING, message, "adapter.fetch.timeout", url)
            raise AdapterTimeoutError(message, url=url) from e
        except requests.exceptions.RequestException as e:
            message = f"{self.PROVIDER_NAME} request failed: {e}"
            self._log_failure(
                logging.ERROR, message, "adapter.fetch.error", url, error_type=type(e).__name__
            )
            raise AdapterHTTPError(message, status_code=0, url=url) from e

        status = response.status_code
        if status >= 400:
            # Rate limits and server errors usually clear up by the next search
            transient = status == 429 or status >= 500
            self._log_failure(
                logging.WARNING if transient else logging.ERROR,
                f"{self.PROVIDER_NAME} answered HTTP {status}",
                "adapter.fetch.retryable_error" if transient else "adapter.fetch.error",
                url,
                status_code=status,
            )
            raise AdapterHTTPError(f"HTTP {status}: {response.reason}", status_code=status, url=url)

        try:
            return response.json()
        except ValueError as e:
            message = f"{self.PROVIDER_NAME} returned a body that is not JSON"
            self._log_failure(
                logging.ERROR, message, "adapter.fetch.error", url, error_type="JSONDecodeError"
            )
            raise AdapterResponseError(f"{message}: {e}") from e

    def _extract_list(self, response: Any, field: str) -> List[Dict[str, Any]]:
        """Pull the postings array out of a JSON object response.

        A missing or null field counts as an empty page.

        Raises:
            AdapterResponseError: If the response or the field has the wrong shape
        """
        if not isinstance(response, dict):
            raise AdapterResponseError(
                f"Expected JSON object response, got {type(response).__name__}"
            )

        items = response.get(field)
        if items is None:
            return []
        if not isinstance(items, list):
            raise AdapterResponseError(
                f"Expected '{field}' field to be array, got {type(items).__name__}"
            )
        return [item for item in items if isinstance(item, dict)]

    def _clean_html(self, html_text: Optional[str]) -> str:
        """Strip HTML tags and entities, keeping line and paragraph breaks."""
        if not html_text:
            return ""

        text = html.unescape(html_text)
        text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
        text = re.sub(r"</p>", "\n\n", text, flags=re.IGNORECASE)
        text = re.sub(r"<[^>]+>", " ", text)
        text = re.sub(r"[ \t]+", " ", text)
        text = re.sub(r" *\n *", "\n", text)
        text = re.sub(r"\n{3,}", "\n\n", text)

        return text.strip()
