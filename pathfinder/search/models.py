"""Result types returned by provider calls inside the aggregator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pathfinder.domain.models import Job


class ProviderStatus(str, Enum):
    """Outcome of one provider call."""

    SUCCESS = "success"
    DISABLED = "disabled"
    FAILED = "failed"


@dataclass
class ProviderResult:
    """
    Outcome of a single provider search within an aggregated search.

    Attributes:
        provider: Provider identifier (adapter ``PROVIDER_NAME``)
        status: Whether the call succeeded, was skipped, or failed
        jobs: Jobs returned (empty unless status is SUCCESS)
        error: Exception raised by the adapter when status is FAILED
        duration_seconds: Wall time spent in the provider call
    """

    provider: str
    status: ProviderStatus
    jobs: List[Job] = field(default_factory=list)
    error: Optional[BaseException] = None
    duration_seconds: float = 0.0

    @property
    def failed(self) -> bool:
        return self.status is ProviderStatus.FAILED

    @property
    def job_count(self) -> int:
        return len(self.jobs)
