"""Match pipeline orchestration."""

from .exceptions import PipelineError
from .models import MatchRunStats
from .runner import MatchPipeline

__all__ = ["MatchPipeline", "MatchRunStats", "PipelineError"]
