"""Match scoring of jobs against a skill profile."""

from .completion import CompletionClient, OpenAICompletionClient
from .exceptions import CompletionError, ScorerConfigurationError, ScorerError
from .prompt import SYSTEM_PROMPT, build_match_prompt
from .scorer import MatchScorer, ScoreOutcome, ScoreResponse

__all__ = [
    "CompletionClient",
    "OpenAICompletionClient",
    "MatchScorer",
    "ScoreOutcome",
    "ScoreResponse",
    "SYSTEM_PROMPT",
    "build_match_prompt",
    "ScorerError",
    "ScorerConfigurationError",
    "CompletionError",
]
