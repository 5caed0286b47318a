"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Check raw configuration for settings that are valid but risky.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    providers = config_dict.get("providers", {})
    if isinstance(providers, dict):
        disabled = [
            name
            for name in ("theirstack", "jsearch", "adzuna")
            if providers.get(f"{name}_enabled") is False
        ]
        if len(disabled) == 3:
            warning_messages.append(
                "All real job providers are disabled; searches will only return mock jobs"
            )
        elif disabled:
            warning_messages.append(f"Providers disabled in config: {', '.join(disabled)}")

    pipeline = config_dict.get("pipeline", {})
    if isinstance(pipeline, dict):
        max_candidates = pipeline.get("max_candidates", 30)
        if isinstance(max_candidates, int) and max_candidates > 50:
            warning_messages.append(
                f"Large max_candidates ({max_candidates}) means one completion call per job and may hit rate limits"
            )
        concurrency = pipeline.get("scoring_concurrency", 10)
        if isinstance(concurrency, int) and concurrency > 20:
            warning_messages.append(
                f"High scoring_concurrency ({concurrency}) may trigger completion API rate limits"
            )

    llm = config_dict.get("llm", {})
    if isinstance(llm, dict):
        temperature = llm.get("temperature")
        if isinstance(temperature, (int, float)) and temperature > 1.0:
            warning_messages.append(
                f"High llm.temperature ({temperature}) makes match scores less repeatable"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
