"""Test helper utilities for Pathfinder tests."""

from .fake_completion import FailingCompletionClient, FakeCompletionClient
from .fixture_adapter import FailingAdapter, FixtureAdapter, load_fixture_jobs

__all__ = [
    "FixtureAdapter",
    "FailingAdapter",
    "load_fixture_jobs",
    "FakeCompletionClient",
    "FailingCompletionClient",
]
