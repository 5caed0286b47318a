"""Scoped logging context backed by contextvars.

Fields pushed here (``run_id``, ``request_id``, ``provider`` ...) are picked up
by ``ContextualFilter`` and added to every record emitted inside the scope.
Worker threads do not inherit context on their own; submit work through
``contextvars.copy_context().run`` to carry it over.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator

_fields: ContextVar[Dict[str, Any]] = ContextVar("pathfinder_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return dict(_fields.get())


def push_log_context(**fields: Any) -> Token:
    """Merge ``fields`` into the context; pass the token to ``pop_log_context``."""
    return _fields.set({**_fields.get(), **fields})


def pop_log_context(token: Token) -> None:
    _fields.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Mostly used by tests."""
    _fields.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Add fields to the logging context for the duration of a ``with`` block.

    Example:
        >>> with log_context(run_id="abc123", target_role="Backend Engineer"):
        ...     logger.info("Scoring candidates")
    """
    token = push_log_context(**fields)
    try:
        yield
    finally:
        pop_log_context(token)
