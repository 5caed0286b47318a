"""Persistence layer for stored jobs (SQLAlchemy).

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Data access
    - JobRepository: session-scoped operations on the jobs table
    - JobStore: transactional upsert / list used by the pipeline and API

    # Exceptions
    - PersistenceError: Base exception for all persistence errors
    - DatabaseConnectionError: Database connection/initialization failures
    - DataIntegrityError: Constraint violations

Example usage:
    >>> from pathfinder.persistence import init_database, JobStore
    >>> init_database("sqlite:///./data/pathfinder.db")
    >>> store = JobStore()
    >>> store.list_recent(10)
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
)
from .repositories import JobRepository
from .store import JobStore

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    # Data access
    "JobRepository",
    "JobStore",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
]
