"""Job store used by the match pipeline and the HTTP API.

``JobStore`` owns the transaction boundary: each call opens a session, runs
one repository operation and commits. Errors raised by the commit itself
surface as ``PersistenceError`` like any other storage failure.
"""

from typing import List, Sequence

from sqlalchemy.exc import SQLAlchemyError

from pathfinder.domain.models import Job, StoredJob
from pathfinder.logging import get_logger

from .database import get_session
from .exceptions import PersistenceError
from .repositories import JobRepository

logger = get_logger(__name__, component="persistence")


class JobStore:
    """Durable set of jobs keyed by identity key."""

    def upsert(self, job: Job, skills: Sequence[str] = ()) -> StoredJob:
        """Write ``job`` with ``skills``, replacing any row with the same key.

        Raises:
            PersistenceError: If the write or its commit fails
        """
        try:
            with get_session() as session:
                stored = JobRepository(session).upsert(job, skills)
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to commit job: {e}",
                extra={"event": "store.job.upsert_failed", "job_key": job.identity_key},
            )
            raise PersistenceError(f"Failed to store job: {e}") from e

        logger.debug(
            "Job stored",
            extra={"event": "store.job.upserted", "job_key": job.identity_key, "job_id": stored.id},
        )
        return stored

    def list_recent(self, limit: int = 50) -> List[StoredJob]:
        """Return up to ``limit`` stored jobs, newest posting first.

        Raises:
            PersistenceError: If the read fails
        """
        try:
            with get_session() as session:
                return JobRepository(session).list_recent(limit)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list jobs: {e}", extra={"event": "store.list.failed"})
            raise PersistenceError(f"Failed to list jobs: {e}") from e
