"""Data access layer for stored jobs.

Repositories wrap a session, return domain models rather than ORM rows, and
translate SQLAlchemy errors into persistence exceptions.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pathfinder.domain.models import Job, StoredJob
from pathfinder.utils.timestamps import utc_now

from .exceptions import DataIntegrityError, PersistenceError
from .schema import JobModel

logger = logging.getLogger(__name__)


class JobRepository:
    """Repository for job-related database operations."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_identity_key(self, identity_key: str) -> Optional[StoredJob]:
        """Retrieve a job by its identity key.

        Returns:
            StoredJob if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            job_model = self._find(identity_key)
            return job_model.to_domain() if job_model is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving job {identity_key}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve job: {e}") from e

    def upsert(self, job: Job, skills: Sequence[str] = ()) -> StoredJob:
        """Insert a new job or overwrite the row with the same identity key.

        Args:
            job: Job to persist
            skills: Skills recorded with the job (matched skills of the run)

        Returns:
            The stored job, with its row id and timestamps

        Raises:
            DataIntegrityError: If a constraint is violated
            PersistenceError: If database error occurs
        """
        now = utc_now()
        try:
            existing = self._find(job.identity_key)

            if existing is not None:
                existing.apply(job, list(skills), now)
                self.session.flush()
                return existing.to_domain()

            job_model = JobModel.from_domain(job, list(skills), now)
            self.session.add(job_model)
            self.session.flush()
            return job_model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error upserting job {job.identity_key}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to upsert job due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting job {job.identity_key}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert job: {e}") from e

    def list_recent(self, limit: int = 50) -> List[StoredJob]:
        """Return up to ``limit`` jobs, newest posting first.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(JobModel)
                .order_by(JobModel.posted_date.desc(), JobModel.id.desc())
                .limit(limit)
            )
            return [row.to_domain() for row in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing recent jobs: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list jobs: {e}") from e

    def _find(self, identity_key: str) -> Optional[JobModel]:
        stmt = select(JobModel).where(JobModel.identity_key == identity_key)
        return self.session.execute(stmt).scalar_one_or_none()
