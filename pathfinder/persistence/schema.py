"""Database schema definition and ORM models.

Defines the ``jobs`` table and the conversions between ``JobModel`` rows and
the ``StoredJob`` domain model.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, Boolean, Column, Index, Integer, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from pathfinder.domain.models import Job, StoredJob

logger = logging.getLogger(__name__)

Base = declarative_base()


class JobModel(Base):
    """ORM model for the jobs table.

    One row per identity key; a later upsert of the same title and company
    overwrites every column.
    """

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    identity_key = Column(String(512), unique=True, nullable=False)

    title = Column(Text, nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    requirements = Column(Text, nullable=False, default="")
    salary = Column(String(255), nullable=True)
    job_type = Column(String(50), nullable=False, default="full-time")
    remote = Column(Boolean, nullable=False, default=False)
    source = Column(String(100), nullable=False)
    source_url = Column(Text, nullable=False, default="")
    skills = Column(JSON, nullable=False, default=list)

    # Timestamps (stored as ISO 8601 strings)
    posted_date = Column(String(50), nullable=False)
    created_at = Column(String(50), nullable=False)
    updated_at = Column(String(50), nullable=False)

    __table_args__ = (Index("idx_jobs_posted_date", "posted_date"),)

    def to_domain(self) -> StoredJob:
        """Convert ORM model to domain model."""
        return StoredJob(
            id=self.id,
            title=self.title,
            company=self.company,
            location=self.location,
            description=self.description,
            requirements=self.requirements,
            salary=self.salary,
            job_type=self.job_type,
            remote=bool(self.remote),
            source=self.source,
            source_url=self.source_url,
            posted_date=_parse_datetime(self.posted_date),
            skills=list(self.skills or []),
            created_at=_parse_datetime(self.created_at),
            updated_at=_parse_datetime(self.updated_at),
        )

    def apply(self, job: Job, skills: List[str], now: datetime) -> None:
        """Copy every column from ``job`` onto this row."""
        self.identity_key = job.identity_key
        self.title = job.title
        self.company = job.company
        self.location = job.location
        self.description = job.description
        self.requirements = job.requirements
        self.salary = job.salary
        self.job_type = job.job_type
        self.remote = job.remote
        self.source = job.source
        self.source_url = job.source_url
        self.posted_date = _format_datetime(job.posted_date)
        self.skills = list(skills)
        self.updated_at = _format_datetime(now)

    @classmethod
    def from_domain(cls, job: Job, skills: List[str], now: datetime) -> "JobModel":
        """Create a new row from a domain job."""
        model = cls(created_at=_format_datetime(now))
        model.apply(job, skills, now)
        return model


def _format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime as ISO 8601 string (UTC, Z suffix) for storage."""
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _parse_datetime(dt_str: Optional[str]) -> Optional[datetime]:
    """Parse a stored ISO 8601 string back to an aware UTC datetime."""
    if dt_str is None or dt_str == "":
        return None

    dt_str = dt_str.rstrip("Z")
    try:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S.%f")
    except ValueError:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S")

    return dt.replace(tzinfo=timezone.utc)


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent)."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
