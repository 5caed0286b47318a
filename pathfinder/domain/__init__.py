"""Domain models for Pathfinder."""

from .models import Job, JobMatch, SkillLevel, SkillProfile, StoredJob

__all__ = ["Job", "JobMatch", "SkillLevel", "SkillProfile", "StoredJob"]
