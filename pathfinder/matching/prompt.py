"""Prompt construction for job match scoring."""

from pathfinder.domain.models import Job, SkillProfile
from pathfinder.utils.text import truncate_text

SYSTEM_PROMPT = "Job matcher. Return ONLY JSON."

DESCRIPTION_LIMIT = 500
REQUIREMENTS_LIMIT = 300

_RESPONSE_EXAMPLE = """{
  "matchScore": 85,
  "matchReason": "Strong backend skills align",
  "missingSkills": ["Kubernetes", "AWS"],
  "matchedSkills": ["Node.js", "PostgreSQL"],
  "recommendation": "Great fit - apply now"
}"""


def build_match_prompt(job: Job, profile: SkillProfile, target_role: str) -> str:
    """Build the user prompt comparing ``job`` with ``profile`` and ``target_role``."""
    requirements = truncate_text(job.requirements, REQUIREMENTS_LIMIT) or "Not specified"

    return (
        "Analyze this job posting and user profile:\n"
        "\n"
        "JOB:\n"
        f"Title: {job.title}\n"
        f"Company: {job.company}\n"
        f"Description: {truncate_text(job.description, DESCRIPTION_LIMIT)}\n"
        f"Requirements: {requirements}\n"
        "\n"
        "USER:\n"
        f"Languages: {', '.join(profile.language_names)}\n"
        f"Skills: {', '.join(profile.skill_names)}\n"
        f"Activity: {profile.activity_score}/100\n"
        f"Target: {target_role}\n"
        "\n"
        "Return ONLY JSON:\n"
        f"{_RESPONSE_EXAMPLE}"
    )
