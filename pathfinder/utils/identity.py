"""Identity key derivation for job postings.

No provider exposes an ID that is stable across providers, so a posting's
identity is derived from its title and company only. The key ignores
location and source: two distinct postings with the same title and company
collapse into one. This imprecision is accepted; no stronger signal is
available uniformly.

``Job`` strips surrounding whitespace from title and company when it is
built, so the key is computed from the stripped values and ``"Dev "`` and
``"Dev"`` at the same company share one key. Inner whitespace is kept.
"""


def compute_identity_key(title: str, company: str) -> str:
    """Compute the deduplication/storage key for a job posting.

    Args:
        title: Job title
        company: Company name

    Returns:
        ``lowercase(title) + "-" + lowercase(company)``

    Example:
        >>> compute_identity_key("Senior Full Stack Developer", "TechCorp Sri Lanka")
        'senior full stack developer-techcorp sri lanka'
    """
    return f"{(title or '').lower()}-{(company or '').lower()}"
