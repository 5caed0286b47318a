"""Small text helpers shared by adapters and the match scorer."""

from typing import Optional, Union

Number = Union[int, float]


def truncate_text(text: Optional[str], max_length: int) -> str:
    """Return at most ``max_length`` characters of ``text`` (no ellipsis)."""
    if not text:
        return ""
    return text[:max_length]


def location_mentions_remote(location: Optional[str]) -> bool:
    """Heuristic remote detection: the free-text location contains "remote".

    Low precision by nature ("Remote-friendly office in Berlin" counts as
    remote); only used when a provider has no explicit remote flag.
    """
    return bool(location) and "remote" in location.lower()


def _format_amount(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def format_salary_range(
    minimum: Optional[Number],
    maximum: Optional[Number],
    prefix: str = "",
) -> Optional[str]:
    """Format a min/max salary pair as free text.

    Returns None when neither bound is known, so the ``salary`` field stays
    omitted. Amounts are not normalized to a currency or period.

    Examples:
        >>> format_salary_range(50000, 70000, prefix="$")
        '$50000 - $70000'
        >>> format_salary_range(None, 90000.0)
        '90000'
        >>> format_salary_range(None, None) is None
        True
    """
    if minimum is None and maximum is None:
        return None
    if minimum is None:
        return f"{prefix}{_format_amount(maximum)}"
    if maximum is None:
        return f"{prefix}{_format_amount(minimum)}"
    return f"{prefix}{_format_amount(minimum)} - {prefix}{_format_amount(maximum)}"
