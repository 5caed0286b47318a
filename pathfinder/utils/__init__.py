"""Utility functions for identity keys, text handling, and time handling."""

from .identity import compute_identity_key
from .text import format_salary_range, location_mentions_remote, truncate_text
from .timestamps import (
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    parse_posted_date,
    utc_now,
)

__all__ = [
    # Identity
    "compute_identity_key",
    # Text
    "truncate_text",
    "format_salary_range",
    "location_mentions_remote",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "parse_posted_date",
    "format_timestamp",
]
