# src/courses/domain/value_objects/course_number.py
"""Human-readable course numbers: {YYYYMMDD}-{ORG}-{TYPE} with -1..-99 suffixes."""

from datetime import date
from typing import Iterator

MAX_SUFFIX = 99


def _code(value: str) -> str:
    return "".join(ch for ch in value.upper() if ch.isalnum())


def course_number_base(date_requested: date, organization_code: str, course_type_code: str) -> str:
    """Build the unsuffixed course number for a request."""
    return f"{date_requested:%Y%m%d}-{_code(organization_code)}-{_code(course_type_code)}"


def course_number_candidates(base: str, max_suffix: int = MAX_SUFFIX) -> Iterator[str]:
    """
    Yield ``base``, ``base-1``, ... ``base-{max_suffix}`` in probing order.
    """
    yield base
    for suffix in range(1, max_suffix + 1):
        yield f"{base}-{suffix}"


def first_free_course_number(base: str, taken: set[str], max_suffix: int = MAX_SUFFIX) -> str | None:
    """Return the first candidate not in ``taken``, or None when all are used."""
    for candidate in course_number_candidates(base, max_suffix):
        if candidate not in taken:
            return candidate
    return None
