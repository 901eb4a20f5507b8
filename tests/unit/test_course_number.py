from datetime import date

from courses.domain.value_objects.course_number import (
    MAX_SUFFIX,
    course_number_base,
    course_number_candidates,
    first_free_course_number,
)


def test_base_uses_date_and_alphanumeric_codes():
    assert course_number_base(date(2026, 3, 2), "acme", "CPR-A") == "20260302-ACME-CPRA"


def test_first_request_gets_the_base():
    assert first_free_course_number("20260302-ACME-CPRA", set()) == "20260302-ACME-CPRA"


def test_second_request_same_day_gets_suffix_one():
    base = "20260302-ACME-CPRA"
    assert first_free_course_number(base, {base}) == f"{base}-1"


def test_gaps_are_reused():
    base = "B"
    assert first_free_course_number(base, {"B", "B-1", "B-3"}) == "B-2"


def test_exhausted_after_max_suffix():
    base = "B"
    taken = set(course_number_candidates(base))
    assert len(taken) == MAX_SUFFIX + 1
    assert first_free_course_number(base, taken) is None
