import math

import pytest

from grecko.core.gpa import (
    Reachability,
    aggregate_course_gpa,
    calculate_required_gpa,
    classify_reachability,
    courses_remaining,
    goal_summary,
)
from grecko.schemas.gpa import CourseGradeInput


def courses(*grades):
    return [CourseGradeInput(name=f"C{i}", grade=g) for i, g in enumerate(grades)]


def test_aggregate_empty_is_zero():
    assert aggregate_course_gpa([]) == "0.00"


def test_aggregate_mean():
    assert aggregate_course_gpa(courses(4.0, 2.0)) == "3.00"
    assert aggregate_course_gpa(courses(4.0, 3.0, 3.0)) == "3.33"


def test_aggregate_does_not_clamp():
    assert aggregate_course_gpa(courses(5.0, 5.0)) == "5.00"
    assert aggregate_course_gpa(courses(-1.0, 1.0)) == "0.00"


@pytest.mark.parametrize("current,target,taken", [(0, 0, 0), (3.2, 4.0, 10), (4.0, 9.9, 3)])
def test_no_remaining_is_sentinel(current, target, taken):
    assert calculate_required_gpa(current, target, taken, 0) == "---"
    assert calculate_required_gpa(current, target, taken, -2) == "---"


def test_required_unreachable_example():
    required = calculate_required_gpa(3.0, 4.0, 2, 2)
    assert required == "5.00"
    assert classify_reachability(required, 3.0) is Reachability.unreachable


def test_required_easy_example():
    required = calculate_required_gpa(3.8, 3.5, 5, 3)
    assert required == "3.00"
    assert classify_reachability(required, 3.8) is Reachability.easy


def test_required_on_track():
    required = calculate_required_gpa(3.0, 3.5, 4, 4)
    assert required == "4.00"
    assert classify_reachability(required, 3.0) is Reachability.on_track


def test_negative_required_means_goal_exceeded():
    required = calculate_required_gpa(4.0, 2.0, 10, 2)
    assert float(required) < 0
    assert classify_reachability(required, 4.0) is Reachability.easy


def test_sentinel_has_no_reachability():
    assert classify_reachability("---", 3.0) is None


def test_required_non_decreasing_in_target():
    previous = -math.inf
    for step in range(0, 21):
        target = step * 0.25
        value = float(calculate_required_gpa(3.1, target, 7, 5))
        assert value >= previous
        previous = value


def test_nan_propagates_without_raising():
    assert calculate_required_gpa(float("nan"), 3.0, 2, 2) == "nan"


@pytest.mark.parametrize("total,taken,expected", [(10, 4, 6), (4, 4, 0), (3, 8, 0), (0, 0, 0)])
def test_courses_remaining_never_negative(total, taken, expected):
    assert courses_remaining(total, taken) == expected


def test_goal_summary_text():
    text = goal_summary(3.5, "3.75", 4, Reachability.on_track)
    assert text == "To reach a GPA of 3.5, you need to average a 3.75 in your remaining 4 subjects."
    assert "unreachable" in goal_summary(4.0, "5.00", 2, Reachability.unreachable)
    assert "No subjects remaining" in goal_summary(4.0, "---", 0, None)
