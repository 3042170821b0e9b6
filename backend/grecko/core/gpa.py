"""GPA arithmetic for the goal planner.

Everything here is pure: no I/O, no validation of grade bounds. Values
outside 0.0-4.0 are averaged and projected as given. Non-numeric values
must be rejected by the caller; NaN and infinity propagate into the
formatted result instead of raising.
"""

from enum import Enum
from typing import Iterable, Optional, Protocol

from grecko.core.constants import GPA_SCALE_MAX, NO_REMAINING_SENTINEL


class Reachability(str, Enum):
    unreachable = "unreachable"
    easy = "easy"
    on_track = "on-track"


class HasGrade(Protocol):
    grade: float


def format_gpa(value: float) -> str:
    """Two decimal places, e.g. 3.456 -> '3.46'."""
    return f"{value:.2f}"


def aggregate_course_gpa(courses: Iterable[HasGrade]) -> str:
    """Unweighted mean of the course grades.

    Example: grades [4.0, 2.0] -> '3.00'; no courses -> '0.00'
    """
    grades = [c.grade for c in courses]
    if not grades:
        return format_gpa(0.0)
    return format_gpa(sum(grades) / len(grades))


def courses_remaining(total_courses: int, courses_taken: int) -> int:
    # Taking more courses than planned leaves nothing remaining, not a debt
    return max(0, total_courses - courses_taken)


def calculate_required_gpa(
    current_gpa: float,
    target_gpa: float,
    courses_taken: int,
    remaining: int,
) -> str:
    """Average needed over the remaining courses to finish at `target_gpa`.

    Example: current 3.0 over 2 courses, target 4.0 over 4 -> '5.00'

    A negative result means the target is already exceeded. Returns the
    '---' sentinel when nothing remains.
    """
    if remaining <= 0:
        return NO_REMAINING_SENTINEL

    current_points = current_gpa * courses_taken
    total_target_points = target_gpa * (courses_taken + remaining)
    needed_points = total_target_points - current_points
    return format_gpa(needed_points / remaining)


def classify_reachability(required_gpa: str, current_gpa: float) -> Optional[Reachability]:
    """Classify a formatted required average against the 4.0 ceiling.

    Returns None for the '---' sentinel since there is nothing left to reach.
    """
    if required_gpa == NO_REMAINING_SENTINEL:
        return None
    required = float(required_gpa)
    if required > GPA_SCALE_MAX:
        return Reachability.unreachable
    if required < current_gpa:
        return Reachability.easy
    return Reachability.on_track


def goal_summary(
    target_gpa: float,
    required_gpa: str,
    remaining: int,
    reachability: Optional[Reachability],
) -> str:
    """Sentence shown under the required average on the dashboard."""
    if reachability is None:
        return "No subjects remaining. Increase your Subjects Offered to plan ahead."
    if reachability is Reachability.unreachable:
        return (
            "The target GPA is unreachable with the number of remaining subjects. "
            "Try increasing your Subjects Offered or adjusting the Target."
        )
    return (
        f"To reach a GPA of {target_gpa:g}, you need to average a {required_gpa} "
        f"in your remaining {remaining} subjects."
    )
