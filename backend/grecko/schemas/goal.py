from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from grecko.core.config import settings
from grecko.core.constants import DEFAULT_REQUIRED_GPA
from grecko.core.gpa import (
    Reachability,
    calculate_required_gpa,
    classify_reachability,
    courses_remaining,
    goal_summary,
)


class GoalState(BaseModel):
    """A user's academic goal record.

    `courses_remaining` and `required_gpa` are derived; build new states
    through `with_inputs` so they stay consistent with the inputs.
    """

    model_config = ConfigDict(from_attributes=True)

    current_gpa: float = 0.0
    target_gpa: float = 4.0
    courses_taken: int = 0
    total_courses: int = 0
    courses_remaining: int = 0
    required_gpa: str = DEFAULT_REQUIRED_GPA

    def with_inputs(self, **changes) -> "GoalState":
        """Copy with some input fields replaced and derived fields recomputed."""
        data = self.model_dump()
        data.update(changes)
        remaining = courses_remaining(data["total_courses"], data["courses_taken"])
        data["courses_remaining"] = remaining
        data["required_gpa"] = calculate_required_gpa(
            data["current_gpa"], data["target_gpa"], data["courses_taken"], remaining
        )
        return GoalState(**data)


def _field(record: Any, name: str):
    if record is None:
        return None
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def goal_state_from_record(record: Any) -> GoalState:
    """Build a GoalState from a store row, a plain mapping, or None.

    Missing or falsy values fall back to the defaults, then the derived
    fields are recomputed so a stale or hand-edited row cannot break them.
    """
    state = GoalState(
        current_gpa=float(_field(record, "current_gpa") or 0),
        target_gpa=float(_field(record, "target_gpa") or settings.default_target_gpa),
        courses_taken=int(_field(record, "courses_taken") or 0),
        total_courses=int(_field(record, "total_courses") or 0),
    )
    return state.with_inputs()


class GoalUpdate(BaseModel):
    """Edits to any of the four input fields (all optional)."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    current_gpa: Optional[float] = None
    target_gpa: Optional[float] = None
    courses_taken: Optional[int] = Field(default=None, ge=0)
    total_courses: Optional[int] = Field(default=None, ge=0)


class GoalRead(GoalState):
    """GoalState as returned to the frontend."""

    reachability: Optional[Reachability] = None
    summary: str = ""

    @classmethod
    def from_state(cls, state: GoalState) -> "GoalRead":
        reach = classify_reachability(state.required_gpa, state.current_gpa)
        return cls(
            **state.model_dump(),
            reachability=reach,
            summary=goal_summary(
                state.target_gpa, state.required_gpa, state.courses_remaining, reach
            ),
        )


class RequiredGpaRead(BaseModel):
    required_gpa: str
    reachability: Optional[Reachability] = None
