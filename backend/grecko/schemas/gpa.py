from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from grecko.schemas.goal import GoalRead


class CourseGradeInput(BaseModel):
    """One row of the calculator modal. Grade is not clamped."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = ""
    grade: float = 4.0


class CourseList(BaseModel):
    courses: list[CourseGradeInput] = Field(default_factory=list)


class GpaPreview(BaseModel):
    gpa: str           # e.g. "3.25"
    course_count: int
    required_gpa: str  # projection if this GPA were applied


class HistoryEntryRead(BaseModel):
    """A point on the GPA trend."""

    model_config = ConfigDict(from_attributes=True)

    label: str
    value: float
    created_at: Optional[datetime] = None


class SnapshotCreate(BaseModel):
    """A manually recorded snapshot, usually labeled with a semester."""

    model_config = ConfigDict(allow_inf_nan=False)

    label: str = Field(..., min_length=1)
    gpa: float


class ApplyResult(BaseModel):
    goals: GoalRead
    snapshot: HistoryEntryRead


class NotificationRead(BaseModel):
    message: str
    created_at: datetime
