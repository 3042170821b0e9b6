from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from grecko.api.deps import get_goal_session, get_recorder, get_store, get_user_id
from grecko.core.errors import PersistenceError
from grecko.core.gpa import aggregate_course_gpa, calculate_required_gpa, courses_remaining
from grecko.schemas.goal import GoalRead
from grecko.schemas.gpa import (
    ApplyResult,
    CourseList,
    GpaPreview,
    HistoryEntryRead,
    SnapshotCreate,
)
from grecko.services.history import GpaHistoryRecorder
from grecko.services.session import GoalSession, persist_goal_state, persist_snapshot
from grecko.services.store import GoalStore

router = APIRouter(prefix="/gpa", tags=["gpa"])


@router.post("/calculate", response_model=GpaPreview)
def preview_gpa(payload: CourseList, session: GoalSession = Depends(get_goal_session)):
    """Unweighted GPA of the submitted courses; nothing is saved."""
    gpa = aggregate_course_gpa(payload.courses)
    count = len(payload.courses)
    goals = session.goals
    remaining = courses_remaining(goals.total_courses, count)
    return GpaPreview(
        gpa=gpa,
        course_count=count,
        required_gpa=calculate_required_gpa(float(gpa), goals.target_gpa, count, remaining),
    )


@router.post("/apply", response_model=ApplyResult)
def apply_gpa(
    payload: CourseList,
    background: BackgroundTasks,
    session: GoalSession = Depends(get_goal_session),
    store: GoalStore = Depends(get_store),
    recorder: GpaHistoryRecorder = Depends(get_recorder),
):
    """Use the calculated GPA as current GPA and add it to the trend."""
    snapshot = session.apply_calculated_gpa(payload.courses)
    # Two independent writes; either may fail without affecting the other
    background.add_task(persist_goal_state, session, store, session.goals)
    background.add_task(persist_snapshot, session, recorder, snapshot)
    return ApplyResult(goals=GoalRead.from_state(session.goals), snapshot=snapshot)


@router.post("/history", response_model=HistoryEntryRead)
def record_snapshot(
    payload: SnapshotCreate,
    background: BackgroundTasks,
    session: GoalSession = Depends(get_goal_session),
    recorder: GpaHistoryRecorder = Depends(get_recorder),
):
    snapshot = session.record_semester(payload.gpa, payload.label)
    background.add_task(persist_snapshot, session, recorder, snapshot)
    return snapshot


@router.get("/history", response_model=list[HistoryEntryRead])
def get_trend(session: GoalSession = Depends(get_goal_session)):
    """The trend as this session sees it, including unsaved snapshots."""
    return session.trend()


@router.get("/history/stored", response_model=list[HistoryEntryRead])
def get_stored_history(
    user_id: str = Depends(get_user_id),
    store: GoalStore = Depends(get_store),
):
    try:
        return store.list_history_entries(user_id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
