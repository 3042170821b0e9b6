import math

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from grecko.api.deps import get_goal_session, get_store
from grecko.core.gpa import calculate_required_gpa, classify_reachability
from grecko.schemas.goal import GoalRead, GoalUpdate, RequiredGpaRead
from grecko.schemas.gpa import NotificationRead
from grecko.services.session import GoalSession, persist_goal_state
from grecko.services.store import GoalStore


router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=GoalRead)
def get_goals(session: GoalSession = Depends(get_goal_session)):
    return GoalRead.from_state(session.goals)


@router.patch("", response_model=GoalRead)
def update_goals(
    payload: GoalUpdate,
    background: BackgroundTasks,
    session: GoalSession = Depends(get_goal_session),
    store: GoalStore = Depends(get_store),
):
    """
    Edit any of the goal inputs. Derived fields are recomputed and the
    response reflects the edit even if saving it later fails:
      PATCH /goals {"target_gpa": 3.7}
    """
    state = session.edit_goal(**payload.model_dump(exclude_unset=True))
    background.add_task(persist_goal_state, session, store, state)
    return GoalRead.from_state(state)


@router.get("/required", response_model=RequiredGpaRead)
def required_gpa(
    current_gpa: float = Query(...),
    target_gpa: float = Query(...),
    courses_taken: int = Query(..., ge=0),
    courses_remaining: int = Query(..., ge=0),
):
    """Stateless projection for what-if inputs."""
    if not (math.isfinite(current_gpa) and math.isfinite(target_gpa)):
        raise HTTPException(status_code=422, detail="current_gpa and target_gpa must be finite numbers")
    required = calculate_required_gpa(current_gpa, target_gpa, courses_taken, courses_remaining)
    return RequiredGpaRead(
        required_gpa=required,
        reachability=classify_reachability(required, current_gpa),
    )


@router.get("/notifications", response_model=list[NotificationRead])
def drain_notifications(session: GoalSession = Depends(get_goal_session)):
    return session.drain_notifications()
