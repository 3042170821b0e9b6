from fastapi import APIRouter, Depends

from grecko.api.deps import get_registry, get_store, get_user_id
from grecko.schemas.goal import GoalRead
from grecko.services.session import SessionRegistry
from grecko.services.store import GoalStore

router = APIRouter(prefix="/session", tags=["session"])


@router.post("", response_model=GoalRead)
def open_session(
    user_id: str = Depends(get_user_id),
    registry: SessionRegistry = Depends(get_registry),
    store: GoalStore = Depends(get_store),
):
    """Start (or resume) the user's goal session after login."""
    session = registry.open(user_id, store)
    return GoalRead.from_state(session.goals)


@router.delete("")
def close_session(
    user_id: str = Depends(get_user_id),
    registry: SessionRegistry = Depends(get_registry),
):
    closed = registry.close(user_id)
    return {"message": "Session closed" if closed else "No active session"}
