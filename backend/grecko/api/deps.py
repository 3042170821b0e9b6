from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from grecko.core.errors import SessionNotFound
from grecko.services.history import GpaHistoryRecorder
from grecko.services.session import GoalSession, SessionRegistry
from grecko.services.store import GoalStore


def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    # The identity provider's gateway injects the opaque user id
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


def get_store(request: Request) -> GoalStore:
    return request.app.state.store


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_recorder(store: GoalStore = Depends(get_store)) -> GpaHistoryRecorder:
    return GpaHistoryRecorder(store)


def get_goal_session(
    user_id: str = Depends(get_user_id),
    registry: SessionRegistry = Depends(get_registry),
) -> GoalSession:
    try:
        return registry.get(user_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=401, detail=str(e))
