"""Per-user goal sessions.

A GoalSession is the in-memory view of one logged-in user's goals and GPA
trend. Handlers mutate it synchronously and persist afterwards; the store
never feeds back into a live session except when it is opened.
"""

import time
from collections import deque
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from grecko.core.app_logger import get_logger
from grecko.core.config import settings
from grecko.core.constants import START_LABEL
from grecko.core.errors import PersistenceError, SessionNotFound
from grecko.core.gpa import HasGrade, aggregate_course_gpa
from grecko.core.time_utils import calc_label
from grecko.schemas.goal import GoalState
from grecko.schemas.gpa import HistoryEntryRead, NotificationRead
from grecko.services.history import GpaHistoryRecorder
from grecko.services.store import GoalStore

logger = get_logger("session")

# Pending notifications kept per session; oldest are dropped first
MAX_NOTIFICATIONS = 50


class GoalSession:
    def __init__(
        self,
        user_id: str,
        goals: Optional[GoalState] = None,
        history: Optional[Iterable[HistoryEntryRead]] = None,
    ):
        self.user_id = user_id
        self.goals = goals if goals is not None else GoalState().with_inputs()
        self.history: list[HistoryEntryRead] = list(history or [])
        self.notifications: deque[NotificationRead] = deque(maxlen=MAX_NOTIFICATIONS)

    def edit_goal(self, **fields) -> GoalState:
        """Replace any of the input fields and recompute the derived ones."""
        changes = {k: v for k, v in fields.items() if v is not None}
        self.goals = self.goals.with_inputs(**changes)
        return self.goals

    def apply_calculated_gpa(
        self, courses: Iterable[HasGrade], now: Optional[datetime] = None
    ) -> HistoryEntryRead:
        """Adopt the calculator result as the current GPA.

        The course count becomes `courses_taken`. A "Calc <date>" snapshot is
        appended to the in-memory trend and returned for persisting.
        """
        courses = list(courses)
        gpa = float(aggregate_course_gpa(courses))
        self.goals = self.goals.with_inputs(current_gpa=gpa, courses_taken=len(courses))
        return self.record_semester(gpa, calc_label(now, settings.timezone), now)

    def record_semester(
        self, gpa: float, label: str, now: Optional[datetime] = None
    ) -> HistoryEntryRead:
        entry = HistoryEntryRead(
            label=label, value=gpa, created_at=now or datetime.now(timezone.utc)
        )
        self.history.append(entry)
        return entry

    def trend(self) -> list[HistoryEntryRead]:
        if not self.history:
            return [HistoryEntryRead(label=START_LABEL, value=self.goals.current_gpa or 0)]
        return list(self.history)

    def notify(self, message: str) -> None:
        self.notifications.append(
            NotificationRead(message=message, created_at=datetime.now(timezone.utc))
        )

    def drain_notifications(self) -> list[NotificationRead]:
        out = list(self.notifications)
        self.notifications.clear()
        return out


class SessionRegistry:
    """Open goal sessions keyed by user id (login creates, logout discards).

    Sessions not touched for `idle_seconds` are dropped on the next lookup,
    so clients that never log out do not accumulate. 0 keeps them forever.
    """

    def __init__(self, idle_seconds: int = 0, clock: Callable[[], float] = time.monotonic):
        self.idle_seconds = idle_seconds
        self.clock = clock
        self._sessions: dict[str, GoalSession] = {}
        self._last_seen: dict[str, float] = {}

    def _evict_idle(self) -> None:
        if self.idle_seconds <= 0:
            return
        cutoff = self.clock() - self.idle_seconds
        for user_id, seen in list(self._last_seen.items()):
            if seen < cutoff:
                self._sessions.pop(user_id, None)
                self._last_seen.pop(user_id, None)
                logger.info("dropped idle goal session for %s", user_id)

    def open(self, user_id: str, store: GoalStore) -> GoalSession:
        self._evict_idle()
        existing = self._sessions.get(user_id)
        if existing is not None:
            self._last_seen[user_id] = self.clock()
            return existing

        session = GoalSession(user_id)
        try:
            session.goals = store.load_goal_state(user_id)
            session.history = store.list_history_entries(user_id)
        except PersistenceError as e:
            logger.error("could not load goals for %s, starting from defaults: %s", user_id, e)
            session.notify("Could not load your saved goals. Showing defaults.")
        self._sessions[user_id] = session
        self._last_seen[user_id] = self.clock()
        logger.info("opened goal session for %s", user_id)
        return session

    def get(self, user_id: str) -> GoalSession:
        self._evict_idle()
        session = self._sessions.get(user_id)
        if session is None:
            raise SessionNotFound(user_id)
        self._last_seen[user_id] = self.clock()
        return session

    def close(self, user_id: str) -> bool:
        self._last_seen.pop(user_id, None)
        closed = self._sessions.pop(user_id, None) is not None
        if closed:
            logger.info("closed goal session for %s", user_id)
        return closed

    def __len__(self) -> int:
        return len(self._sessions)


def persist_goal_state(session: GoalSession, store: GoalStore, state: GoalState) -> None:
    """Write a goal state; on failure log and notify, never roll back."""
    try:
        store.upsert_goal_state(session.user_id, state)
    except PersistenceError as e:
        logger.error("failed to save goals: %s", e)
        session.notify("Could not save your goals. Changes are kept on this device until the next save.")


def persist_snapshot(
    session: GoalSession, recorder: GpaHistoryRecorder, entry: HistoryEntryRead
) -> None:
    """Append a snapshot; on failure log and notify, never roll back."""
    try:
        recorder.record_snapshot(session.user_id, entry.value, entry.label)
    except PersistenceError as e:
        logger.error("failed to save GPA history: %s", e)
        session.notify("Could not save history to the database.")
