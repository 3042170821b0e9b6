from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grecko.core.app_logger import get_logger
from grecko.core.config import settings
from grecko.core.errors import PersistenceError
from grecko.core.time_utils import history_label
from grecko.models.academic_goal import AcademicGoal
from grecko.models.gpa_history import GpaHistory
from grecko.schemas.goal import GoalState, goal_state_from_record
from grecko.schemas.gpa import HistoryEntryRead

logger = get_logger("store")


class GoalStore:
    """Persistence for goal records and GPA history.

    Each call opens its own session from `session_factory`, so the store can
    be used from background tasks after the request session is gone.
    Database errors are rolled back and re-raised as PersistenceError.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def load_goal_state(self, user_id: str) -> GoalState:
        db = self.session_factory()
        try:
            row = db.get(AcademicGoal, user_id)
            return goal_state_from_record(row)
        except SQLAlchemyError as e:
            raise PersistenceError("load_goal_state", user_id, str(e)) from e
        finally:
            db.close()

    def upsert_goal_state(self, user_id: str, state: GoalState) -> None:
        """Insert or overwrite the single goal row for `user_id`."""
        db = self.session_factory()
        try:
            row = db.get(AcademicGoal, user_id)
            if row is None:
                row = AcademicGoal(user_id=user_id)
                db.add(row)
            row.current_gpa = state.current_gpa
            row.target_gpa = state.target_gpa
            row.courses_taken = state.courses_taken
            row.total_courses = state.total_courses
            row.courses_remaining = state.courses_remaining
            row.required_gpa = state.required_gpa
            db.commit()
            logger.debug("upserted goals for %s", user_id)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError("upsert_goal_state", user_id, str(e)) from e
        finally:
            db.close()

    def append_history_entry(self, user_id: str, label: str, value: float) -> HistoryEntryRead:
        """Append one snapshot. Identical calls create identical, separate rows."""
        db = self.session_factory()
        try:
            row = GpaHistory(user_id=user_id, gpa=value, label=label)
            db.add(row)
            db.commit()
            # Only picks up the store-assigned created_at; no dedup lookup
            db.refresh(row)
            logger.debug("appended history %r=%s for %s", label, value, user_id)
            return HistoryEntryRead(label=row.label or "", value=row.gpa, created_at=row.created_at)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError("append_history_entry", user_id, str(e)) from e
        finally:
            db.close()

    def list_history_entries(self, user_id: str) -> list[HistoryEntryRead]:
        """History oldest to newest."""
        db = self.session_factory()
        try:
            rows = (
                db.query(GpaHistory)
                .filter(GpaHistory.user_id == user_id)
                .order_by(GpaHistory.created_at, GpaHistory.id)
                .all()
            )
            return [
                HistoryEntryRead(
                    label=history_label(r.label, r.created_at, settings.timezone),
                    value=r.gpa,
                    created_at=r.created_at,
                )
                for r in rows
            ]
        except SQLAlchemyError as e:
            raise PersistenceError("list_history_entries", user_id, str(e)) from e
        finally:
            db.close()
