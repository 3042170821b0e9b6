from grecko.core.app_logger import get_logger
from grecko.schemas.gpa import HistoryEntryRead
from grecko.services.store import GoalStore

logger = get_logger("history")


class GpaHistoryRecorder:
    """Appends GPA snapshots to a user's persisted trend.

    No read-back and no deduplication: every call is a new row.
    """

    def __init__(self, store: GoalStore):
        self.store = store

    def record_snapshot(self, user_id: str, gpa: float, label: str) -> HistoryEntryRead:
        # PersistenceError propagates; callers decide how to report it
        entry = self.store.append_history_entry(user_id, label, gpa)
        logger.info("recorded GPA snapshot %r (%.2f) for %s", label, gpa, user_id)
        return entry
