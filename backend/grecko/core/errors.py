class PersistenceError(Exception):
    """The store rejected a write (or a read) for a user.

    Raised from the store adapter with the underlying database error chained
    as ``__cause__``.
    """

    def __init__(self, operation: str, user_id: str, message: str | None = None):
        self.operation = operation
        self.user_id = user_id
        detail = message or "store rejected the request"
        super().__init__(f"{operation} failed for user {user_id}: {detail}")


class SessionNotFound(Exception):
    """No goal session is open for the user."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"No active goal session for user {user_id}")
