"""Store error hierarchy for database backends.

Backend-specific failures are wrapped in a StoreError subclass.
Enrollment domain errors are never wrapped.
"""


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConnectionError(StoreError):
    """Raised when the database cannot be reached or a query fails.

    Examples:
        - Connection timeout
        - Server unavailable
        - Query aborted by the server
    """

    pass
