"""
Exception hierarchy for the bookshelf services.

Services raise these; the API layer maps them to HTTP responses in
``bookclub.main``. Nothing here is retried automatically.
"""


class BookClubError(Exception):
    """Base class for every error a service operation can raise."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookClubError):
    """
    A required field is missing or a value is out of range.

    Examples:
        >>> raise ValidationError("Title and author are required.")
        >>> raise ValidationError("Rating must be between 1 and 5")
    """

    status_code = 422


class NotFoundError(BookClubError):
    """A referenced id does not exist."""

    status_code = 404


class ConflictError(BookClubError):
    """
    A uniqueness constraint rejected a write.

    Toggle and upsert operations catch this and treat it as "already in
    that state". It only reaches a caller when a concurrent Current-book
    transition won the race; the losing transaction is rolled back.
    """

    status_code = 409


class PermissionDeniedError(BookClubError):
    """A non-admin attempted an admin-only mutation."""

    status_code = 403


class StoreError(BookClubError):
    """The underlying database or its transport failed."""

    status_code = 503
