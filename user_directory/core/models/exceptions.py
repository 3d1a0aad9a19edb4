class AppError(Exception):
    """Base for errors that the API translates into a JSON error body."""

    error: str = "Application error"
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidUserError(AppError):
    """User payload failed validation or would break email uniqueness."""
    error = "Invalid user"
    status_code = 400


class UserNotFoundError(AppError):
    """No user exists for the requested key."""
    error = "User not found"
    status_code = 404


class PersistenceConflictError(Exception):
    """Raised by repositories when the database rejects a write on an integrity constraint."""
