from .base import Base
from .exceptions import AppError, InvalidUserError, UserNotFoundError, PersistenceConflictError

__all__ = [
    "Base",
    "AppError",
    "InvalidUserError",
    "UserNotFoundError",
    "PersistenceConflictError",
]
