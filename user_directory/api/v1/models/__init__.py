from .user_role import UserRole
from .users import User


__all__ = [
    "User",
    "UserRole",
]
