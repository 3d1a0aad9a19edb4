from .users import UserDto

__all__ = [
    "UserDto",
]
