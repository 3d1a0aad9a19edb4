from typing import Optional

from user_directory.api.v1.models import User as UserModel
from user_directory.api.v1.schemas import UserDto


def to_dto(user: Optional[UserModel]) -> Optional[UserDto]:
    """Convert a User ORM instance to its wire schema. Absent input maps to None."""
    if user is None:
        return None
    return UserDto(
        id=user.id,
        name=user.name,
        email=user.email,
        roles=list(user.roles) if user.roles is not None else [],
    )


def to_entity(user_dto: Optional[UserDto]) -> Optional[UserModel]:
    """Build a transient User ORM instance from the wire schema. Absent input maps to None."""
    if user_dto is None:
        return None
    user = UserModel(id=user_dto.id, name=user_dto.name, email=user_dto.email)
    user.roles = list(user_dto.roles) if user_dto.roles is not None else []
    return user
