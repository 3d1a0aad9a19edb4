from functools import lru_cache
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from user_directory.core.repositories import BaseRepository
from user_directory.api.v1.models import User as UserModel


class UserRepository(BaseRepository[UserModel]):
    """
    Repository for the User model. Roles are loaded eagerly with every user
    through the relationship's selectin strategy.
    """
    def __init__(self):
        super().__init__(UserModel)

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[UserModel]:
        """
        Retrieve a User by email.

        Args:
            db: Database session
            email: Exact email address

        Returns:
            UserModel ORM instance or None if not found
        """
        result = await db.execute(select(self.model).where(self.model.email == email))
        return result.scalars().first()

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[UserModel]:
        """
        Retrieve a User by exact name.

        Names are not unique; when several users share one, the oldest (lowest id) wins.
        """
        query = select(self.model).where(self.model.name == name).order_by(self.model.id)
        result = await db.execute(query)
        return result.scalars().first()


@lru_cache()
def get_user_repository() -> UserRepository:
    return UserRepository()
