import logging
from functools import lru_cache
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from user_directory.api.v1.mappers import to_dto, to_entity
from user_directory.api.v1.repositories import UserRepository, get_user_repository
from user_directory.api.v1.schemas import UserDto
from user_directory.core.models import InvalidUserError, UserNotFoundError, PersistenceConflictError

logger = logging.getLogger(__name__)


class UserService:
    """
    Business rules for the User resource.

    Validates payloads, enforces email uniqueness and maps between the wire
    schema and the ORM model. Errors are raised as domain exceptions; turning
    them into HTTP responses is left to the API layer.
    """

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def add_user(self, db: AsyncSession, user_dto: UserDto) -> UserDto:
        """
        Create a new user.

        Raises:
            InvalidUserError: if the payload is invalid or the email is already taken.
        """
        self._validate_user_dto(user_dto)
        await self._check_email_uniqueness(db, user_dto.email)

        user = to_entity(user_dto)
        # The store assigns the id
        user.id = None
        try:
            saved = await self.user_repository.save(db, user)
        except PersistenceConflictError:
            logger.error(f"Error saving user with email {user_dto.email}: integrity constraint violated")
            raise InvalidUserError("User data is invalid or violates integrity constraints.")

        logger.info(f"User with email {saved.email} created successfully")
        return to_dto(saved)

    async def update_user(self, db: AsyncSession, user_id: int, user_dto: UserDto) -> UserDto:
        """
        Overwrite name, email and roles of an existing user.

        The email uniqueness check only runs when the email actually changes.

        Raises:
            InvalidUserError: if the payload is invalid or the new email is taken.
            UserNotFoundError: if no user has the given id.
        """
        self._validate_user_dto(user_dto)

        user = await self.user_repository.get_by_id(db, user_id)
        if user is None:
            logger.warning(f"User with ID {user_id} not found for update")
            raise UserNotFoundError(f"User with ID {user_id} not found.")

        if user.email != user_dto.email:
            await self._check_email_uniqueness(db, user_dto.email)

        user.name = user_dto.name
        user.email = user_dto.email
        user.roles = list(user_dto.roles)
        try:
            updated = await self.user_repository.save(db, user)
        except PersistenceConflictError:
            logger.error(f"Error updating user with ID {user_id}: integrity constraint violated")
            raise InvalidUserError("User data is invalid or violates integrity constraints.")

        logger.info(f"User with ID {user_id} updated successfully")
        return to_dto(updated)

    async def delete_user(self, db: AsyncSession, user_id: int) -> bool:
        """Delete a user. Returns False, without raising, when the id does not exist."""
        user = await self.user_repository.get_by_id(db, user_id)
        if user is None:
            logger.warning(f"User with ID {user_id} not found for deletion")
            return False

        await self.user_repository.delete_by_id(db, user_id)
        logger.info(f"User with ID {user_id} deleted successfully")
        return True

    async def find_user_by_id(self, db: AsyncSession, user_id: int) -> UserDto:
        user = await self.user_repository.get_by_id(db, user_id)
        if user is None:
            logger.warning(f"User with ID {user_id} not found")
            raise UserNotFoundError(f"User with ID {user_id} not found.")
        return to_dto(user)

    async def find_user_by_name(self, db: AsyncSession, name: str) -> Optional[UserDto]:
        """Look a user up by name. A miss returns None rather than raising."""
        return to_dto(await self.user_repository.get_by_name(db, name))

    async def get_all_users(self, db: AsyncSession) -> List[UserDto]:
        users = await self.user_repository.get_all(db)
        logger.info(f"Fetched {len(users)} users from the database")
        return [to_dto(user) for user in users]

    async def _check_email_uniqueness(self, db: AsyncSession, email: str) -> None:
        if await self.user_repository.get_by_email(db, email) is not None:
            logger.error(f"User with email {email} already exists")
            raise InvalidUserError("A user with this email already exists.")

    @staticmethod
    def _validate_user_dto(user_dto: Optional[UserDto]) -> None:
        if user_dto is None or not user_dto.roles:
            logger.error("User data is invalid: missing roles.")
            raise InvalidUserError("User must have at least one role.")
        if user_dto.email is None:
            logger.error("User data is invalid: missing email.")
            raise InvalidUserError("Email cannot be null.")


@lru_cache()
def get_user_service() -> UserService:
    return UserService(get_user_repository())
