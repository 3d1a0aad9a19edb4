import logging
from typing import TypeVar, Generic, Optional, Type, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError

from user_directory.core.models import Base, PersistenceConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Async persistence gateway for one mapped model.

    Repositories are stateless; the request's AsyncSession is passed into every
    call. Writes commit before returning so each service call is one transaction.
    """

    def __init__(self, model: Type[T]):
        self.model = model

    async def save(self, db: AsyncSession, item: T) -> T:
        """Insert or update `item`. A new row gets its id assigned during the flush."""
        db.add(item)
        try:
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Saving {self.model.__name__}: integrity constraint violated: {e.orig}")
            raise PersistenceConflictError(f"Saving {self.model.__name__}: integrity constraint violated.") from e
        return item

    async def get_by_id(self, db: AsyncSession, item_id) -> Optional[T]:
        result = await db.execute(select(self.model).filter(self.model.id == item_id))
        return result.scalars().first()

    async def get_all(self, db: AsyncSession) -> List[T]:
        result = await db.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def delete_by_id(self, db: AsyncSession, item_id) -> bool:
        item = await self.get_by_id(db, item_id)
        if not item:
            return False
        try:
            await db.delete(item)
            await db.commit()
            return True
        except IntegrityError as e:
            await db.rollback()
            raise PersistenceConflictError(f"Deleting {self.model.__name__}: integrity constraint violated.") from e
