"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions.
"""

from typing import Generic, TypeVar, Type, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from quotegen.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations over a string-keyed table."""

    def __init__(self, model: Type[ModelType], session: AsyncSession, key: str = "id"):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
            key: Name of the primary key attribute
        """
        self.model = model
        self.session = session
        self.key = key
        self.key_column = getattr(model, key)

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def upsert(self, **kwargs) -> ModelType:
        """
        Insert a record, or overwrite every given attribute if the key exists.

        Args:
            **kwargs: Model attributes including the primary key

        Returns:
            Persisted model instance
        """
        instance = await self.session.merge(self.model(**kwargs))
        await self.session.flush()
        return instance

    async def get(self, id: str) -> Optional[ModelType]:
        """
        Get a record by key.

        Args:
            id: Record key

        Returns:
            Model instance or None
        """
        result = await self.session.execute(
            select(self.model).where(self.key_column == id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[ModelType]:
        """
        List every record ordered by key.

        Returns:
            List of model instances
        """
        result = await self.session.execute(
            select(self.model).order_by(self.key_column)
        )
        return list(result.scalars().all())

    async def update(self, id: str, **kwargs) -> Optional[ModelType]:
        """
        Update a record.

        Args:
            id: Record key
            **kwargs: Attributes to update

        Returns:
            Updated model instance or None
        """
        await self.session.execute(
            update(self.model)
            .where(self.key_column == id)
            .values(**kwargs)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        return await self.get(id)

    async def delete(self, id: str) -> bool:
        """
        Delete a record.

        Args:
            id: Record key

        Returns:
            True if deleted, False if not found
        """
        result = await self.session.execute(
            delete(self.model).where(self.key_column == id)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def delete_all(self) -> int:
        """
        Delete every record.

        Returns:
            Number of rows removed
        """
        result = await self.session.execute(delete(self.model))
        await self.session.flush()
        return result.rowcount

    async def replace_all(self, records: List[dict]) -> List[ModelType]:
        """
        Clear the table, then insert all given records.

        Args:
            records: Attribute dicts for the new contents

        Returns:
            Created model instances
        """
        await self.delete_all()
        # The identity map still holds the deleted rows
        self.session.expunge_all()
        # Later records win when a key repeats
        by_key = {record[self.key]: record for record in records}
        instances = [self.model(**record) for record in by_key.values()]
        self.session.add_all(instances)
        await self.session.flush()
        return instances
