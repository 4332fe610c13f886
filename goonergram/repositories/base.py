"""
Base repository with common CRUD operations.
All repositories should extend this class for database access.
"""
from typing import Generic, TypeVar, Type, Optional, List

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from goonergram.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Provides generic database operations that can be reused across all repositories.
    Writes are flushed, never committed; the caller owns the transaction.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Model field values

        Returns:
            Created model instance

        Example:
            ```python
            story = await story_repo.create(user_id=user_id, content="hi", expires_at=expiry)
            ```
        """
        instance = self.model(**kwargs)
        self.db.add(instance)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def get(self, id: str) -> Optional[ModelType]:
        """
        Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance or None if not found

        Example:
            ```python
            post = await post_repo.get(post_id)
            if post:
                print(post.content)
            ```
        """
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_many(self, ids: List[str]) -> List[ModelType]:
        """
        Get multiple records by IDs, in no particular order.

        Args:
            ids: List of record IDs

        Returns:
            List of model instances

        Example:
            ```python
            users = await user_repo.get_many([id1, id2, id3])
            ```
        """
        if not ids:
            return []

        result = await self.db.execute(
            select(self.model).where(self.model.id.in_(ids))
        )
        return list(result.scalars().all())

    async def exists(self, id: str) -> bool:
        """
        Check if a record exists.

        Args:
            id: Record ID

        Returns:
            True if exists, False otherwise

        Example:
            ```python
            if not await user_repo.exists(partner_id):
                raise HTTPException(status_code=404, detail="User not found")
            ```
        """
        result = await self.db.execute(
            select(func.count()).select_from(self.model).where(self.model.id == id)
        )
        count = result.scalar()
        return count > 0

    async def count(self, **filters) -> int:
        """
        Count records matching filters.

        Args:
            **filters: Filter conditions

        Returns:
            Number of matching records

        Example:
            ```python
            unread = await notification_repo.count(user_id=user_id, is_read=False)
            ```
        """
        query = select(func.count()).select_from(self.model)

        for key, value in filters.items():
            if hasattr(self.model, key):
                query = query.where(getattr(self.model, key) == value)

        result = await self.db.execute(query)
        return result.scalar()
