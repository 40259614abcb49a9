from typing import Generic, TypeVar, Type, Optional, List, Any, Dict
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from app.utils.logging import get_logger

# Define a generic type for SQLAlchemy models
ModelType = TypeVar("ModelType")

LOGGER = get_logger(__name__)


class BaseRepository(Generic[ModelType]):
    """Base repository implementing common CRUD operations.

    Writes commit immediately, so every create or update is visible to the
    next lookup in the same request.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session
            model: The SQLAlchemy model class this repository manages
        """
        self.session = session
        self.model = model
        self.logger = LOGGER

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """Get a record by its integer ID.

        Args:
            id: The primary key of the record

        Returns:
            The record if found, None otherwise
        """
        try:
            query = select(self.model).where(self.model.id == id)
            result = await self.session.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error retrieving {self.model.__name__} by ID {id}: {str(e)}",
                exc_info=True
            )
            raise

    async def find_one(self, **filters: Any) -> Optional[ModelType]:
        """Get the first record whose columns equal the given values.

        Matching is exact; no case folding or trimming is applied.

        Args:
            **filters: column_name=value pairs

        Returns:
            The first matching record, None if there is none
        """
        try:
            query = select(self.model)
            for field, value in filters.items():
                query = query.where(getattr(self.model, field) == value)
            result = await self.session.execute(query.limit(1))
            return result.scalars().first()
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error finding {self.model.__name__}: {str(e)}",
                exc_info=True,
                extra={"filters": {k: str(v) for k, v in filters.items()}}
            )
            raise

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 200,
        filters: Optional[Dict[str, Any]] = None
    ) -> List[ModelType]:
        """Get all records with optional pagination and filtering.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            filters: Dictionary of field_name: value to filter by

        Returns:
            List of records
        """
        try:
            query = select(self.model)

            if filters:
                for field, value in filters.items():
                    if hasattr(self.model, field):
                        query = query.where(getattr(self.model, field) == value)

            query = query.offset(skip).limit(limit)
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error retrieving all {self.model.__name__}: {str(e)}",
                exc_info=True
            )
            raise

    async def create(self, **kwargs) -> ModelType:
        """Create and commit a new record.

        The instance is refreshed after commit so server-side defaults are
        loaded without a lazy load later.

        Args:
            **kwargs: Fields and values for the new record

        Returns:
            The created record
        """
        try:
            instance = self.model(**kwargs)
            self.session.add(instance)
            await self.session.flush()
            await self.session.commit()
            await self.session.refresh(instance)
            return instance
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error creating {self.model.__name__}: {str(e)}",
                exc_info=True
            )
            raise

    async def update(self, id: int, **kwargs) -> Optional[ModelType]:
        """Update an existing record.

        Args:
            id: The primary key of the record to update
            **kwargs: Fields and values to update

        Returns:
            The updated record if found, None otherwise
        """
        try:
            instance = await self.get_by_id(id)
            if not instance:
                return None

            for key, value in kwargs.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)

            if hasattr(instance, "updated_at"):
                setattr(instance, "updated_at", datetime.now(timezone.utc))

            await self.session.flush()
            await self.session.commit()
            return instance
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error updating {self.model.__name__} {id}: {str(e)}",
                exc_info=True
            )
            raise

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records matching filters.

        Args:
            filters: Dictionary of field_name: value to filter by

        Returns:
            Count of matching records
        """
        try:
            query = select(func.count()).select_from(self.model)

            if filters:
                for field, value in filters.items():
                    if hasattr(self.model, field):
                        query = query.where(getattr(self.model, field) == value)

            result = await self.session.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error counting {self.model.__name__}: {str(e)}",
                exc_info=True
            )
            raise
