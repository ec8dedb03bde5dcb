"""
Base repository with the common data-accessor operations.

Each operation runs in a session of its own taken from the factory passed to
the constructor. Reads return detached ORM objects (the factory is configured
with expire_on_commit=False), writes commit before returning.

Failures from the database driver are logged and re-raised as DatabaseError,
which the application renders as a generic 500 page.

Example:
    ```python
    from catalog.database import async_session_factory
    from catalog.repositories.author_repository import AuthorRepository

    repo = AuthorRepository(async_session_factory)
    author = await repo.find_by_id(author_id)
    ```
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import load_only

from catalog.database import Base
from catalog.exceptions import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


class Repository(Generic[T]):
    """
    Generic CRUD accessor for one model type.

    Type Parameters:
        T: The ORM model this repository manages. The model must have an `id`
           primary key column.

    Attributes:
        session_factory: Factory producing one AsyncSession per operation.
        model: The ORM class this repository manages.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], model: Type[T]):
        self.session_factory = session_factory
        self.model = model

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Opens a session and translates driver errors into DatabaseError."""
        async with self.session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    "Database error during %s on %s: %s",
                    operation,
                    self.model.__name__,
                    str(e),
                )
                raise DatabaseError(
                    context={
                        "operation": operation,
                        "model": self.model.__name__,
                        "original_error": type(e).__name__,
                    },
                ) from e

    async def find_by_id(self, id: uuid.UUID) -> Optional[T]:
        """
        Get a record by primary key.

        Returns:
            The record, or None when no row has this id.
        """
        async with self._session("find_by_id") as session:
            return await session.get(self.model, id)

    async def find(
        self,
        *criteria: Any,
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[Sequence[Any]] = None,
    ) -> List[T]:
        """
        Get all records matching the given SQL criteria.

        Args:
            *criteria: SQLAlchemy boolean expressions, ANDed together.
            columns: Projection. Only these attributes (plus the primary key)
                are loaded; touching any other attribute on a returned record
                raises once its session is closed.
            order_by: Ordering expressions.
        """
        stmt = select(self.model).where(*criteria)
        if columns:
            stmt = stmt.options(load_only(*(getattr(self.model, c) for c in columns)))
        if order_by:
            stmt = stmt.order_by(*order_by)

        async with self._session("find") as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def create(self, entity: T) -> T:
        """Insert a new record and return it with its generated id."""
        async with self._session("create") as session:
            session.add(entity)
            await session.commit()
            return entity

    async def find_by_id_and_update(self, id: uuid.UUID, values: Dict[str, Any]) -> Optional[T]:
        """
        Overwrite the given fields of the record at `id`.

        Returns:
            The updated record, or None when no row has this id.
        """
        async with self._session("find_by_id_and_update") as session:
            entity = await session.get(self.model, id)
            if entity is None:
                return None
            for field, value in values.items():
                setattr(entity, field, value)
            await session.commit()
            return entity

    async def find_by_id_and_remove(self, id: uuid.UUID, *guards: Any) -> bool:
        """
        Delete the record at `id` in a single statement.

        Args:
            *guards: Extra conditions that must also hold for the row to be
                deleted (evaluated by the database, in the same statement).

        Returns:
            True if a row was deleted. False if no row matched, a guard failed,
            or a foreign key constraint refused the delete.
        """
        stmt = (
            delete(self.model)
            .where(self.model.id == id, *guards)
            .execution_options(synchronize_session=False)
        )
        async with self._session("find_by_id_and_remove") as session:
            try:
                result = await session.execute(stmt)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.warning(
                    "Delete of %s %s refused by constraint: %s",
                    self.model.__name__,
                    id,
                    str(e.orig),
                )
                return False
            return result.rowcount > 0
