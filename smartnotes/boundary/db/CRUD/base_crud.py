"""
Generic CRUD base for the retrieval tables.

Model-specific classes add owner-scoped reads and upserts on top of the
plain insert defined here. Callers own the transaction: nothing in
this layer commits.

Dependencies: sqlalchemy
System role: Foundation for document, chunk and chat history CRUD
"""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from smartnotes.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Insert for one mapped model class."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert a row and load server-side defaults.

        Args:
            session: Async database session
            **kwargs: Column values

        Returns:
            The flushed instance with id and timestamps populated
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance
