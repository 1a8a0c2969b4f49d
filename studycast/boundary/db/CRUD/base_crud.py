"""
Generic CRUD for content store tables.

Every method takes the caller's AsyncSession and never commits; the SQL
content store owns transaction boundaries.

Dependencies: sqlalchemy
System role: Shared query helpers for per-entity CRUD singletons
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studycast.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Insert, primary-key lookup, recency listing and partial update for one table."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Insert a row and return it with server defaults loaded.

        A duplicate id surfaces as IntegrityError on flush.
        """
        row = self.model(**values)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_recent(
        self,
        session: AsyncSession,
        *criteria: Any,
        order_column: Any,
        limit: int | None = None,
    ) -> Sequence[ModelT]:
        """
        Rows matching criteria, newest first by order_column.

        Args:
            session: Async database session
            *criteria: Where-clauses (owner, document, user filters)
            order_column: Timestamp column ordered descending
            limit: Row cap, None for all
        """
        stmt = select(self.model).where(*criteria).order_by(order_column.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession, *criteria: Any) -> int:
        """Number of rows matching criteria."""
        result = await session.execute(select(func.count()).select_from(self.model).where(*criteria))
        return result.scalar_one()

    async def update_by_id(self, session: AsyncSession, id: UUID, **values: Any) -> ModelT | None:
        """Apply a partial update and return the updated row, or None if the id is absent."""
        stmt = update(self.model).where(self.model.id == id).values(**values).returning(self.model)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
