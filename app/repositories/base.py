"""
Generic async CRUD shared by every repository.
Writes commit immediately and roll back the session on failure.
"""

from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Select, select, func
from app.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """CRUD for one model class bound to a request-scoped session."""

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    @asynccontextmanager
    async def _writing(self, action: str):
        """Commit the enclosed changes, or roll back and re-raise."""
        try:
            yield
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"{self.model_name} {action} failed: {e}")
            raise

    def _apply_filters(self, query: Select, filters: Optional[Dict[str, Any]]) -> Select:
        """Equality filters on model columns; unknown keys are skipped."""
        for field, value in (filters or {}).items():
            column = getattr(self.model, field, None)
            if column is not None:
                query = query.where(column == value)
        return query

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert a row built from ``obj_in``.

        Raises:
            SQLAlchemyError: If the insert fails (the session is rolled back)
        """
        db_obj = self.model(**obj_in)
        async with self._writing("create"):
            self.db.add(db_obj)
        await self.db.refresh(db_obj)
        logger.debug(f"{self.model_name} {db_obj.id} created")
        return db_obj

    async def get_by_id(self, id: int, refresh: bool = False) -> Optional[ModelType]:
        """
        Row by primary key, or None.

        ``refresh`` overwrites a stale copy already held in the identity map.
        """
        query = select(self.model).where(self.model.id == id)
        if refresh:
            query = query.execution_options(populate_existing=True)
        return (await self.db.execute(query)).scalar_one_or_none()

    async def get_multi(
        self,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None
    ) -> List[ModelType]:
        """Newest first, with optional equality filters."""
        query = self._apply_filters(select(self.model), filters)
        query = (
            query.order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update(self, id: int, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Write the keys present in ``obj_in``; an explicit None clears a nullable column.

        Returns:
            The updated row, or None if it does not exist
        """
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return None

        async with self._writing(f"update of {id}"):
            for field, value in obj_in.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)
        await self.db.refresh(db_obj)
        logger.debug(f"{self.model_name} {id} updated")
        return db_obj

    async def delete(self, id: int) -> bool:
        """Delete through the ORM so relationship cascades run. False if missing."""
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return False

        async with self._writing(f"delete of {id}"):
            await self.db.delete(db_obj)
        logger.debug(f"{self.model_name} {id} deleted")
        return True

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        query = self._apply_filters(select(func.count(self.model.id)), filters)
        return (await self.db.execute(query)).scalar() or 0

    async def exists(self, id: int) -> bool:
        return await self.count({"id": id}) > 0

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """
        First row whose ``field`` equals ``value``.

        Raises:
            ValueError: If the model has no such column
        """
        column = getattr(self.model, field, None)
        if column is None:
            raise ValueError(f"Field '{field}' does not exist on {self.model_name}")
        result = await self.db.execute(select(self.model).where(column == value).limit(1))
        return result.scalar_one_or_none()
