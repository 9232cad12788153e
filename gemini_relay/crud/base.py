# gemini_relay/crud/base.py
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    def __init__(self, model: Type[ModelType]):
        """
        CRUD object with default async methods to Create and Read.

        Each write commits on its own, so every call is atomic
        but a sequence of calls is not.
        """
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        result = await db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, **values: Any) -> ModelType:
        db_obj = self.model(**values)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj
