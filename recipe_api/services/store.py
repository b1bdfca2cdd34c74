"""Document-style stores over the ORM models.

Each store exposes the small set of operations the routes need: look up by
field, list, insert, update by identity and delete by identity. Records are
addressed by their generated UUID; callers may pass the raw path value and an
unparsable one behaves like a missing record.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_api.core.exceptions import StoreError
from recipe_api.core.identity import to_identifier
from recipe_api.db.base import Base
from recipe_api.models import Recipe, User


ModelT = TypeVar("ModelT", bound=Base)


class DuplicateKeyError(Exception):
    """An insert or update collided with a unique field."""

    def __init__(self, model: str, fields: tuple[str, ...]):
        self.model = model
        self.fields = fields
        super().__init__(f"duplicate key on {model}({', '.join(fields)})")


class MissingReferenceError(Exception):
    """An insert or update pointed a foreign key at a record that does not exist."""

    def __init__(self, model: str):
        self.model = model
        super().__init__(f"{model} references a missing record")


class DocumentStore(Generic[ModelT]):
    model: type[ModelT]
    unique_fields: tuple[str, ...] = ()

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, identifier: Any) -> ModelT | None:
        record_id = to_identifier(identifier)
        if record_id is None:
            return None
        return await self.find_one(id=record_id)

    async def find_one(self, **criteria: Any) -> ModelT | None:
        stmt = select(self.model).filter_by(**criteria).limit(1)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError() from e
        return result.scalar_one_or_none()

    async def find_all(self) -> list[ModelT]:
        try:
            result = await self.session.execute(select(self.model))
        except SQLAlchemyError as e:
            raise StoreError() from e
        return list(result.scalars().all())

    async def insert(self, **values: Any) -> ModelT:
        record = self.model(**values)
        self.session.add(record)
        await self._flush(record)
        return record

    async def update(self, record: ModelT, changes: dict[str, Any]) -> ModelT:
        for k, v in changes.items():
            setattr(record, k, v)
        await self._flush(record)
        return record

    async def delete(self, identifier: Any) -> bool:
        record_id = to_identifier(identifier)
        if record_id is None:
            return False
        try:
            result = await self.session.execute(delete(self.model).where(self.model.id == record_id))
        except SQLAlchemyError as e:
            raise StoreError() from e
        return result.rowcount > 0

    async def _flush(self, record: ModelT) -> None:
        # Read from __dict__: after a rollback the attributes are expired
        own_id = record.__dict__.get("id")
        unique_values = {f: record.__dict__.get(f) for f in self.unique_fields}
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            taken = await self._taken_fields(unique_values, own_id)
            if taken:
                raise DuplicateKeyError(self.model.__name__, taken) from e
            # Not a unique collision: the only other constraints are foreign keys
            raise MissingReferenceError(self.model.__name__) from e
        except SQLAlchemyError as e:
            raise StoreError() from e

    async def _taken_fields(self, values: dict[str, Any], own_id: Any) -> tuple[str, ...]:
        """Unique fields whose value already belongs to another record."""
        taken = []
        for field, value in values.items():
            if value is None:
                continue
            stmt = select(self.model.id).where(getattr(self.model, field) == value)
            if own_id is not None:
                stmt = stmt.where(self.model.id != own_id)
            try:
                result = await self.session.execute(stmt.limit(1))
            except SQLAlchemyError as e:
                raise StoreError() from e
            if result.first() is not None:
                taken.append(field)
        return tuple(taken)


class UserStore(DocumentStore[User]):
    model = User
    unique_fields = ("email",)

    async def find_by_email(self, email: str) -> User | None:
        return await self.find_one(email=email.strip().lower())


class RecipeStore(DocumentStore[Recipe]):
    model = Recipe
    unique_fields = ("name",)

    async def find_all(self) -> list[Recipe]:
        try:
            result = await self.session.execute(select(Recipe).order_by(Recipe.name))
        except SQLAlchemyError as e:
            raise StoreError() from e
        return list(result.scalars().all())
