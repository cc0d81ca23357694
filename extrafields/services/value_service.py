"""Value store: the text of a field for a given resource."""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from extrafields.exceptions import FieldNotFoundError
from extrafields.models.field import Field
from extrafields.models.value import FieldValue

logger = logging.getLogger(__name__)

EMPTY_VALUE = ""

_CONFLICT_COLUMNS = ["field_id", "resource_id"]


def _upsert_statement(dialect_name: str, field_id: int, resource_id: int, value: str):
    """Build a single-statement insert-or-update, or None if the dialect has none."""
    row = {"field_id": field_id, "resource_id": resource_id, "value": value}

    if dialect_name in ("sqlite", "postgresql"):
        insert = sqlite_insert if dialect_name == "sqlite" else postgresql_insert
        stmt = insert(FieldValue).values(**row)
        return stmt.on_conflict_do_update(
            index_elements=_CONFLICT_COLUMNS,
            set_={"value": stmt.excluded["value"]},
        )
    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql_insert(FieldValue).values(**row)
        return stmt.on_duplicate_key_update(value=stmt.inserted["value"])
    return None


async def _find_value(db: AsyncSession, field_id: int, resource_id: int) -> FieldValue | None:
    result = await db.execute(
        select(FieldValue).where(
            FieldValue.field_id == field_id,
            FieldValue.resource_id == resource_id,
        )
    )
    return result.scalar_one_or_none()


async def _field_exists(db: AsyncSession, field_id: int) -> bool:
    result = await db.execute(select(Field.id).where(Field.id == field_id))
    return result.scalar_one_or_none() is not None


async def get_value(db: AsyncSession, field_id: int, resource_id: int) -> str:
    """Return the stored text, or the empty string when nothing is stored."""
    result = await db.execute(
        select(FieldValue.value).where(
            FieldValue.field_id == field_id,
            FieldValue.resource_id == resource_id,
        )
    )
    value = result.scalar_one_or_none()
    return value if value is not None else EMPTY_VALUE


async def set_value(db: AsyncSession, field_id: int, resource_id: int, value: str | None) -> bool:
    """
    Store ``value`` for the (field, resource) pair.

    Uses the dialect's native upsert so concurrent writers end up with a
    single row. Other dialects insert first and update on a unique-key
    conflict.
    """
    if not await _field_exists(db, field_id):
        raise FieldNotFoundError(field_id)

    value = value if value is not None else EMPTY_VALUE
    dialect_name = db.get_bind().dialect.name
    stmt = _upsert_statement(dialect_name, field_id, resource_id, value)

    if stmt is not None:
        await db.execute(stmt)
        await db.commit()
        return True

    existing = await _find_value(db, field_id, resource_id)
    if existing is None:
        db.add(FieldValue(field_id=field_id, resource_id=resource_id, value=value))
        try:
            await db.commit()
            return True
        except IntegrityError:
            # Another writer inserted the pair first
            await db.rollback()
            existing = await _find_value(db, field_id, resource_id)

    existing.value = value
    await db.commit()
    return True


async def delete_value(db: AsyncSession, field_id: int, resource_id: int) -> bool:
    """Remove the stored value. Returns False when there was none."""
    result = await db.execute(
        delete(FieldValue).where(
            FieldValue.field_id == field_id,
            FieldValue.resource_id == resource_id,
        )
    )
    await db.commit()
    return result.rowcount > 0


async def get_values_for_resource(db: AsyncSession, resource_id: int) -> dict[str, str]:
    """Map every field name to its value for one resource, in rank order."""
    result = await db.execute(
        select(Field.name, FieldValue.value)
        .select_from(Field)
        .outerjoin(
            FieldValue,
            (FieldValue.field_id == Field.id) & (FieldValue.resource_id == resource_id),
        )
        .order_by(Field.rank, Field.id)
    )
    return {name: value if value is not None else EMPTY_VALUE for name, value in result.all()}


async def count_values(db: AsyncSession, field_id: int | None = None) -> int:
    query = select(func.count()).select_from(FieldValue)
    if field_id is not None:
        query = query.where(FieldValue.field_id == field_id)
    result = await db.execute(query)
    return result.scalar_one()
