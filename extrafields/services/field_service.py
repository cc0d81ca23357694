"""Field registry: create, read, update and delete custom field definitions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from extrafields.exceptions import FieldNotFoundError, ValidationError
from extrafields.i18n import Lexicon
from extrafields.models.field import Field
from extrafields.models.value import FieldValue

logger = logging.getLogger(__name__)

_default_lexicon = Lexicon()


@dataclass
class FieldError:
    """A validation message scoped to one input field."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"id": self.field, "msg": self.message}


def normalize_name(name: str | None) -> str:
    return (name or "").strip()


async def validate_field_name(
    db: AsyncSession,
    name: str | None,
    exclude_id: int | None = None,
    lexicon: Callable[..., str] | None = None,
) -> list[FieldError]:
    """
    Check that a field name is present and not used by another field.

    This only reads. ``exclude_id`` is the field being updated, so a field
    may keep its own name.
    """
    lexicon = lexicon or _default_lexicon
    name = normalize_name(name)
    if not name:
        return [FieldError("name", lexicon("extrafields.field_err_ns_name"))]

    query = select(Field.id).where(Field.name == name)
    if exclude_id is not None:
        query = query.where(Field.id != exclude_id)
    result = await db.execute(query.limit(1))
    if result.scalar_one_or_none() is not None:
        return [FieldError("name", lexicon("extrafields.field_err_ae", name=name))]
    return []


async def get_field(db: AsyncSession, field_id: int) -> Field | None:
    """Get a field by ID."""
    result = await db.execute(select(Field).where(Field.id == field_id))
    return result.scalar_one_or_none()


async def get_field_by_name(db: AsyncSession, name: str) -> Field | None:
    result = await db.execute(select(Field).where(Field.name == name))
    return result.scalar_one_or_none()


async def get_fields(
    db: AsyncSession,
    search: str | None = None,
    skip: int = 0,
    limit: int | None = None,
) -> list[Field]:
    """Get fields ordered by rank, optionally filtered by a name fragment."""
    query = select(Field)
    if search:
        query = query.where(Field.name.contains(search))
    query = query.order_by(Field.rank, Field.id).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def count_fields(db: AsyncSession, search: str | None = None) -> int:
    query = select(func.count()).select_from(Field)
    if search:
        query = query.where(Field.name.contains(search))
    result = await db.execute(query)
    return result.scalar_one()


async def save_field(db: AsyncSession, field: Field, lexicon: Callable[..., str] | None = None) -> Field:
    """
    Persist a new or modified field.

    A unique-name violation raced in by another writer is reported as a
    ValidationError, like the one the validation phase would have raised.
    """
    name = field.name
    db.add(field)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Integrity error while saving field {name!r}: {e.orig}")
        raise ValidationError(
            (lexicon or _default_lexicon)("extrafields.field_err_ae", name=name),
            field="name",
        ) from e
    await db.refresh(field)
    return field


async def remove_field(db: AsyncSession, field: Field) -> None:
    """Delete a field together with every value stored for it."""
    await db.execute(delete(FieldValue).where(FieldValue.field_id == field.id))
    await db.delete(field)
    await db.commit()


async def create_field(
    db: AsyncSession,
    name: str,
    description: str | None = "",
    rank: int | None = 0,
) -> Field:
    """Create a new field after validating its name."""
    name = normalize_name(name)
    errors = await validate_field_name(db, name)
    if errors:
        raise ValidationError(errors[0].message, field=errors[0].field)

    field = Field(name=name, description=description or "", rank=rank or 0)
    field = await save_field(db, field)
    logger.info(f"Created field {field.id} ({field.name!r})")
    return field


async def update_field(
    db: AsyncSession,
    field_id: int,
    name: str,
    description: str | None = None,
    rank: int | None = None,
) -> Field:
    """Rename or re-rank a field. ``None`` keeps the current description/rank."""
    field = await get_field(db, field_id)
    if not field:
        raise FieldNotFoundError(field_id)

    name = normalize_name(name)
    errors = await validate_field_name(db, name, exclude_id=field_id)
    if errors:
        raise ValidationError(errors[0].message, field=errors[0].field)

    field.name = name
    if description is not None:
        field.description = description
    if rank is not None:
        field.rank = rank
    return await save_field(db, field)


async def delete_field(db: AsyncSession, field_id: int) -> Field:
    """Delete a field and its values. Returns the deleted field."""
    field = await get_field(db, field_id)
    if not field:
        raise FieldNotFoundError(field_id)

    await remove_field(db, field)
    logger.info(f"Deleted field {field_id} ({field.name!r}) and its values")
    return field
