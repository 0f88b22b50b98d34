"""Validation helpers shared by every write path. All raise ValidationError."""

from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ValidationError


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def require_fields(data: Mapping[str, Any], fields: Sequence[str]) -> None:
    """Reject when any of `fields` is absent or blank; names every missing one."""
    missing = [name for name in fields if _is_missing(data.get(name))]
    if missing:
        raise ValidationError("Required fields are missing", field=", ".join(missing))


def require_one_of(data: Mapping[str, Any], fields: Sequence[str]) -> None:
    if all(_is_missing(data.get(name)) for name in fields):
        raise ValidationError("One of these fields is required", field="|".join(fields))


def ensure_in_range(
    value: Optional[Decimal],
    field: str,
    minimum: Optional[Decimal] = None,
    maximum: Optional[Decimal] = None,
    exclusive_minimum: bool = False,
) -> None:
    if value is None:
        return
    if minimum is not None and (value < minimum or (exclusive_minimum and value == minimum)):
        raise ValidationError(f"{field} is out of range", field=field, value=str(value))
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field} is out of range", field=field, value=str(value))


async def ensure_exists(session: AsyncSession, model: Any, value: Any, field: str, label: str) -> None:
    """Explicit FK check before a write, so the caller sees the field name."""
    found = (await session.execute(select(model.id).where(model.id == value))).scalar_one_or_none()
    if found is None:
        raise ValidationError(f"Referenced {label} does not exist", field=field, value=str(value))
