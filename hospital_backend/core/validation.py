"""Shared invariant checks used by the scheduling, admission and inventory rules."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from django.db.models import Model
from django.utils import timezone

from hospital_backend.core.exceptions import Conflict, ConflictError, InvalidInput
from hospital_backend.core.repositories import HospitalRepository


def ensure_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware and in local timezone."""
    if timezone.is_aware(dt):
        return timezone.localtime(dt)
    return timezone.make_aware(dt, timezone.get_current_timezone())


def ensure_required(value: Any, *, field: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInput(f'{field} is required', field=field)


def ensure_unique(
    repo: HospitalRepository,
    model: type[Model],
    field: str,
    value: Any,
    *,
    exclude_id: Any = None,
) -> None:
    """Reject ``value`` if another ``model`` row already holds it in ``field``."""
    if value is None:
        return
    if repo.exists_by_unique_field(model, field, value, exclude_id=exclude_id):
        raise ConflictError(
            [Conflict(
                type='duplicate_value',
                model=model.__name__,
                message=f'{model.__name__} with {field}={value!r} already exists',
                meta={'field': field, 'value': value},
            )],
            message=f'{field} must be unique',
        )


def ensure_not_in_future(value: date | None, today: date, *, field: str) -> None:
    if value is not None and value > today:
        raise InvalidInput(f'{field} must not be in the future', field=field)


def ensure_date_order(start: date, end: date | None, *, field: str, strict: bool = False) -> None:
    """Reject ``end`` before ``start`` (or equal to it when ``strict``)."""
    if end is None:
        return
    if end < start or (strict and end == start):
        relation = 'after' if strict else 'on or after'
        raise InvalidInput(f'{field} must be {relation} {start.isoformat()}', field=field)


def ensure_positive(value: int, *, field: str) -> None:
    if value is None or value <= 0:
        raise InvalidInput(f'{field} must be greater than zero', field=field)


def ensure_non_negative(value: int, *, field: str) -> None:
    if value is None or value < 0:
        raise InvalidInput(f'{field} must not be negative', field=field)


def ensure_choice(value: str, choices: Iterable[str], *, field: str) -> None:
    allowed = list(choices)
    if value not in allowed:
        raise InvalidInput(f'{field} must be one of {", ".join(allowed)}', field=field)
