"""Access to the ``HOSPITAL_*`` settings used by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULT_WORKING_HOURS_START = '08:00'
DEFAULT_WORKING_HOURS_END = '18:00'
DEFAULT_SLOT_MINUTES = 30
DEFAULT_EXPIRY_HORIZON_DAYS = 30


@dataclass(frozen=True)
class WorkingHours:
    """Daily window in which appointments may be scheduled; ``end`` is exclusive."""
    start: time
    end: time

    def __post_init__(self):
        if self.start >= self.end:
            raise ImproperlyConfigured(
                f'Working hours start {self.start} must be before end {self.end}'
            )

    def contains(self, value: time) -> bool:
        return self.start <= value < self.end


def _parse_time(value, setting: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ImproperlyConfigured(f'{setting} must be HH:MM, got {value!r}') from exc


def _parse_int(value, setting: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ImproperlyConfigured(f'{setting} must be an integer, got {value!r}') from exc


def _section(name: str) -> dict:
    return getattr(settings, name, None) or {}


def get_working_hours() -> WorkingHours:
    cfg = _section('HOSPITAL_SCHEDULING')
    return WorkingHours(
        start=_parse_time(cfg.get('WORKING_HOURS_START', DEFAULT_WORKING_HOURS_START), 'WORKING_HOURS_START'),
        end=_parse_time(cfg.get('WORKING_HOURS_END', DEFAULT_WORKING_HOURS_END), 'WORKING_HOURS_END'),
    )


def get_slot_minutes() -> int:
    minutes = _parse_int(
        _section('HOSPITAL_SCHEDULING').get('SLOT_MINUTES', DEFAULT_SLOT_MINUTES), 'SLOT_MINUTES',
    )
    if minutes <= 0:
        raise ImproperlyConfigured('SLOT_MINUTES must be positive')
    return minutes


def get_expiry_horizon_days() -> int:
    days = _parse_int(
        _section('HOSPITAL_INVENTORY').get('EXPIRY_HORIZON_DAYS', DEFAULT_EXPIRY_HORIZON_DAYS),
        'EXPIRY_HORIZON_DAYS',
    )
    if days < 0:
        raise ImproperlyConfigured('EXPIRY_HORIZON_DAYS must not be negative')
    return days
