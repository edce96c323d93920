"""
Scheduling Engine.

Encapsulates the appointment decision logic: exact-instant conflict
detection, working-hours validation, free-slot enumeration and the status
state machine. Decision functions read through a ``HospitalRepository`` and
return unsaved ``Appointment`` instances; they never write.

Architecture Rules:
- "now" is always supplied by the caller; nothing here reads the wall clock
- All exceptions are custom types from core.exceptions
- ``record_*`` helpers are the only functions that persist, each inside
  one transaction holding a row lock on the contended resource
"""

from __future__ import annotations

import copy
import logging
from datetime import date, datetime, time, timedelta
from typing import Iterator

from django.db import transaction
from django.utils import timezone

from hospital_backend.appointments.models import Appointment
from hospital_backend.core.conf import WorkingHours, get_slot_minutes, get_working_hours
from hospital_backend.core.exceptions import (
    AlreadyInTerminalState,
    Conflict,
    ConflictError,
    IllegalTransition,
    InvalidInput,
    WorkingHoursViolation,
)
from hospital_backend.core.models import Doctor, Patient
from hospital_backend.core.repositories import DjangoRepository, HospitalRepository
from hospital_backend.core.validation import ensure_aware, ensure_choice, ensure_required

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helper Functions
# ---------------------------------------------------------------------------

def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open local-time range covering ``day``."""
    tz = timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(day, time.min), tz)
    end = timezone.make_aware(datetime.combine(day + timedelta(days=1), time.min), tz)
    return start, end


def _as_step(granularity: timedelta | int | None) -> timedelta:
    if granularity is None:
        return timedelta(minutes=get_slot_minutes())
    if isinstance(granularity, int):
        granularity = timedelta(minutes=granularity)
    if granularity <= timedelta(0):
        raise InvalidInput('slot granularity must be positive', field='granularity')
    return granularity


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_working_hours(
    at: datetime,
    *,
    doctor_id: int,
    working_hours: WorkingHours | None = None,
) -> None:
    """
    Validate that the local time of day of ``at`` lies in the working window.

    Raises:
        WorkingHoursViolation: If the time is outside working hours
    """
    hours = working_hours or get_working_hours()
    local_at = ensure_aware(at)
    if not hours.contains(local_at.time()):
        raise WorkingHoursViolation(
            doctor_id=doctor_id,
            date=local_at.date().isoformat(),
            time=local_at.time().isoformat(),
            window_start=hours.start.isoformat(),
            window_end=hours.end.isoformat(),
            message=(
                f'Requested time {local_at.time():%H:%M} is outside working hours '
                f'{hours.start:%H:%M}-{hours.end:%H:%M}'
            ),
        )


def check_appointment_conflicts(
    repo: HospitalRepository,
    *,
    doctor_id: int,
    at: datetime,
    exclude_appointment_id: int | None = None,
) -> list[Conflict]:
    """
    Find the doctor's active appointments sharing the exact instant ``at``.

    Cancelled and no-show appointments never conflict. There is no
    appointment duration, so only identical timestamps collide.

    Returns:
        List of Conflict objects. Empty list means no conflicts.
    """
    local_at = ensure_aware(at)
    same_day = repo.find_appointments(
        doctor_id=doctor_id,
        date_range=day_bounds(local_at.date()),
        statuses=Appointment.CONFLICT_STATUSES,
    )
    conflicts: list[Conflict] = []
    for appt in same_day:
        if appt.scheduled_at != local_at:
            continue
        if exclude_appointment_id is not None and appt.pk == exclude_appointment_id:
            continue
        conflicts.append(Conflict(
            type='doctor_conflict',
            model='Appointment',
            id=appt.pk,
            resource_id=doctor_id,
            message=f'Doctor already has appointment #{appt.pk} at {local_at.isoformat()}',
        ))
    return conflicts


# ---------------------------------------------------------------------------
# Decision Functions
# ---------------------------------------------------------------------------

def schedule_appointment(
    repo: HospitalRepository,
    *,
    patient_id: int,
    doctor_id: int,
    at: datetime,
    now: datetime,
    working_hours: WorkingHours | None = None,
) -> Appointment:
    """
    Decide whether a new appointment may be booked.

    Performs:
    1. Patient/doctor existence checks
    2. Future-time check against the caller-supplied ``now``
    3. Working hours validation
    4. Exact-instant conflict detection for the doctor

    Returns:
        An unsaved Appointment in state SCHEDULED

    Raises:
        EntityNotFound: If the patient or doctor does not exist
        InvalidInput: If ``at`` is not strictly after ``now``
        WorkingHoursViolation: If ``at`` is outside working hours
        ConflictError: If the doctor is already booked at ``at``
    """
    ensure_required(at, field='scheduled_at')
    ensure_required(now, field='now')
    repo.get_by_id(Patient, patient_id)
    repo.get_by_id(Doctor, doctor_id)

    at = ensure_aware(at)
    if at <= ensure_aware(now):
        raise InvalidInput('Appointment time must be in the future', field='scheduled_at')

    validate_working_hours(at, doctor_id=doctor_id, working_hours=working_hours)

    conflicts = check_appointment_conflicts(repo, doctor_id=doctor_id, at=at)
    if conflicts:
        raise ConflictError(conflicts, message='Doctor is already booked at the requested time')

    return Appointment(
        patient_id=patient_id,
        doctor_id=doctor_id,
        scheduled_at=at,
        status=Appointment.STATUS_SCHEDULED,
    )


def available_slots(
    repo: HospitalRepository,
    *,
    doctor_id: int,
    day: date,
    granularity: timedelta | int | None = None,
    working_hours: WorkingHours | None = None,
    now: datetime | None = None,
) -> Iterator[datetime]:
    """
    Lazily enumerate the doctor's free timestamps on ``day``.

    Candidates start at the beginning of working hours and advance by
    ``granularity`` (a timedelta, or minutes as int; defaults to the
    configured slot size) while before the end of working hours. Any
    timestamp held by a non-cancelled appointment is skipped. With ``now``,
    candidates not strictly after it are skipped too.

    Arguments are validated eagerly; the store is read on first iteration.
    Calling again yields a fresh, independent sequence.
    """
    repo.get_by_id(Doctor, doctor_id)
    step = _as_step(granularity)
    hours = working_hours or get_working_hours()
    return _iter_slots(
        repo,
        doctor_id=doctor_id,
        day=day,
        step=step,
        hours=hours,
        now=ensure_aware(now) if now is not None else None,
    )


def _iter_slots(
    repo: HospitalRepository,
    *,
    doctor_id: int,
    day: date,
    step: timedelta,
    hours: WorkingHours,
    now: datetime | None,
) -> Iterator[datetime]:
    booked = {
        appt.scheduled_at
        for appt in repo.find_appointments(
            doctor_id=doctor_id,
            date_range=day_bounds(day),
            statuses=Appointment.SLOT_HOLDING_STATUSES,
        )
    }
    tz = timezone.get_current_timezone()
    candidate = timezone.make_aware(datetime.combine(day, hours.start), tz)
    window_end = timezone.make_aware(datetime.combine(day, hours.end), tz)
    while candidate < window_end:
        if candidate not in booked and (now is None or candidate > now):
            yield candidate
        candidate = candidate + step


def update_status(
    repo: HospitalRepository,
    *,
    appointment_id: int,
    new_status: str,
) -> Appointment:
    """
    Apply one state-machine transition.

    Cancellation is always allowed from a non-terminal state.

    Returns:
        An updated copy of the appointment

    Raises:
        InvalidInput: If ``new_status`` is not a known status
        EntityNotFound: If the appointment does not exist
        AlreadyInTerminalState: If the appointment is already terminal
        IllegalTransition: If the transition is not in the table
    """
    ensure_choice(new_status, Appointment.STATUSES, field='status')
    appointment = repo.get_by_id(Appointment, appointment_id)

    if appointment.is_terminal:
        raise AlreadyInTerminalState(
            f'Appointment #{appointment.pk} is already {appointment.status}',
            model='Appointment',
            pk=appointment.pk,
            state=appointment.status,
        )
    if not appointment.can_transition_to(new_status):
        raise IllegalTransition(
            f'Cannot change appointment #{appointment.pk} from {appointment.status} to {new_status}',
            model='Appointment',
            pk=appointment.pk,
            state=appointment.status,
            target=new_status,
        )

    updated = copy.copy(appointment)
    updated.status = new_status
    return updated


# ---------------------------------------------------------------------------
# Transactional Helpers
# ---------------------------------------------------------------------------

def record_appointment(
    *,
    patient_id: int,
    doctor_id: int,
    at: datetime,
    now: datetime | None = None,
    using: str = 'default',
) -> Appointment:
    """Book and persist an appointment under a lock on the doctor row."""
    repo = DjangoRepository(using)
    with transaction.atomic(using=using):
        repo.lock(Doctor, doctor_id)
        appointment = schedule_appointment(
            repo,
            patient_id=patient_id,
            doctor_id=doctor_id,
            at=at,
            now=now or timezone.now(),
        )
        appointment.save(using=using)
    logger.info(
        'Appointment booked (id=%s, doctor_id=%s, patient_id=%s, at=%s)',
        appointment.pk, doctor_id, patient_id, appointment.scheduled_at.isoformat(),
    )
    return appointment


def record_status_change(
    *,
    appointment_id: int,
    new_status: str,
    using: str = 'default',
) -> Appointment:
    """Transition and persist an appointment status under a row lock."""
    repo = DjangoRepository(using)
    with transaction.atomic(using=using):
        repo.lock(Appointment, appointment_id)
        appointment = update_status(repo, appointment_id=appointment_id, new_status=new_status)
        appointment.save(using=using, update_fields=['status'])
    logger.info('Appointment status changed (id=%s, status=%s)', appointment_id, new_status)
    return appointment
