"""
Admission/Room Engine.

Decides admissions and discharges against room capacity and the
one-open-admission-per-patient rule, and computes occupancy and
length-of-stay facts. Decision functions return unsaved or copied
``Admission``/``Room`` instances and never write; the ``record_*`` helpers
persist accepted decisions inside one locked transaction.
"""

from __future__ import annotations

import copy
import logging
from datetime import date
from typing import Iterable

from django.db import transaction

from hospital_backend.admissions.models import Admission, Room
from hospital_backend.core.exceptions import (
    AlreadyDischarged,
    Conflict,
    InvalidInput,
    InvariantViolation,
    PatientAlreadyAdmitted,
    RoomFull,
)
from hospital_backend.core.models import Patient
from hospital_backend.core.repositories import DjangoRepository, HospitalRepository
from hospital_backend.core.validation import (
    ensure_choice,
    ensure_date_order,
    ensure_positive,
    ensure_required,
    ensure_unique,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------

def create_room(
    repo: HospitalRepository,
    *,
    room_number: str,
    room_type: str = Room.TYPE_GENERAL,
    capacity: int = 1,
) -> Room:
    ensure_required(room_number, field='room_number')
    ensure_choice(room_type, [value for value, _label in Room.TYPE_CHOICES], field='room_type')
    ensure_positive(capacity, field='capacity')
    ensure_unique(repo, Room, 'room_number', room_number)
    return Room(room_number=room_number, room_type=room_type, capacity=capacity)


def room_occupancy(repo: HospitalRepository, room_id: int) -> int:
    """Number of admissions in the room that have not been discharged."""
    return len(repo.find_admissions(room_id=room_id, only_current=True))


def room_availability(repo: HospitalRepository, room_id: int) -> int:
    """
    Free places in the room: ``capacity - occupancy``, 0 when full.

    Raises:
        EntityNotFound: If the room does not exist
        InvariantViolation: If occupancy exceeds capacity in stored data
    """
    room = repo.get_by_id(Room, room_id)
    available = room.capacity - room_occupancy(repo, room_id)
    if available < 0:
        logger.error(
            'Room over capacity (room_id=%s, capacity=%s, available=%s)',
            room_id, room.capacity, available,
        )
        raise InvariantViolation(
            f'Room {room.room_number} holds more admissions than its capacity {room.capacity}'
        )
    return available


# ---------------------------------------------------------------------------
# Admission lifecycle
# ---------------------------------------------------------------------------

def current_admission(repo: HospitalRepository, patient_id: int) -> Admission | None:
    open_admissions = repo.find_admissions(patient_id=patient_id, only_current=True)
    return open_admissions[0] if open_admissions else None


def admit_patient(
    repo: HospitalRepository,
    *,
    patient_id: int,
    room_id: int,
    admission_date: date,
) -> Admission:
    """
    Decide whether a patient may be admitted into a room.

    Returns:
        An unsaved Admission with ``discharge_date = None``

    Raises:
        EntityNotFound: If the patient or room does not exist
        PatientAlreadyAdmitted: If the patient already has an open admission
        RoomFull: If the room's open admissions reach its capacity
    """
    ensure_required(admission_date, field='admission_date')
    repo.get_by_id(Patient, patient_id)
    room = repo.get_by_id(Room, room_id)

    existing = current_admission(repo, patient_id)
    if existing is not None:
        raise PatientAlreadyAdmitted(
            [Conflict(
                type='patient_admitted',
                model='Admission',
                id=existing.pk,
                resource_id=existing.room_id,
                message=f'Patient {patient_id} is already admitted (admission #{existing.pk})',
            )],
            message='Patient is already admitted',
        )

    occupancy = room_occupancy(repo, room_id)
    if occupancy >= room.capacity:
        raise RoomFull(
            [Conflict(
                type='room_full',
                model='Room',
                id=room.pk,
                resource_id=room.pk,
                message=f'Room {room.room_number} is full ({occupancy}/{room.capacity})',
                meta={'occupancy': occupancy, 'capacity': room.capacity},
            )],
            message='Room is full',
        )

    return Admission(
        patient_id=patient_id,
        room_id=room_id,
        admission_date=admission_date,
        discharge_date=None,
    )


def discharge_patient(
    repo: HospitalRepository,
    *,
    admission_id: int,
    discharge_date: date,
) -> Admission:
    """
    Close an open admission.

    Calling it again for the same admission is safe: the second call reports
    AlreadyDischarged and proposes nothing.

    Raises:
        EntityNotFound: If the admission does not exist
        AlreadyDischarged: If the admission already has a discharge date
        InvalidInput: If ``discharge_date`` is before the admission date
    """
    ensure_required(discharge_date, field='discharge_date')
    admission = repo.get_by_id(Admission, admission_id)
    if not admission.is_current:
        raise AlreadyDischarged(
            f'Admission #{admission.pk} was already discharged on {admission.discharge_date.isoformat()}',
            model='Admission',
            pk=admission.pk,
            state=Admission.STATUS_DISCHARGED,
        )
    ensure_date_order(admission.admission_date, discharge_date, field='discharge_date')

    updated = copy.copy(admission)
    updated.discharge_date = discharge_date
    return updated


# ---------------------------------------------------------------------------
# Length of stay
# ---------------------------------------------------------------------------

def length_of_stay(admission: Admission, as_of: date | None = None) -> int:
    """
    Whole days between admission and discharge (or ``as_of`` while ongoing).

    An ongoing admission has no length of stay without an explicit ``as_of``.
    """
    end = admission.discharge_date or as_of
    if end is None:
        raise InvalidInput(
            f'Admission #{admission.pk} is ongoing; as_of is required',
            field='as_of',
        )
    ensure_date_order(admission.admission_date, end, field='as_of')
    return (end - admission.admission_date).days


def average_length_of_stay(admissions: Iterable[Admission]) -> float | None:
    """Mean stay over discharged admissions; None when there are none."""
    stays = [length_of_stay(adm) for adm in admissions if adm.discharge_date is not None]
    if not stays:
        return None
    return sum(stays) / len(stays)


# ---------------------------------------------------------------------------
# Transactional Helpers
# ---------------------------------------------------------------------------

def record_admission(
    *,
    patient_id: int,
    room_id: int,
    admission_date: date,
    using: str = 'default',
) -> Admission:
    """Admit and persist under locks on the room and the patient."""
    repo = DjangoRepository(using)
    with transaction.atomic(using=using):
        repo.lock(Room, room_id)
        repo.lock(Patient, patient_id)
        admission = admit_patient(
            repo,
            patient_id=patient_id,
            room_id=room_id,
            admission_date=admission_date,
        )
        admission.save(using=using)
    logger.info(
        'Patient admitted (admission_id=%s, patient_id=%s, room_id=%s)',
        admission.pk, patient_id, room_id,
    )
    return admission


def record_discharge(
    *,
    admission_id: int,
    discharge_date: date,
    using: str = 'default',
) -> Admission:
    repo = DjangoRepository(using)
    with transaction.atomic(using=using):
        repo.lock(Admission, admission_id)
        admission = discharge_patient(
            repo,
            admission_id=admission_id,
            discharge_date=discharge_date,
        )
        admission.save(using=using, update_fields=['discharge_date'])
    logger.info('Patient discharged (admission_id=%s, on=%s)', admission_id, discharge_date.isoformat())
    return admission
