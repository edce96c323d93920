"""
Registry commands for departments, staff and patients.

Each command validates the creation invariants (uniqueness, dates not in
the future, referenced department exists) and returns an unsaved model
instance. ``today`` defaults to the local date when not supplied.
"""

from __future__ import annotations

import copy
from datetime import date

from django.utils import timezone

from hospital_backend.core.models import Department, Doctor, Nurse, Patient
from hospital_backend.core.repositories import HospitalRepository
from hospital_backend.core.validation import (
    ensure_choice,
    ensure_not_in_future,
    ensure_required,
    ensure_unique,
)


def _today(today: date | None) -> date:
    return today if today is not None else timezone.localdate()


def create_department(
    repo: HospitalRepository,
    *,
    name: str,
    floor_number: int | None = None,
) -> Department:
    ensure_required(name, field='name')
    ensure_unique(repo, Department, 'name', name)
    return Department(name=name, floor_number=floor_number)


def register_patient(
    repo: HospitalRepository,
    *,
    full_name: str,
    date_of_birth: date | None = None,
    national_id: str | None = None,
    gender: str = '',
    phone_number: str = '',
    email: str = '',
    today: date | None = None,
) -> Patient:
    """National id is optional but unique when present."""
    ensure_required(full_name, field='full_name')
    ensure_not_in_future(date_of_birth, _today(today), field='date_of_birth')
    national_id = national_id or None
    ensure_unique(repo, Patient, 'national_id', national_id)
    return Patient(
        national_id=national_id,
        full_name=full_name,
        date_of_birth=date_of_birth,
        gender=gender,
        phone_number=phone_number,
        email=email,
    )


def register_doctor(
    repo: HospitalRepository,
    *,
    full_name: str,
    license_number: str,
    specialty: str = '',
    department_id: int | None = None,
    hire_date: date | None = None,
    today: date | None = None,
) -> Doctor:
    ensure_required(full_name, field='full_name')
    ensure_required(license_number, field='license_number')
    ensure_not_in_future(hire_date, _today(today), field='hire_date')
    if department_id is not None:
        repo.get_by_id(Department, department_id)
    ensure_unique(repo, Doctor, 'license_number', license_number)
    return Doctor(
        full_name=full_name,
        specialty=specialty,
        license_number=license_number,
        department_id=department_id,
        hire_date=hire_date,
    )


def register_nurse(
    repo: HospitalRepository,
    *,
    full_name: str,
    department_id: int | None = None,
    shift_type: str = '',
) -> Nurse:
    ensure_required(full_name, field='full_name')
    if shift_type:
        ensure_choice(shift_type, [value for value, _label in Nurse.SHIFT_CHOICES], field='shift_type')
    if department_id is not None:
        repo.get_by_id(Department, department_id)
    return Nurse(full_name=full_name, department_id=department_id, shift_type=shift_type)


def assign_department(
    repo: HospitalRepository,
    *,
    doctor_id: int,
    department_id: int | None,
) -> Doctor:
    """Move a doctor to another department (or none); returns an updated copy."""
    doctor = repo.get_by_id(Doctor, doctor_id)
    if department_id is not None:
        repo.get_by_id(Department, department_id)
    updated = copy.copy(doctor)
    updated.department_id = department_id
    return updated
