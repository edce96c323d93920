"""Creation commands for prescriptions and append-only medical records."""

from __future__ import annotations

from datetime import date, datetime

from django.utils import timezone

from hospital_backend.core.models import Doctor, Patient
from hospital_backend.core.repositories import HospitalRepository
from hospital_backend.core.validation import ensure_aware, ensure_date_order, ensure_required
from hospital_backend.medical.models import MedicalRecord, Prescription


def issue_prescription(
    repo: HospitalRepository,
    *,
    patient_id: int,
    doctor_id: int,
    medication_name: str,
    dosage: str,
    issued_date: date,
    expiry_date: date,
) -> Prescription:
    """The expiry date must fall strictly after the issue date."""
    ensure_required(medication_name, field='medication_name')
    ensure_required(issued_date, field='issued_date')
    ensure_required(expiry_date, field='expiry_date')
    ensure_date_order(issued_date, expiry_date, field='expiry_date', strict=True)
    repo.get_by_id(Patient, patient_id)
    repo.get_by_id(Doctor, doctor_id)
    return Prescription(
        patient_id=patient_id,
        doctor_id=doctor_id,
        medication_name=medication_name,
        dosage=dosage,
        issued_date=issued_date,
        expiry_date=expiry_date,
    )


def add_medical_record(
    repo: HospitalRepository,
    *,
    patient_id: int,
    diagnosis: str,
    notes: str = '',
    created_at: datetime | None = None,
) -> MedicalRecord:
    repo.get_by_id(Patient, patient_id)
    return MedicalRecord(
        patient_id=patient_id,
        diagnosis=diagnosis,
        notes=notes,
        created_at=ensure_aware(created_at) if created_at is not None else timezone.now(),
    )
