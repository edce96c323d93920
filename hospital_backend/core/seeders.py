from __future__ import annotations

from datetime import date, datetime, time, timedelta

from django.db import transaction
from django.utils import timezone

from hospital_backend.admissions.models import Admission, Room
from hospital_backend.admissions.services import create_room, record_admission
from hospital_backend.appointments.models import Appointment
from hospital_backend.appointments.services import record_appointment
from hospital_backend.core.models import Department, Doctor, Nurse, Patient
from hospital_backend.core.repositories import DjangoRepository
from hospital_backend.core.services import (
    create_department,
    register_doctor,
    register_nurse,
    register_patient,
)
from hospital_backend.inventory.models import InventoryItem, InventoryStock, Supplier
from hospital_backend.inventory.services import (
    create_inventory_item,
    receive_stock,
    register_supplier,
)
from hospital_backend.medical.models import MedicalRecord, Prescription
from hospital_backend.medical.services import add_medical_record, issue_prescription


def seed_hospital(flush: bool = False, today: date | None = None) -> dict:
    """
    Seeds the hospital reference data:
    - departments, patients, doctors, one nurse
    - one ICU room with an ongoing admission
    - one appointment (tomorrow 10:00), a medical record, a prescription
    - inventory items, a supplier, one stock lot

    With flush=True all tables are emptied first. Without flush nothing is
    created once patients exist.
    """
    today = today or timezone.localdate()
    repo = DjangoRepository()
    stats: dict[str, int] = {}

    with transaction.atomic():
        if flush:
            _flush()
        elif Patient.objects.exists():
            return stats

        departments = _seed_departments(repo)
        stats["departments"] = len(departments)

        patients = _seed_patients(repo, today)
        stats["patients"] = len(patients)

        doctors = _seed_doctors(repo, departments, today)
        stats["doctors"] = len(doctors)

        nurse = register_nurse(
            repo,
            full_name="Laura Hoffmann",
            department_id=departments["Emergency"].pk,
            shift_type=Nurse.SHIFT_NIGHT,
        )
        nurse.save()
        stats["nurses"] = 1

        room = create_room(repo, room_number="101A", room_type=Room.TYPE_ICU, capacity=1)
        room.save()
        stats["rooms"] = 1

        record_admission(patient_id=patients[0].pk, room_id=room.pk, admission_date=today)
        stats["admissions"] = 1

        tomorrow_10 = timezone.make_aware(
            datetime.combine(today + timedelta(days=1), time(10, 0)),
            timezone.get_current_timezone(),
        )
        record_appointment(
            patient_id=patients[1].pk,
            doctor_id=doctors[1].pk,
            at=tomorrow_10,
            now=timezone.make_aware(datetime.combine(today, time.min)),
        )
        stats["appointments"] = 1

        add_medical_record(
            repo,
            patient_id=patients[0].pk,
            diagnosis="Hypertension",
            notes="Patient responding well to treatment",
        ).save()
        stats["medical_records"] = 1

        issue_prescription(
            repo,
            patient_id=patients[0].pk,
            doctor_id=doctors[0].pk,
            medication_name="Amlodipine",
            dosage="5mg once daily",
            issued_date=today,
            expiry_date=today + timedelta(days=90),
        ).save()
        stats["prescriptions"] = 1

        stats.update(_seed_inventory(repo))

    return stats


def _flush() -> None:
    # Dependents first; medical records refuse Model.delete(), so use querysets.
    MedicalRecord.objects.all().delete()
    Prescription.objects.all().delete()
    Appointment.objects.all().delete()
    Admission.objects.all().delete()
    Room.objects.all().delete()
    InventoryStock.objects.all().delete()
    InventoryItem.objects.all().delete()
    Supplier.objects.all().delete()
    Nurse.objects.all().delete()
    Doctor.objects.all().delete()
    Department.objects.all().delete()
    Patient.objects.all().delete()


def _seed_departments(repo: DjangoRepository) -> dict[str, Department]:
    departments: dict[str, Department] = {}
    for name, floor in [("Cardiology", 2), ("Emergency", 1), ("Neurology", 3)]:
        department = create_department(repo, name=name, floor_number=floor)
        department.save()
        departments[name] = department
    return departments


def _seed_patients(repo: DjangoRepository, today: date) -> list[Patient]:
    rows = [
        ("LU12345", "John Muller", date(1985, 4, 12), "M", "621111111", "john.muller@mail.com"),
        ("LU67890", "Anna Weber", date(1990, 9, 23), "F", "621222222", "anna.weber@mail.com"),
    ]
    patients: list[Patient] = []
    for national_id, full_name, dob, gender, phone, email in rows:
        patient = register_patient(
            repo,
            national_id=national_id,
            full_name=full_name,
            date_of_birth=dob,
            gender=gender,
            phone_number=phone,
            email=email,
            today=today,
        )
        patient.save()
        patients.append(patient)
    return patients


def _seed_doctors(repo: DjangoRepository, departments: dict[str, Department], today: date) -> list[Doctor]:
    rows = [
        ("Dr. Marc Klein", "Cardiology", "LIC-001", "Cardiology", date(2015, 6, 1)),
        ("Dr. Sophie Laurent", "Neurology", "LIC-002", "Neurology", date(2018, 3, 15)),
    ]
    doctors: list[Doctor] = []
    for full_name, specialty, license_number, department, hire_date in rows:
        doctor = register_doctor(
            repo,
            full_name=full_name,
            specialty=specialty,
            license_number=license_number,
            department_id=departments[department].pk,
            hire_date=hire_date,
            today=today,
        )
        doctor.save()
        doctors.append(doctor)
    return doctors


def _seed_inventory(repo: DjangoRepository) -> dict[str, int]:
    gloves = create_inventory_item(
        repo, name="Surgical Gloves", category="Consumables", unit_of_measure="Box", reorder_level=20,
    )
    gloves.save()
    paracetamol = create_inventory_item(
        repo, name="Paracetamol", category="Medication", unit_of_measure="Tablet", reorder_level=500,
    )
    paracetamol.save()

    supplier = register_supplier(repo, name="MedSupply Europe", contact_info="contact@medsupply.eu")
    supplier.save()

    receive_stock(
        repo,
        item_id=gloves.pk,
        supplier_id=supplier.pk,
        location="Main Storage",
        quantity=100,
        expiration_date=date(2027, 12, 31),
    ).save()

    return {"inventory_items": 2, "suppliers": 1, "inventory_stock": 1}
