"""
Tests for the registry creation commands and shared validators.
"""

from datetime import date

from django.test import SimpleTestCase

from hospital_backend.core.exceptions import ConflictError, EntityNotFound, InvalidInput
from hospital_backend.core.models import Department, Doctor, Nurse, Patient
from hospital_backend.core.repositories import InMemoryRepository
from hospital_backend.core.services import (
    assign_department,
    create_department,
    register_doctor,
    register_nurse,
    register_patient,
)

TODAY = date(2026, 1, 15)


class RegistryTestMixin:

    def setUp(self):
        super().setUp()
        self.cardiology = Department(name='Cardiology', floor_number=2)
        self.neurology = Department(name='Neurology', floor_number=3)
        self.patient = Patient(full_name='John Muller', national_id='LU12345')
        self.doctor = Doctor(full_name='Dr. Marc Klein', license_number='LIC-001')
        self.repo = InMemoryRepository(self.cardiology, self.neurology, self.patient, self.doctor)


class DepartmentTestCase(RegistryTestMixin, SimpleTestCase):

    def test_create(self):
        department = create_department(self.repo, name='Emergency', floor_number=1)
        self.assertEqual(department.name, 'Emergency')
        self.assertIsNone(department.pk)

    def test_duplicate_name(self):
        with self.assertRaises(ConflictError) as ctx:
            create_department(self.repo, name='Cardiology')
        conflict = ctx.exception.conflicts[0]
        self.assertEqual(conflict.model, 'Department')
        self.assertEqual(conflict.meta['field'], 'name')

    def test_blank_name(self):
        with self.assertRaises(InvalidInput):
            create_department(self.repo, name='  ')


class PatientTestCase(RegistryTestMixin, SimpleTestCase):

    def test_register(self):
        patient = register_patient(
            self.repo, full_name='Anna Weber', national_id='LU67890',
            date_of_birth=date(1990, 9, 23), today=TODAY,
        )
        self.assertEqual(patient.national_id, 'LU67890')

    def test_duplicate_national_id(self):
        with self.assertRaises(ConflictError):
            register_patient(self.repo, full_name='Someone Else', national_id='LU12345', today=TODAY)

    def test_missing_national_id_never_conflicts(self):
        self.repo.add(Patient(full_name='Anonymous'))
        patient = register_patient(self.repo, full_name='Unknown', national_id='', today=TODAY)
        self.assertIsNone(patient.national_id)

    def test_birth_date_in_future(self):
        with self.assertRaises(InvalidInput) as ctx:
            register_patient(self.repo, full_name='Baby', date_of_birth=date(2026, 1, 16), today=TODAY)
        self.assertEqual(ctx.exception.field, 'date_of_birth')

    def test_birth_date_today_allowed(self):
        patient = register_patient(self.repo, full_name='Baby', date_of_birth=TODAY, today=TODAY)
        self.assertEqual(patient.date_of_birth, TODAY)


class StaffTestCase(RegistryTestMixin, SimpleTestCase):

    def test_register_doctor(self):
        doctor = register_doctor(
            self.repo, full_name='Dr. Sophie Laurent', license_number='LIC-002',
            department_id=self.neurology.pk, hire_date=date(2018, 3, 15), today=TODAY,
        )
        self.assertEqual(doctor.department_id, self.neurology.pk)

    def test_duplicate_license(self):
        with self.assertRaises(ConflictError):
            register_doctor(self.repo, full_name='Dr. Copy', license_number='LIC-001', today=TODAY)

    def test_hire_date_in_future(self):
        with self.assertRaises(InvalidInput):
            register_doctor(
                self.repo, full_name='Dr. Soon', license_number='LIC-009',
                hire_date=date(2027, 1, 1), today=TODAY,
            )

    def test_unknown_department(self):
        with self.assertRaises(EntityNotFound):
            register_doctor(self.repo, full_name='Dr. X', license_number='LIC-010', department_id=99, today=TODAY)
        with self.assertRaises(EntityNotFound):
            register_nurse(self.repo, full_name='Nurse X', department_id=99)

    def test_register_nurse_shift(self):
        nurse = register_nurse(
            self.repo, full_name='Laura Hoffmann', department_id=self.cardiology.pk, shift_type=Nurse.SHIFT_NIGHT,
        )
        self.assertEqual(nurse.shift_type, 'Night')
        with self.assertRaises(InvalidInput):
            register_nurse(self.repo, full_name='Laura Hoffmann', shift_type='Weekend')

    def test_assign_department(self):
        moved = assign_department(self.repo, doctor_id=self.doctor.pk, department_id=self.cardiology.pk)
        self.assertEqual(moved.department_id, self.cardiology.pk)
        self.assertIsNone(self.doctor.department_id)

        cleared = assign_department(self.repo, doctor_id=self.doctor.pk, department_id=None)
        self.assertIsNone(cleared.department_id)
