"""
Tests for the Admission/Room Engine decision functions.

Tests cover:
- Room capacity and the one-open-admission-per-patient rule
- Discharge lifecycle (terminal, idempotent, date ordering)
- Occupancy / availability and the invariant check
- Length of stay and its average
"""

from datetime import date

from django.test import SimpleTestCase

from hospital_backend.admissions.models import Admission, Room
from hospital_backend.admissions.services import (
    admit_patient,
    average_length_of_stay,
    create_room,
    current_admission,
    discharge_patient,
    length_of_stay,
    room_availability,
    room_occupancy,
)
from hospital_backend.core.exceptions import (
    AlreadyDischarged,
    AlreadyInTerminalState,
    ConflictError,
    EntityNotFound,
    InvalidInput,
    InvariantViolation,
    PatientAlreadyAdmitted,
    RoomFull,
)
from hospital_backend.core.models import Patient
from hospital_backend.core.repositories import InMemoryRepository


class AdmissionTestMixin:

    def setUp(self):
        super().setUp()
        self.p1 = Patient(full_name='John Muller')
        self.p2 = Patient(full_name='Anna Weber')
        self.p3 = Patient(full_name='Luc Schmit')
        self.icu = Room(room_number='101A', room_type=Room.TYPE_ICU, capacity=1)
        self.ward = Room(room_number='201', room_type=Room.TYPE_GENERAL, capacity=2)
        self.repo = InMemoryRepository(self.p1, self.p2, self.p3, self.icu, self.ward)

    def _admit(self, patient, room, on=date(2026, 1, 1)) -> Admission:
        admission = admit_patient(self.repo, patient_id=patient.pk, room_id=room.pk, admission_date=on)
        self.repo.add(admission)
        return admission

    def _discharge(self, admission, on) -> Admission:
        updated = discharge_patient(self.repo, admission_id=admission.pk, discharge_date=on)
        self.repo.add(updated)
        return updated


class AdmitPatientTestCase(AdmissionTestMixin, SimpleTestCase):

    def test_admit_returns_open_admission(self):
        admission = admit_patient(
            self.repo, patient_id=self.p1.pk, room_id=self.icu.pk, admission_date=date(2026, 1, 1),
        )
        self.assertIsNone(admission.pk)
        self.assertIsNone(admission.discharge_date)
        self.assertEqual(admission.status, Admission.STATUS_ADMITTED)

    def test_capacity_one_room_full_until_discharge(self):
        first = self._admit(self.p1, self.icu)

        with self.assertRaises(RoomFull) as ctx:
            self._admit(self.p2, self.icu)
        conflict = ctx.exception.conflicts[0]
        self.assertEqual(conflict.type, 'room_full')
        self.assertEqual(conflict.meta, {'occupancy': 1, 'capacity': 1})

        self._discharge(first, date(2026, 1, 5))
        second = self._admit(self.p2, self.icu, on=date(2026, 1, 5))
        self.assertEqual(second.room_id, self.icu.pk)

    def test_room_full_is_a_conflict(self):
        self._admit(self.p1, self.icu)
        with self.assertRaises(ConflictError):
            self._admit(self.p2, self.icu)

    def test_patient_cannot_hold_two_open_admissions(self):
        existing = self._admit(self.p1, self.ward)

        with self.assertRaises(PatientAlreadyAdmitted) as ctx:
            self._admit(self.p1, self.icu)
        self.assertEqual(ctx.exception.conflicts[0].id, existing.pk)

    def test_readmission_after_discharge(self):
        first = self._admit(self.p1, self.ward)
        self._discharge(first, date(2026, 1, 3))
        again = self._admit(self.p1, self.ward, on=date(2026, 2, 1))
        self.assertNotEqual(again.pk, first.pk)

    def test_multi_bed_room_fills_to_capacity(self):
        self._admit(self.p1, self.ward)
        self._admit(self.p2, self.ward)
        with self.assertRaises(RoomFull):
            self._admit(self.p3, self.ward)

    def test_unknown_room_or_patient(self):
        with self.assertRaises(EntityNotFound):
            admit_patient(self.repo, patient_id=self.p1.pk, room_id=999, admission_date=date(2026, 1, 1))
        with self.assertRaises(EntityNotFound):
            admit_patient(self.repo, patient_id=999, room_id=self.icu.pk, admission_date=date(2026, 1, 1))

    def test_current_admission(self):
        self.assertIsNone(current_admission(self.repo, self.p1.pk))
        admission = self._admit(self.p1, self.ward)
        self.assertEqual(current_admission(self.repo, self.p1.pk).pk, admission.pk)


class DischargeTestCase(AdmissionTestMixin, SimpleTestCase):

    def setUp(self):
        super().setUp()
        self.admission = self._admit(self.p1, self.icu, on=date(2026, 1, 10))

    def test_discharge_returns_copy(self):
        updated = discharge_patient(self.repo, admission_id=self.admission.pk, discharge_date=date(2026, 1, 12))
        self.assertEqual(updated.discharge_date, date(2026, 1, 12))
        self.assertEqual(updated.status, Admission.STATUS_DISCHARGED)
        self.assertIsNone(self.admission.discharge_date)

    def test_same_day_discharge_allowed(self):
        updated = self._discharge(self.admission, date(2026, 1, 10))
        self.assertEqual(length_of_stay(updated), 0)

    def test_discharge_before_admission_rejected(self):
        with self.assertRaises(InvalidInput) as ctx:
            discharge_patient(self.repo, admission_id=self.admission.pk, discharge_date=date(2026, 1, 9))
        self.assertEqual(ctx.exception.field, 'discharge_date')

    def test_second_discharge_reports_already_discharged(self):
        self._discharge(self.admission, date(2026, 1, 12))

        with self.assertRaises(AlreadyDischarged) as ctx:
            discharge_patient(self.repo, admission_id=self.admission.pk, discharge_date=date(2026, 1, 20))
        self.assertIsInstance(ctx.exception, AlreadyInTerminalState)
        self.assertEqual(self.repo.get_by_id(Admission, self.admission.pk).discharge_date, date(2026, 1, 12))

    def test_unknown_admission(self):
        with self.assertRaises(EntityNotFound):
            discharge_patient(self.repo, admission_id=999, discharge_date=date(2026, 1, 12))


class OccupancyTestCase(AdmissionTestMixin, SimpleTestCase):

    def test_availability_tracks_open_admissions(self):
        self.assertEqual(room_availability(self.repo, self.ward.pk), 2)
        first = self._admit(self.p1, self.ward)
        self.assertEqual(room_occupancy(self.repo, self.ward.pk), 1)
        self.assertEqual(room_availability(self.repo, self.ward.pk), 1)
        self._admit(self.p2, self.ward)
        self.assertEqual(room_availability(self.repo, self.ward.pk), 0)
        self._discharge(first, date(2026, 1, 2))
        self.assertEqual(room_availability(self.repo, self.ward.pk), 1)

    def test_over_capacity_data_is_an_invariant_violation(self):
        # Two open admissions written around the engine into a capacity-1 room.
        self.repo.add(
            Admission(patient_id=self.p1.pk, room_id=self.icu.pk, admission_date=date(2026, 1, 1)),
            Admission(patient_id=self.p2.pk, room_id=self.icu.pk, admission_date=date(2026, 1, 1)),
        )
        with self.assertLogs('hospital_backend.admissions.services.admissions', level='ERROR'):
            with self.assertRaises(InvariantViolation):
                room_availability(self.repo, self.icu.pk)

    def test_unknown_room(self):
        with self.assertRaises(EntityNotFound):
            room_availability(self.repo, 999)


class LengthOfStayTestCase(SimpleTestCase):

    def _adm(self, start, end=None):
        return Admission(patient_id=1, room_id=1, admission_date=start, discharge_date=end)

    def test_discharged_stay(self):
        self.assertEqual(length_of_stay(self._adm(date(2026, 1, 1), date(2026, 1, 8))), 7)

    def test_ongoing_requires_as_of(self):
        ongoing = self._adm(date(2026, 1, 1))
        with self.assertRaises(InvalidInput):
            length_of_stay(ongoing)
        self.assertEqual(length_of_stay(ongoing, as_of=date(2026, 1, 4)), 3)

    def test_as_of_before_admission_rejected(self):
        with self.assertRaises(InvalidInput):
            length_of_stay(self._adm(date(2026, 1, 10)), as_of=date(2026, 1, 9))

    def test_discharge_date_wins_over_as_of(self):
        stay = length_of_stay(self._adm(date(2026, 1, 1), date(2026, 1, 3)), as_of=date(2026, 6, 1))
        self.assertEqual(stay, 2)

    def test_average_skips_ongoing(self):
        admissions = [
            self._adm(date(2026, 1, 1), date(2026, 1, 3)),
            self._adm(date(2026, 1, 1), date(2026, 1, 5)),
            self._adm(date(2026, 1, 1)),
        ]
        self.assertEqual(average_length_of_stay(admissions), 3.0)

    def test_average_none_without_discharges(self):
        self.assertIsNone(average_length_of_stay([]))
        self.assertIsNone(average_length_of_stay([self._adm(date(2026, 1, 1))]))

    def test_average_zero_for_same_day_stays(self):
        self.assertEqual(average_length_of_stay([self._adm(date(2026, 1, 1), date(2026, 1, 1))]), 0.0)


class CreateRoomTestCase(SimpleTestCase):

    def setUp(self):
        self.repo = InMemoryRepository(Room(room_number='101A', room_type=Room.TYPE_ICU))

    def test_defaults(self):
        room = create_room(self.repo, room_number='102')
        self.assertEqual(room.capacity, 1)
        self.assertEqual(room.room_type, Room.TYPE_GENERAL)

    def test_duplicate_room_number(self):
        with self.assertRaises(ConflictError) as ctx:
            create_room(self.repo, room_number='101A')
        self.assertEqual(ctx.exception.conflicts[0].type, 'duplicate_value')

    def test_capacity_must_be_positive(self):
        with self.assertRaises(InvalidInput):
            create_room(self.repo, room_number='103', capacity=0)

    def test_unknown_room_type(self):
        with self.assertRaises(InvalidInput):
            create_room(self.repo, room_number='104', room_type='SUITE')
