"""
Tests for the persisting admission helpers and the room_occupancy command.
"""

from datetime import date
from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from hospital_backend.admissions.models import Admission, Room
from hospital_backend.admissions.services import record_admission, record_discharge
from hospital_backend.core.exceptions import AlreadyDischarged, RoomFull
from hospital_backend.core.models import Patient
from hospital_backend.core.repositories import DjangoRepository


class AdmissionRecordsTestCase(TestCase):

    def setUp(self):
        self.p1 = Patient.objects.create(full_name='John Muller', national_id='LU12345')
        self.p2 = Patient.objects.create(full_name='Anna Weber', national_id='LU67890')
        self.room = Room.objects.create(room_number='101A', room_type=Room.TYPE_ICU, capacity=1)

    def test_admit_and_discharge_persist(self):
        admission = record_admission(patient_id=self.p1.pk, room_id=self.room.pk, admission_date=date(2026, 1, 1))
        self.assertTrue(Admission.objects.filter(pk=admission.pk, discharge_date__isnull=True).exists())

        record_discharge(admission_id=admission.pk, discharge_date=date(2026, 1, 4))
        self.assertEqual(Admission.objects.get(pk=admission.pk).discharge_date, date(2026, 1, 4))

    def test_room_full_leaves_no_row(self):
        record_admission(patient_id=self.p1.pk, room_id=self.room.pk, admission_date=date(2026, 1, 1))
        with self.assertRaises(RoomFull):
            record_admission(patient_id=self.p2.pk, room_id=self.room.pk, admission_date=date(2026, 1, 2))
        self.assertEqual(Admission.objects.count(), 1)

    def test_repeated_discharge_keeps_first_date(self):
        admission = record_admission(patient_id=self.p1.pk, room_id=self.room.pk, admission_date=date(2026, 1, 1))
        record_discharge(admission_id=admission.pk, discharge_date=date(2026, 1, 3))
        with self.assertRaises(AlreadyDischarged):
            record_discharge(admission_id=admission.pk, discharge_date=date(2026, 1, 9))
        self.assertEqual(Admission.objects.get(pk=admission.pk).discharge_date, date(2026, 1, 3))

    def test_repository_only_current(self):
        admission = record_admission(patient_id=self.p1.pk, room_id=self.room.pk, admission_date=date(2026, 1, 1))
        repo = DjangoRepository()
        self.assertEqual(len(repo.find_admissions(room_id=self.room.pk, only_current=True)), 1)
        record_discharge(admission_id=admission.pk, discharge_date=date(2026, 1, 2))
        self.assertEqual(repo.find_admissions(room_id=self.room.pk, only_current=True), [])
        self.assertEqual(len(repo.find_admissions(patient_id=self.p1.pk)), 1)


class RoomOccupancyCommandTestCase(TestCase):

    def setUp(self):
        self.p1 = Patient.objects.create(full_name='John Muller')
        self.p2 = Patient.objects.create(full_name='Anna Weber')
        self.room = Room.objects.create(room_number='201', capacity=2)

    def _run(self, *args):
        out = StringIO()
        call_command('room_occupancy', *args, stdout=out)
        return out.getvalue()

    def test_empty_hospital(self):
        output = self._run('--as-of', '2026-01-10')
        self.assertIn('| 201', output)
        self.assertIn('Ongoing admissions as of 2026-01-10: 0', output)
        self.assertIn('Average length of stay: n/a', output)

    def test_reports_stays_and_average(self):
        Admission.objects.create(
            patient=self.p1, room=self.room,
            admission_date=date(2026, 1, 1), discharge_date=date(2026, 1, 5),
        )
        Admission.objects.create(patient=self.p2, room=self.room, admission_date=date(2026, 1, 8))

        output = self._run('--as-of', '2026-01-10')

        self.assertIn('Ongoing admissions as of 2026-01-10: 1', output)
        self.assertIn('day 2', output)
        self.assertIn('Average length of stay: 4.0 days', output)

    def test_admission_after_as_of_is_marked_and_report_completes(self):
        later = Admission.objects.create(patient=self.p1, room=self.room, admission_date=date(2026, 1, 8))
        earlier = Admission.objects.create(patient=self.p2, room=self.room, admission_date=date(2025, 12, 30))

        output = self._run('--as-of', '2026-01-01')

        self.assertIn(f'#{later.pk} patient_id={self.p1.pk}', output)
        self.assertIn('starts 2026-01-08 (after --as-of)', output)
        self.assertIn(f'#{earlier.pk} patient_id={self.p2.pk} room_id={self.room.pk} day 2', output)
        self.assertIn('Average length of stay: n/a', output)
