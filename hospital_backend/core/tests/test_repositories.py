"""
Tests for the repository adapters.
"""

from django.db import transaction
from django.test import SimpleTestCase, TestCase

from hospital_backend.core.exceptions import EntityNotFound
from hospital_backend.core.models import Department, Patient
from hospital_backend.core.repositories import DjangoRepository, InMemoryRepository


class InMemoryRepositoryTestCase(SimpleTestCase):

    def test_ids_assigned_per_model(self):
        d1, d2 = Department(name='A'), Department(name='B')
        p1 = Patient(full_name='P')
        InMemoryRepository(d1, d2, p1)
        self.assertEqual((d1.pk, d2.pk, p1.pk), (1, 2, 1))

    def test_ids_never_reused_and_explicit_ids_respected(self):
        repo = InMemoryRepository(Department(pk=7, name='A'))
        new = Department(name='B')
        repo.add(new)
        self.assertEqual(new.pk, 8)

    def test_add_with_existing_id_replaces(self):
        department = Department(name='A', floor_number=1)
        repo = InMemoryRepository(department)
        moved = Department(pk=department.pk, name='A', floor_number=4)
        repo.add(moved)

        self.assertEqual(repo.get_by_id(Department, department.pk).floor_number, 4)
        self.assertEqual(len(repo.list_all(Department)), 1)

    def test_get_by_id_missing(self):
        with self.assertRaises(EntityNotFound) as ctx:
            InMemoryRepository().get_by_id(Department, 3)
        self.assertEqual(ctx.exception.to_dict()['model'], 'Department')
        self.assertEqual(ctx.exception.http_status, 404)

    def test_exists_by_unique_field_exclude(self):
        department = Department(name='A')
        repo = InMemoryRepository(department)
        self.assertTrue(repo.exists_by_unique_field(Department, 'name', 'A'))
        self.assertFalse(repo.exists_by_unique_field(Department, 'name', 'A', exclude_id=department.pk))


class DjangoRepositoryTestCase(TestCase):

    def setUp(self):
        self.repo = DjangoRepository()
        self.department = Department.objects.create(name='Cardiology')

    def test_get_by_id(self):
        self.assertEqual(self.repo.get_by_id(Department, self.department.pk).name, 'Cardiology')
        with self.assertRaises(EntityNotFound):
            self.repo.get_by_id(Department, self.department.pk + 1)
        with self.assertRaises(EntityNotFound):
            self.repo.get_by_id(Department, None)

    def test_list_all_orders_by_id(self):
        second = Department.objects.create(name='Anesthesia')
        self.assertEqual([d.pk for d in self.repo.list_all(Department)], [self.department.pk, second.pk])

    def test_exists_by_unique_field(self):
        self.assertTrue(self.repo.exists_by_unique_field(Department, 'name', 'Cardiology'))
        self.assertFalse(
            self.repo.exists_by_unique_field(Department, 'name', 'Cardiology', exclude_id=self.department.pk)
        )

    def test_lock_inside_transaction(self):
        with transaction.atomic():
            rows = self.repo.lock(Department, self.department.pk, None)
        self.assertEqual([d.pk for d in rows], [self.department.pk])
