"""Registry models: departments, clinical staff and patients.

Tables and key columns follow the existing hospital DDL (``patients``,
``doctors``, ``departments``, ``nurses`` with ``<entity>_id`` primary keys),
so the models can run against the legacy schema unchanged.

Relations are one-directional: a doctor points at its department, but a
department carries no reverse collection. Reverse lookups are queries.
"""

from django.db import models


class Department(models.Model):
	"""Hospital department. Owns no child lifecycle; staff merely reference it."""
	id = models.BigAutoField(primary_key=True, db_column='department_id')
	name = models.CharField(max_length=100, unique=True, db_column='department_name')
	floor_number = models.IntegerField(null=True, blank=True)

	class Meta:
		db_table = 'departments'
		ordering = ['name', 'id']

	def __str__(self) -> str:
		return self.name


class Patient(models.Model):
	"""Patient master data.

	Aggregation root for admissions, appointments, prescriptions and medical
	records, which reference it by ``patient_id``. Deleting a patient does not
	cascade; dependent rows protect it.
	"""
	id = models.BigAutoField(primary_key=True, db_column='patient_id')
	national_id = models.CharField(max_length=30, unique=True, null=True, blank=True)
	full_name = models.CharField(max_length=200)
	date_of_birth = models.DateField(null=True, blank=True)
	gender = models.CharField(max_length=10, blank=True, default='')
	phone_number = models.CharField(max_length=30, blank=True, default='')
	email = models.CharField(max_length=100, blank=True, default='')

	class Meta:
		db_table = 'patients'
		ordering = ['full_name', 'id']

	def __str__(self) -> str:
		return self.full_name


class Doctor(models.Model):
	id = models.BigAutoField(primary_key=True, db_column='doctor_id')
	full_name = models.CharField(max_length=200)
	specialty = models.CharField(max_length=100, blank=True, default='')
	license_number = models.CharField(max_length=50, unique=True)
	department = models.ForeignKey(
		Department,
		null=True,
		blank=True,
		on_delete=models.SET_NULL,
		db_column='department_id',
		related_name='+',
	)
	hire_date = models.DateField(null=True, blank=True)

	class Meta:
		db_table = 'doctors'
		ordering = ['full_name', 'id']

	def __str__(self) -> str:
		return self.full_name


class Nurse(models.Model):
	SHIFT_DAY = 'Day'
	SHIFT_EVENING = 'Evening'
	SHIFT_NIGHT = 'Night'

	SHIFT_CHOICES = (
		(SHIFT_DAY, SHIFT_DAY),
		(SHIFT_EVENING, SHIFT_EVENING),
		(SHIFT_NIGHT, SHIFT_NIGHT),
	)

	id = models.BigAutoField(primary_key=True, db_column='nurse_id')
	full_name = models.CharField(max_length=200)
	department = models.ForeignKey(
		Department,
		null=True,
		blank=True,
		on_delete=models.SET_NULL,
		db_column='department_id',
		related_name='+',
	)
	shift_type = models.CharField(max_length=30, choices=SHIFT_CHOICES, blank=True, default='')

	class Meta:
		db_table = 'nurses'
		ordering = ['full_name', 'id']

	def __str__(self) -> str:
		return self.full_name
