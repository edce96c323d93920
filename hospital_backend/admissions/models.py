"""Rooms and admissions.

An admission is ``ADMITTED`` while ``discharge_date`` is NULL and becomes
``DISCHARGED`` once it is set. There is no transition out of ``DISCHARGED``.
Room occupancy is not stored; it is the count of a room's open admissions.
"""

from django.db import models

from hospital_backend.core.models import Patient


class Room(models.Model):
	TYPE_GENERAL = 'GENERAL'
	TYPE_PRIVATE = 'PRIVATE'
	TYPE_ICU = 'ICU'
	TYPE_EMERGENCY = 'EMERGENCY'
	TYPE_OPERATING = 'OPERATING'

	TYPE_CHOICES = (
		(TYPE_GENERAL, TYPE_GENERAL),
		(TYPE_PRIVATE, TYPE_PRIVATE),
		(TYPE_ICU, TYPE_ICU),
		(TYPE_EMERGENCY, TYPE_EMERGENCY),
		(TYPE_OPERATING, TYPE_OPERATING),
	)

	id = models.BigAutoField(primary_key=True, db_column='room_id')
	room_number = models.CharField(max_length=20, unique=True)
	room_type = models.CharField(max_length=50, choices=TYPE_CHOICES, default=TYPE_GENERAL)
	capacity = models.PositiveIntegerField(default=1)

	class Meta:
		db_table = 'rooms'
		ordering = ['room_number', 'id']

	def __str__(self) -> str:
		return f"Room {self.room_number} ({self.room_type}, capacity={self.capacity})"


class Admission(models.Model):
	"""A patient's continuous occupancy of a room."""
	STATUS_ADMITTED = 'ADMITTED'
	STATUS_DISCHARGED = 'DISCHARGED'

	id = models.BigAutoField(primary_key=True, db_column='admission_id')
	patient = models.ForeignKey(
		Patient,
		on_delete=models.PROTECT,
		db_column='patient_id',
		related_name='+',
	)
	room = models.ForeignKey(
		Room,
		null=True,
		blank=True,
		on_delete=models.PROTECT,
		db_column='room_id',
		related_name='+',
	)
	admission_date = models.DateField()
	discharge_date = models.DateField(null=True, blank=True)

	class Meta:
		db_table = 'admissions'
		ordering = ['admission_date', 'id']
		indexes = [
			models.Index(fields=['room', 'discharge_date'], name='admissions_room_open_idx'),
			models.Index(fields=['patient', 'discharge_date'], name='admissions_patient_open_idx'),
		]

	def __str__(self) -> str:
		return f"Admission #{self.pk} patient_id={self.patient_id} room_id={self.room_id} ({self.status})"

	@property
	def is_current(self) -> bool:
		return self.discharge_date is None

	@property
	def status(self) -> str:
		return self.STATUS_ADMITTED if self.is_current else self.STATUS_DISCHARGED
