"""Appointment model and its status state machine.

State machine::

	SCHEDULED -> CONFIRMED -> COMPLETED
	SCHEDULED | CONFIRMED -> CANCELLED
	SCHEDULED | CONFIRMED -> NO_SHOW

``COMPLETED``, ``CANCELLED`` and ``NO_SHOW`` are terminal.
"""

from django.db import models

from hospital_backend.core.models import Doctor, Patient


class Appointment(models.Model):
	"""A doctor/patient encounter at an exact instant.

	There is no duration: two appointments conflict only when they share the
	same doctor and the same ``scheduled_at`` timestamp.
	"""
	STATUS_SCHEDULED = 'SCHEDULED'
	STATUS_CONFIRMED = 'CONFIRMED'
	STATUS_COMPLETED = 'COMPLETED'
	STATUS_CANCELLED = 'CANCELLED'
	STATUS_NO_SHOW = 'NO_SHOW'

	STATUS_CHOICES = (
		(STATUS_SCHEDULED, STATUS_SCHEDULED),
		(STATUS_CONFIRMED, STATUS_CONFIRMED),
		(STATUS_COMPLETED, STATUS_COMPLETED),
		(STATUS_CANCELLED, STATUS_CANCELLED),
		(STATUS_NO_SHOW, STATUS_NO_SHOW),
	)
	STATUSES = frozenset(value for value, _label in STATUS_CHOICES)

	TRANSITIONS = {
		STATUS_SCHEDULED: frozenset({STATUS_CONFIRMED, STATUS_CANCELLED, STATUS_NO_SHOW}),
		STATUS_CONFIRMED: frozenset({STATUS_COMPLETED, STATUS_CANCELLED, STATUS_NO_SHOW}),
		STATUS_COMPLETED: frozenset(),
		STATUS_CANCELLED: frozenset(),
		STATUS_NO_SHOW: frozenset(),
	}
	TERMINAL_STATUSES = frozenset(s for s, targets in TRANSITIONS.items() if not targets)

	# Statuses that block a new booking at the same instant.
	CONFLICT_STATUSES = (STATUS_SCHEDULED, STATUS_CONFIRMED, STATUS_COMPLETED)
	# Statuses that remove a timestamp from the free-slot listing.
	SLOT_HOLDING_STATUSES = (STATUS_SCHEDULED, STATUS_CONFIRMED, STATUS_COMPLETED, STATUS_NO_SHOW)

	id = models.BigAutoField(primary_key=True, db_column='appointment_id')
	patient = models.ForeignKey(
		Patient,
		on_delete=models.PROTECT,
		db_column='patient_id',
		related_name='+',
	)
	doctor = models.ForeignKey(
		Doctor,
		on_delete=models.PROTECT,
		db_column='doctor_id',
		related_name='+',
	)
	scheduled_at = models.DateTimeField(db_column='appointment_date')
	status = models.CharField(
		max_length=30,
		choices=STATUS_CHOICES,
		default=STATUS_SCHEDULED,
	)

	class Meta:
		db_table = 'appointments'
		ordering = ['scheduled_at', 'id']
		indexes = [
			models.Index(fields=['doctor', 'scheduled_at'], name='appointments_doctor_at_idx'),
		]

	def __str__(self) -> str:
		return f"Appointment #{self.pk} doctor_id={self.doctor_id} at {self.scheduled_at} ({self.status})"

	@property
	def is_terminal(self) -> bool:
		return self.status in self.TERMINAL_STATUSES

	def can_transition_to(self, status: str) -> bool:
		return status in self.TRANSITIONS.get(self.status, frozenset())
