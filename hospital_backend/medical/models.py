"""Prescriptions and medical records.

Medical records are append-only: once stored they can be neither updated
nor deleted through the ORM.
"""

from django.db import models
from django.utils import timezone

from hospital_backend.core.exceptions import AlreadyInTerminalState
from hospital_backend.core.models import Doctor, Patient


class Prescription(models.Model):
	id = models.BigAutoField(primary_key=True, db_column='prescription_id')
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
	medication_name = models.CharField(max_length=200)
	dosage = models.CharField(max_length=100, blank=True, default='')
	issued_date = models.DateField()
	expiry_date = models.DateField()

	class Meta:
		db_table = 'prescriptions'
		ordering = ['-issued_date', 'id']

	def __str__(self) -> str:
		return f"{self.medication_name} {self.dosage} (patient_id={self.patient_id})"


class MedicalRecord(models.Model):
	id = models.BigAutoField(primary_key=True, db_column='record_id')
	patient = models.ForeignKey(
		Patient,
		on_delete=models.PROTECT,
		db_column='patient_id',
		related_name='+',
	)
	diagnosis = models.CharField(max_length=400, blank=True, default='')
	notes = models.CharField(max_length=2000, blank=True, default='')
	created_at = models.DateTimeField(default=timezone.now)

	class Meta:
		db_table = 'medical_records'
		ordering = ['-created_at', '-id']

	def __str__(self) -> str:
		return f"MedicalRecord #{self.pk} patient_id={self.patient_id}: {self.diagnosis}"

	def save(self, *args, **kwargs):
		if not self._state.adding:
			raise AlreadyInTerminalState(
				'Medical records are append-only and cannot be updated',
				model='MedicalRecord',
				pk=self.pk,
				state='RECORDED',
			)
		# An explicit id must not turn the insert into an UPDATE of a stored row.
		kwargs.setdefault('force_insert', True)
		super().save(*args, **kwargs)

	def delete(self, *args, **kwargs):
		raise AlreadyInTerminalState(
			'Medical records are append-only and cannot be deleted',
			model='MedicalRecord',
			pk=self.pk,
			state='RECORDED',
		)
