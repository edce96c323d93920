from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("core", "0001_initial"),
	]

	operations = [
		migrations.CreateModel(
			name="Appointment",
			fields=[
				("id", models.BigAutoField(db_column="appointment_id", primary_key=True, serialize=False)),
				(
					"patient",
					models.ForeignKey(
						db_column="patient_id",
						on_delete=django.db.models.deletion.PROTECT,
						related_name="+",
						to="core.patient",
					),
				),
				(
					"doctor",
					models.ForeignKey(
						db_column="doctor_id",
						on_delete=django.db.models.deletion.PROTECT,
						related_name="+",
						to="core.doctor",
					),
				),
				("scheduled_at", models.DateTimeField(db_column="appointment_date")),
				(
					"status",
					models.CharField(
						choices=[
							("SCHEDULED", "SCHEDULED"),
							("CONFIRMED", "CONFIRMED"),
							("COMPLETED", "COMPLETED"),
							("CANCELLED", "CANCELLED"),
							("NO_SHOW", "NO_SHOW"),
						],
						default="SCHEDULED",
						max_length=30,
					),
				),
			],
			options={
				"db_table": "appointments",
				"ordering": ["scheduled_at", "id"],
				"indexes": [
					models.Index(fields=["doctor", "scheduled_at"], name="appointments_doctor_at_idx"),
				],
			},
		),
	]
