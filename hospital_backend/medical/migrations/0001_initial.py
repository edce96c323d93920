from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("core", "0001_initial"),
	]

	operations = [
		migrations.CreateModel(
			name="Prescription",
			fields=[
				("id", models.BigAutoField(db_column="prescription_id", primary_key=True, serialize=False)),
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
				("medication_name", models.CharField(max_length=200)),
				("dosage", models.CharField(blank=True, default="", max_length=100)),
				("issued_date", models.DateField()),
				("expiry_date", models.DateField()),
			],
			options={
				"db_table": "prescriptions",
				"ordering": ["-issued_date", "id"],
			},
		),
		migrations.CreateModel(
			name="MedicalRecord",
			fields=[
				("id", models.BigAutoField(db_column="record_id", primary_key=True, serialize=False)),
				(
					"patient",
					models.ForeignKey(
						db_column="patient_id",
						on_delete=django.db.models.deletion.PROTECT,
						related_name="+",
						to="core.patient",
					),
				),
				("diagnosis", models.CharField(blank=True, default="", max_length=400)),
				("notes", models.CharField(blank=True, default="", max_length=2000)),
				("created_at", models.DateTimeField(default=django.utils.timezone.now)),
			],
			options={
				"db_table": "medical_records",
				"ordering": ["-created_at", "-id"],
			},
		),
	]
