from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("core", "0001_initial"),
	]

	operations = [
		migrations.CreateModel(
			name="Room",
			fields=[
				("id", models.BigAutoField(db_column="room_id", primary_key=True, serialize=False)),
				("room_number", models.CharField(max_length=20, unique=True)),
				(
					"room_type",
					models.CharField(
						choices=[
							("GENERAL", "GENERAL"),
							("PRIVATE", "PRIVATE"),
							("ICU", "ICU"),
							("EMERGENCY", "EMERGENCY"),
							("OPERATING", "OPERATING"),
						],
						default="GENERAL",
						max_length=50,
					),
				),
				("capacity", models.PositiveIntegerField(default=1)),
			],
			options={
				"db_table": "rooms",
				"ordering": ["room_number", "id"],
			},
		),
		migrations.CreateModel(
			name="Admission",
			fields=[
				("id", models.BigAutoField(db_column="admission_id", primary_key=True, serialize=False)),
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
					"room",
					models.ForeignKey(
						blank=True,
						db_column="room_id",
						null=True,
						on_delete=django.db.models.deletion.PROTECT,
						related_name="+",
						to="admissions.room",
					),
				),
				("admission_date", models.DateField()),
				("discharge_date", models.DateField(blank=True, null=True)),
			],
			options={
				"db_table": "admissions",
				"ordering": ["admission_date", "id"],
				"indexes": [
					models.Index(fields=["room", "discharge_date"], name="admissions_room_open_idx"),
					models.Index(fields=["patient", "discharge_date"], name="admissions_patient_open_idx"),
				],
			},
		),
	]
