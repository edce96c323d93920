from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

	initial = True

	dependencies = []

	operations = [
		migrations.CreateModel(
			name="Department",
			fields=[
				("id", models.BigAutoField(db_column="department_id", primary_key=True, serialize=False)),
				("name", models.CharField(db_column="department_name", max_length=100, unique=True)),
				("floor_number", models.IntegerField(blank=True, null=True)),
			],
			options={
				"db_table": "departments",
				"ordering": ["name", "id"],
			},
		),
		migrations.CreateModel(
			name="Patient",
			fields=[
				("id", models.BigAutoField(db_column="patient_id", primary_key=True, serialize=False)),
				("national_id", models.CharField(blank=True, max_length=30, null=True, unique=True)),
				("full_name", models.CharField(max_length=200)),
				("date_of_birth", models.DateField(blank=True, null=True)),
				("gender", models.CharField(blank=True, default="", max_length=10)),
				("phone_number", models.CharField(blank=True, default="", max_length=30)),
				("email", models.CharField(blank=True, default="", max_length=100)),
			],
			options={
				"db_table": "patients",
				"ordering": ["full_name", "id"],
			},
		),
		migrations.CreateModel(
			name="Doctor",
			fields=[
				("id", models.BigAutoField(db_column="doctor_id", primary_key=True, serialize=False)),
				("full_name", models.CharField(max_length=200)),
				("specialty", models.CharField(blank=True, default="", max_length=100)),
				("license_number", models.CharField(max_length=50, unique=True)),
				(
					"department",
					models.ForeignKey(
						blank=True,
						db_column="department_id",
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to="core.department",
					),
				),
				("hire_date", models.DateField(blank=True, null=True)),
			],
			options={
				"db_table": "doctors",
				"ordering": ["full_name", "id"],
			},
		),
		migrations.CreateModel(
			name="Nurse",
			fields=[
				("id", models.BigAutoField(db_column="nurse_id", primary_key=True, serialize=False)),
				("full_name", models.CharField(max_length=200)),
				(
					"department",
					models.ForeignKey(
						blank=True,
						db_column="department_id",
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to="core.department",
					),
				),
				(
					"shift_type",
					models.CharField(
						blank=True,
						choices=[("Day", "Day"), ("Evening", "Evening"), ("Night", "Night")],
						default="",
						max_length=30,
					),
				),
			],
			options={
				"db_table": "nurses",
				"ordering": ["full_name", "id"],
			},
		),
	]
