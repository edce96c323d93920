from django.apps import AppConfig


class AdmissionsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hospital_backend.admissions'
    label = 'admissions'
    verbose_name = 'Admissions (Rooms & Occupancy)'
