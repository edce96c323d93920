from django.apps import AppConfig


class MedicalConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hospital_backend.medical'
    label = 'medical'
    verbose_name = 'Medical (Prescriptions & Records)'
