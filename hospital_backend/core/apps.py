from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hospital_backend.core'
    label = 'core'
    verbose_name = 'Core (Departments, Staff, Patients)'
