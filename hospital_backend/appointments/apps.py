from django.apps import AppConfig


class AppointmentsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hospital_backend.appointments'
    label = 'appointments'
    verbose_name = 'Appointments (Scheduling)'
