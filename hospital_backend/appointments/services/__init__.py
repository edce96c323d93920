"""
Appointments Services Module.

- scheduling: conflict detection, working-hours validation, free slots and
  the appointment status state machine
"""

from hospital_backend.appointments.services.scheduling import (
    available_slots,
    check_appointment_conflicts,
    day_bounds,
    record_appointment,
    record_status_change,
    schedule_appointment,
    update_status,
    validate_working_hours,
)

__all__ = [
    "available_slots",
    "check_appointment_conflicts",
    "day_bounds",
    "record_appointment",
    "record_status_change",
    "schedule_appointment",
    "update_status",
    "validate_working_hours",
]
