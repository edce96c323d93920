"""
Admissions Services Module.

- admissions: room creation, admission/discharge decisions, occupancy and
  length-of-stay facts
"""

from hospital_backend.admissions.services.admissions import (
    admit_patient,
    average_length_of_stay,
    create_room,
    current_admission,
    discharge_patient,
    length_of_stay,
    record_admission,
    record_discharge,
    room_availability,
    room_occupancy,
)

__all__ = [
    "admit_patient",
    "average_length_of_stay",
    "create_room",
    "current_admission",
    "discharge_patient",
    "length_of_stay",
    "record_admission",
    "record_discharge",
    "room_availability",
    "room_occupancy",
]
