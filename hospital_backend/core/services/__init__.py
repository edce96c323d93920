"""
Core Services Module.

- registry: creation commands for departments, doctors, nurses and patients
"""

from hospital_backend.core.services.registry import (
    assign_department,
    create_department,
    register_doctor,
    register_nurse,
    register_patient,
)

__all__ = [
    "assign_department",
    "create_department",
    "register_doctor",
    "register_nurse",
    "register_patient",
]
