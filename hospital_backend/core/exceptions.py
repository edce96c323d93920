"""
Error taxonomy for the hospital engine.

Decision functions raise these to their caller; nothing inside the engine
catches them. Callers translate them into responses (see
``hospital_backend.core.exception_handler``) or retry around their own
transaction. ``InvariantViolation`` signals a defect and is logged where
it is raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Conflict:
    """Represents a single uniqueness or capacity conflict."""
    type: str  # 'doctor_conflict', 'room_full', 'patient_admitted', 'duplicate_value'
    model: str
    id: int | None = None
    resource_id: int | None = None
    message: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = {
            'type': self.type,
            'model': self.model,
        }
        if self.id is not None:
            result['id'] = self.id
        if self.resource_id is not None:
            result['resource_id'] = self.resource_id
        if self.message:
            result['message'] = self.message
        if self.meta:
            result['meta'] = self.meta
        return result


class HospitalError(Exception):
    """Base exception for all engine errors."""
    code = 'hospital_error'
    http_status = 500

    def __init__(self, message: str, *, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = {'code': self.code, 'detail': self.message}
        if self.field:
            result['field'] = self.field
        return result


class EntityNotFound(HospitalError):
    """Raised when a referenced entity id does not exist."""
    code = 'not_found'
    http_status = 404

    def __init__(self, *, model: str, pk: Any, message: str | None = None):
        self.model = model
        self.pk = pk
        super().__init__(message or f'{model} with ID {pk} not found')

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result['model'] = self.model
        result['id'] = self.pk
        return result


class ConflictError(HospitalError):
    """
    Raised when an action would violate a uniqueness or capacity invariant.

    Contains a list of Conflict objects describing each conflict found.
    """
    code = 'conflict'
    http_status = 409

    def __init__(self, conflicts: list[Conflict], message: str = 'Conflicts detected'):
        self.conflicts = conflicts
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result['conflicts'] = [c.to_dict() for c in self.conflicts]
        return result


class RoomFull(ConflictError):
    code = 'room_full'


class PatientAlreadyAdmitted(ConflictError):
    code = 'patient_already_admitted'


class InvalidInput(HospitalError):
    """
    Raised when input data is invalid (date ordering, non-future appointment
    time, negative quantity, unknown enum value).
    """
    code = 'invalid_input'
    http_status = 400


class WorkingHoursViolation(InvalidInput):
    """
    Raised when a requested time falls outside the working-hours window.

    Attributes:
        doctor_id: The ID of the doctor
        date: The local date in question
        time: The requested local time of day
        window_start: Start of the working-hours window
        window_end: End of the working-hours window (exclusive)
    """
    code = 'outside_working_hours'

    def __init__(
        self,
        *,
        doctor_id: int,
        date: str,
        time: str,
        window_start: str,
        window_end: str,
        message: str = 'Requested time is outside working hours',
    ):
        self.doctor_id = doctor_id
        self.date = date
        self.time = time
        self.window_start = window_start
        self.window_end = window_end
        super().__init__(message, field='scheduled_at')

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update({
            'doctor_id': self.doctor_id,
            'date': self.date,
            'time': self.time,
            'window_start': self.window_start,
            'window_end': self.window_end,
        })
        return result


class AlreadyInTerminalState(HospitalError):
    """Raised when an entity cannot leave its current lifecycle state."""
    code = 'already_in_terminal_state'
    http_status = 409

    def __init__(self, message: str, *, model: str, pk: Any, state: str):
        self.model = model
        self.pk = pk
        self.state = state
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update({'model': self.model, 'id': self.pk, 'state': self.state})
        return result


class AlreadyDischarged(AlreadyInTerminalState):
    code = 'already_discharged'


class IllegalTransition(AlreadyInTerminalState):
    """Raised when a status change is not in the allowed transition table."""
    code = 'illegal_transition'

    def __init__(self, message: str, *, model: str, pk: Any, state: str, target: str):
        self.target = target
        super().__init__(message, model=model, pk=pk, state=state)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result['target'] = self.target
        return result


class InsufficientStock(HospitalError):
    code = 'insufficient_stock'
    http_status = 409

    def __init__(self, *, item_id: int, requested: int, available: int):
        self.item_id = item_id
        self.requested = requested
        self.available = available
        super().__init__(
            f'Item {item_id}: requested {requested}, only {available} available',
            field='quantity',
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update({
            'item_id': self.item_id,
            'requested': self.requested,
            'available': self.available,
        })
        return result


class InvariantViolation(HospitalError):
    """Internal defect (e.g. negative computed occupancy). Never retried."""
    code = 'invariant_violation'
    http_status = 500
