"""
Repository Port consumed by the engine, plus its two adapters.

The engine only reads through a ``HospitalRepository``. Writes of accepted
decisions are issued by the caller (see the ``record_*`` helpers in each
app's services), so every decision function is retry-safe.

- ``DjangoRepository`` reads through the ORM.
- ``InMemoryRepository`` reads from an explicit snapshot of entities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Iterable, Sequence

from django.db.models import F, Model

from hospital_backend.admissions.models import Admission
from hospital_backend.appointments.models import Appointment
from hospital_backend.core.exceptions import EntityNotFound
from hospital_backend.inventory.models import InventoryStock

DateRange = tuple[datetime, datetime]


class HospitalRepository(ABC):
    """Read-only queries the engine issues against the store."""

    @abstractmethod
    def get_by_id(self, model: type[Model], pk: Any) -> Model:
        """Return the entity or raise ``EntityNotFound``."""

    @abstractmethod
    def list_all(self, model: type[Model]) -> list[Model]:
        """Return every entity of ``model`` ordered by id."""

    @abstractmethod
    def find_appointments(
        self,
        *,
        doctor_id: int | None = None,
        patient_id: int | None = None,
        date_range: DateRange | None = None,
        statuses: Iterable[str] | None = None,
    ) -> list[Appointment]:
        """Appointments matching every given filter, ordered by time.

        ``date_range`` is half-open: ``start <= scheduled_at < end``.
        """

    @abstractmethod
    def find_admissions(
        self,
        *,
        patient_id: int | None = None,
        room_id: int | None = None,
        only_current: bool = False,
    ) -> list[Admission]:
        """Admissions matching the filters; ``only_current`` keeps open ones."""

    @abstractmethod
    def find_stock(self, item_id: int) -> list[InventoryStock]:
        """Stock lots of an item, soonest expiry first, no-expiry lots last."""

    @abstractmethod
    def exists_by_unique_field(
        self,
        model: type[Model],
        field: str,
        value: Any,
        *,
        exclude_id: Any = None,
    ) -> bool:
        """True if another entity already holds ``value`` in ``field``."""


def stock_fifo_key(stock: InventoryStock) -> tuple:
    return (stock.expiration_date is None, stock.expiration_date or date.min, stock.pk or 0)


class DjangoRepository(HospitalRepository):
    """ORM-backed repository. All queries go to a single database alias."""

    def __init__(self, using: str = 'default'):
        self.using = using

    def get_by_id(self, model, pk):
        obj = model.objects.using(self.using).filter(pk=pk).first() if pk is not None else None
        if obj is None:
            raise EntityNotFound(model=model.__name__, pk=pk)
        return obj

    def list_all(self, model):
        return list(model.objects.using(self.using).order_by('pk'))

    def find_appointments(self, *, doctor_id=None, patient_id=None, date_range=None, statuses=None):
        qs = Appointment.objects.using(self.using).all()
        if doctor_id is not None:
            qs = qs.filter(doctor_id=doctor_id)
        if patient_id is not None:
            qs = qs.filter(patient_id=patient_id)
        if date_range is not None:
            start, end = date_range
            qs = qs.filter(scheduled_at__gte=start, scheduled_at__lt=end)
        if statuses is not None:
            qs = qs.filter(status__in=list(statuses))
        return list(qs.order_by('scheduled_at', 'id'))

    def find_admissions(self, *, patient_id=None, room_id=None, only_current=False):
        qs = Admission.objects.using(self.using).all()
        if patient_id is not None:
            qs = qs.filter(patient_id=patient_id)
        if room_id is not None:
            qs = qs.filter(room_id=room_id)
        if only_current:
            qs = qs.filter(discharge_date__isnull=True)
        return list(qs.order_by('admission_date', 'id'))

    def find_stock(self, item_id):
        return list(
            InventoryStock.objects.using(self.using)
            .filter(item_id=item_id)
            .order_by(F('expiration_date').asc(nulls_last=True), 'id')
        )

    def exists_by_unique_field(self, model, field, value, *, exclude_id=None):
        qs = model.objects.using(self.using).filter(**{field: value})
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        return qs.exists()

    def lock(self, model: type[Model], *pks: Any) -> list[Model]:
        """Take row locks on ``pks``; must run inside ``transaction.atomic``."""
        return list(
            model.objects.using(self.using)
            .select_for_update()
            .filter(pk__in=[pk for pk in pks if pk is not None])
            .order_by('pk')
        )


class InMemoryRepository(HospitalRepository):
    """Repository over an explicit snapshot of (unsaved) model instances.

    ``add`` stores entities and assigns ids to those without one. Ids are
    never reused. Adding an entity whose id is already present replaces the
    stored one, which is how a caller commits an accepted decision.
    """

    def __init__(self, *entities: Model):
        self._rows: dict[type[Model], dict[Any, Model]] = defaultdict(dict)
        self._last_ids: dict[type[Model], int] = defaultdict(int)
        self.add(*entities)

    def add(self, *entities: Model) -> None:
        for entity in entities:
            model = type(entity)
            if entity.pk is None:
                self._last_ids[model] += 1
                entity.pk = self._last_ids[model]
            elif isinstance(entity.pk, int):
                self._last_ids[model] = max(self._last_ids[model], entity.pk)
            self._rows[model][entity.pk] = entity

    def _all(self, model: type[Model]) -> Sequence[Model]:
        return list(self._rows[model].values())

    def get_by_id(self, model, pk):
        try:
            return self._rows[model][pk]
        except KeyError:
            raise EntityNotFound(model=model.__name__, pk=pk) from None

    def list_all(self, model):
        return sorted(self._all(model), key=lambda obj: obj.pk)

    def find_appointments(self, *, doctor_id=None, patient_id=None, date_range=None, statuses=None):
        wanted = set(statuses) if statuses is not None else None
        rows = []
        for appt in self._all(Appointment):
            if doctor_id is not None and appt.doctor_id != doctor_id:
                continue
            if patient_id is not None and appt.patient_id != patient_id:
                continue
            if date_range is not None and not (date_range[0] <= appt.scheduled_at < date_range[1]):
                continue
            if wanted is not None and appt.status not in wanted:
                continue
            rows.append(appt)
        return sorted(rows, key=lambda a: (a.scheduled_at, a.pk))

    def find_admissions(self, *, patient_id=None, room_id=None, only_current=False):
        rows = [
            adm for adm in self._all(Admission)
            if (patient_id is None or adm.patient_id == patient_id)
            and (room_id is None or adm.room_id == room_id)
            and (not only_current or adm.discharge_date is None)
        ]
        return sorted(rows, key=lambda a: (a.admission_date, a.pk))

    def find_stock(self, item_id):
        return sorted(
            (s for s in self._all(InventoryStock) if s.item_id == item_id),
            key=stock_fifo_key,
        )

    def exists_by_unique_field(self, model, field, value, *, exclude_id=None):
        return any(
            getattr(obj, field) == value
            for obj in self._all(model)
            if exclude_id is None or obj.pk != exclude_id
        )
