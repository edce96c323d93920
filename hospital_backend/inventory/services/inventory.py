"""
Inventory Engine.

Stock consumption is all-or-nothing: ``consume_stock`` either proposes the
complete set of per-lot deductions that satisfies the request, or raises
``InsufficientStock`` and proposes nothing. Lots are drawn soonest-expiry
first; lots without an expiration date are drawn last.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping

from django.db import transaction

from hospital_backend.core.conf import get_expiry_horizon_days
from hospital_backend.core.exceptions import InsufficientStock
from hospital_backend.core.repositories import DjangoRepository, HospitalRepository, stock_fifo_key
from hospital_backend.core.validation import ensure_non_negative, ensure_positive, ensure_required
from hospital_backend.inventory.models import InventoryItem, InventoryStock, Supplier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockDeduction:
    """Quantity taken from one lot."""
    stock_id: int
    quantity_before: int
    deducted: int

    @property
    def quantity_after(self) -> int:
        return self.quantity_before - self.deducted


@dataclass(frozen=True)
class StockConsumption:
    """Proposed consumption; ``lots`` are updated copies to persist together."""
    item_id: int
    requested: int
    deductions: tuple[StockDeduction, ...]
    lots: tuple[InventoryStock, ...]

    @property
    def total_deducted(self) -> int:
        return sum(d.deducted for d in self.deductions)


@dataclass(frozen=True)
class ReorderAlert:
    item: InventoryItem
    on_hand: int

    @property
    def reorder_level(self) -> int:
        return self.item.reorder_level


@dataclass(frozen=True)
class ExpiryAlert:
    stock: InventoryStock
    days_until_expiry: int

    @property
    def expired(self) -> bool:
        return self.days_until_expiry < 0


# ---------------------------------------------------------------------------
# Catalogue / receiving
# ---------------------------------------------------------------------------

def register_supplier(repo: HospitalRepository, *, name: str, contact_info: str = '') -> Supplier:
    ensure_required(name, field='name')
    return Supplier(name=name, contact_info=contact_info)


def create_inventory_item(
    repo: HospitalRepository,
    *,
    name: str,
    category: str = '',
    unit_of_measure: str = '',
    reorder_level: int = 0,
) -> InventoryItem:
    ensure_required(name, field='name')
    ensure_non_negative(reorder_level, field='reorder_level')
    return InventoryItem(
        name=name,
        category=category,
        unit_of_measure=unit_of_measure,
        reorder_level=reorder_level,
    )


def receive_stock(
    repo: HospitalRepository,
    *,
    item_id: int,
    quantity: int,
    location: str = '',
    supplier_id: int | None = None,
    expiration_date: date | None = None,
) -> InventoryStock:
    """New lot of an existing item."""
    ensure_non_negative(quantity, field='quantity')
    repo.get_by_id(InventoryItem, item_id)
    if supplier_id is not None:
        repo.get_by_id(Supplier, supplier_id)
    return InventoryStock(
        item_id=item_id,
        supplier_id=supplier_id,
        location=location,
        quantity_on_hand=quantity,
        expiration_date=expiration_date,
    )


def restock(repo: HospitalRepository, *, stock_id: int, quantity: int) -> InventoryStock:
    """Add ``quantity`` to an existing lot; returns an updated copy."""
    ensure_positive(quantity, field='quantity')
    lot = repo.get_by_id(InventoryStock, stock_id)
    updated = copy.copy(lot)
    updated.quantity_on_hand = lot.quantity_on_hand + quantity
    return updated


# ---------------------------------------------------------------------------
# Consumption
# ---------------------------------------------------------------------------

def stock_on_hand(repo: HospitalRepository, item_id: int) -> int:
    return sum(s.quantity_on_hand for s in repo.find_stock(item_id))


def consume_stock(repo: HospitalRepository, *, item_id: int, quantity: int) -> StockConsumption:
    """
    Plan a FIFO consumption of ``quantity`` units of an item.

    Raises:
        InvalidInput: If ``quantity`` is not positive
        EntityNotFound: If the item does not exist
        InsufficientStock: If all lots together hold less than ``quantity``
    """
    ensure_positive(quantity, field='quantity')
    repo.get_by_id(InventoryItem, item_id)

    lots = sorted(repo.find_stock(item_id), key=stock_fifo_key)
    available = sum(lot.quantity_on_hand for lot in lots)
    if available < quantity:
        raise InsufficientStock(item_id=item_id, requested=quantity, available=available)

    remaining = quantity
    deductions: list[StockDeduction] = []
    updated_lots: list[InventoryStock] = []
    for lot in lots:
        if remaining == 0:
            break
        take = min(lot.quantity_on_hand, remaining)
        if take == 0:
            continue
        deductions.append(StockDeduction(
            stock_id=lot.pk,
            quantity_before=lot.quantity_on_hand,
            deducted=take,
        ))
        updated = copy.copy(lot)
        updated.quantity_on_hand = lot.quantity_on_hand - take
        updated_lots.append(updated)
        remaining -= take

    return StockConsumption(
        item_id=item_id,
        requested=quantity,
        deductions=tuple(deductions),
        lots=tuple(updated_lots),
    )


# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------

def reorder_alerts(
    items: Iterable[InventoryItem],
    stocks_by_item: Mapping[int, Iterable[InventoryStock]],
) -> list[ReorderAlert]:
    """Items whose summed stock is at or below their reorder level."""
    alerts: list[ReorderAlert] = []
    for item in items:
        on_hand = sum(s.quantity_on_hand for s in stocks_by_item.get(item.pk, ()))
        if on_hand <= item.reorder_level:
            alerts.append(ReorderAlert(item=item, on_hand=on_hand))
    return alerts


def expiry_alerts(
    stocks: Iterable[InventoryStock],
    as_of: date,
    horizon_days: int | None = None,
) -> list[ExpiryAlert]:
    """Lots expiring within ``horizon_days`` of ``as_of``, expired lots included."""
    ensure_required(as_of, field='as_of')
    if horizon_days is None:
        horizon_days = get_expiry_horizon_days()
    ensure_non_negative(horizon_days, field='horizon_days')

    alerts: list[ExpiryAlert] = []
    for stock in stocks:
        if stock.expiration_date is None:
            continue
        days = (stock.expiration_date - as_of).days
        if days <= horizon_days:
            alerts.append(ExpiryAlert(stock=stock, days_until_expiry=days))
    return sorted(alerts, key=lambda a: (a.days_until_expiry, a.stock.pk or 0))


# ---------------------------------------------------------------------------
# Transactional Helpers
# ---------------------------------------------------------------------------

def record_stock_consumption(
    *,
    item_id: int,
    quantity: int,
    using: str = 'default',
) -> StockConsumption:
    """Consume and persist every per-lot deduction in one transaction."""
    repo = DjangoRepository(using)
    with transaction.atomic(using=using):
        repo.lock(InventoryItem, item_id)
        consumption = consume_stock(repo, item_id=item_id, quantity=quantity)
        for lot in consumption.lots:
            lot.save(using=using, update_fields=['quantity_on_hand'])
    logger.info(
        'Stock consumed (item_id=%s, quantity=%s, lots=%s)',
        item_id, quantity, [d.stock_id for d in consumption.deductions],
    )
    return consumption
