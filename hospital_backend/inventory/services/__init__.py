"""
Inventory Services Module.

- inventory: catalogue and receiving commands, FIFO stock consumption,
  reorder and expiry alerts
"""

from hospital_backend.inventory.services.inventory import (
    ExpiryAlert,
    ReorderAlert,
    StockConsumption,
    StockDeduction,
    consume_stock,
    create_inventory_item,
    expiry_alerts,
    receive_stock,
    record_stock_consumption,
    register_supplier,
    reorder_alerts,
    restock,
    stock_on_hand,
)

__all__ = [
    # Classes
    "ExpiryAlert",
    "ReorderAlert",
    "StockConsumption",
    "StockDeduction",
    # Functions
    "consume_stock",
    "create_inventory_item",
    "expiry_alerts",
    "receive_stock",
    "record_stock_consumption",
    "register_supplier",
    "reorder_alerts",
    "restock",
    "stock_on_hand",
]
