"""Inventory items, suppliers and stock lots.

Each ``InventoryStock`` row is one lot of an item at a location. Lots are
consumed FIFO by expiration date; lots without an expiration date go last.
"""

from django.db import models


class Supplier(models.Model):
	id = models.BigAutoField(primary_key=True, db_column='supplier_id')
	name = models.CharField(max_length=200, db_column='supplier_name')
	contact_info = models.CharField(max_length=300, blank=True, default='')

	class Meta:
		db_table = 'suppliers'
		ordering = ['name', 'id']

	def __str__(self) -> str:
		return self.name


class InventoryItem(models.Model):
	id = models.BigAutoField(primary_key=True, db_column='item_id')
	name = models.CharField(max_length=200, db_column='item_name')
	category = models.CharField(max_length=100, blank=True, default='', db_column='item_category')
	unit_of_measure = models.CharField(max_length=50, blank=True, default='')
	reorder_level = models.PositiveIntegerField(default=0)

	class Meta:
		db_table = 'inventory_items'
		ordering = ['name', 'id']

	def __str__(self) -> str:
		return self.name


class InventoryStock(models.Model):
	id = models.BigAutoField(primary_key=True, db_column='stock_id')
	item = models.ForeignKey(
		InventoryItem,
		on_delete=models.PROTECT,
		db_column='item_id',
		related_name='+',
	)
	supplier = models.ForeignKey(
		Supplier,
		null=True,
		blank=True,
		on_delete=models.SET_NULL,
		db_column='supplier_id',
		related_name='+',
	)
	location = models.CharField(max_length=100, blank=True, default='')
	quantity_on_hand = models.PositiveIntegerField(default=0)
	expiration_date = models.DateField(null=True, blank=True)

	class Meta:
		db_table = 'inventory_stock'
		ordering = ['item_id', 'expiration_date', 'id']

	def __str__(self) -> str:
		return f"Stock #{self.pk} item_id={self.item_id} qty={self.quantity_on_hand} exp={self.expiration_date}"
