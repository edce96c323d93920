from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

	initial = True

	dependencies = []

	operations = [
		migrations.CreateModel(
			name="Supplier",
			fields=[
				("id", models.BigAutoField(db_column="supplier_id", primary_key=True, serialize=False)),
				("name", models.CharField(db_column="supplier_name", max_length=200)),
				("contact_info", models.CharField(blank=True, default="", max_length=300)),
			],
			options={
				"db_table": "suppliers",
				"ordering": ["name", "id"],
			},
		),
		migrations.CreateModel(
			name="InventoryItem",
			fields=[
				("id", models.BigAutoField(db_column="item_id", primary_key=True, serialize=False)),
				("name", models.CharField(db_column="item_name", max_length=200)),
				("category", models.CharField(blank=True, db_column="item_category", default="", max_length=100)),
				("unit_of_measure", models.CharField(blank=True, default="", max_length=50)),
				("reorder_level", models.PositiveIntegerField(default=0)),
			],
			options={
				"db_table": "inventory_items",
				"ordering": ["name", "id"],
			},
		),
		migrations.CreateModel(
			name="InventoryStock",
			fields=[
				("id", models.BigAutoField(db_column="stock_id", primary_key=True, serialize=False)),
				(
					"item",
					models.ForeignKey(
						db_column="item_id",
						on_delete=django.db.models.deletion.PROTECT,
						related_name="+",
						to="inventory.inventoryitem",
					),
				),
				(
					"supplier",
					models.ForeignKey(
						blank=True,
						db_column="supplier_id",
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to="inventory.supplier",
					),
				),
				("location", models.CharField(blank=True, default="", max_length=100)),
				("quantity_on_hand", models.PositiveIntegerField(default=0)),
				("expiration_date", models.DateField(blank=True, null=True)),
			],
			options={
				"db_table": "inventory_stock",
				"ordering": ["item_id", "expiration_date", "id"],
			},
		),
	]
