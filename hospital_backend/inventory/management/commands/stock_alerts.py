"""Management command: reorder and expiry alerts for all inventory items."""
from datetime import date

from django.core.management.base import BaseCommand
from django.utils import timezone

from hospital_backend.core.repositories import DjangoRepository
from hospital_backend.inventory.models import InventoryItem
from hospital_backend.inventory.services import expiry_alerts, reorder_alerts


class Command(BaseCommand):
    help = 'List items at or below their reorder level and lots close to expiry'

    def add_arguments(self, parser):
        parser.add_argument(
            '--as-of',
            type=date.fromisoformat,
            default=None,
            help='Reference date (YYYY-MM-DD); defaults to today.',
        )
        parser.add_argument(
            '--horizon-days',
            type=int,
            default=None,
            help='Expiry horizon in days; defaults to HOSPITAL_INVENTORY["EXPIRY_HORIZON_DAYS"].',
        )

    def handle(self, *args, **options):
        as_of = options['as_of'] or timezone.localdate()
        repo = DjangoRepository()

        items = repo.list_all(InventoryItem)
        stocks_by_item = {item.pk: repo.find_stock(item.pk) for item in items}
        names = {item.pk: item.name for item in items}

        reorder = reorder_alerts(items, stocks_by_item)
        self.stdout.write(f'Reorder alerts ({len(reorder)}):')
        for alert in reorder:
            self.stdout.write(
                f'  {alert.item.name:<24} on hand {alert.on_hand:>6} / reorder level {alert.reorder_level:>6}'
            )

        all_stock = [stock for stocks in stocks_by_item.values() for stock in stocks]
        expiring = expiry_alerts(all_stock, as_of, options['horizon_days'])
        self.stdout.write(f'Expiry alerts as of {as_of.isoformat()} ({len(expiring)}):')
        for alert in expiring:
            label = 'EXPIRED' if alert.expired else f'in {alert.days_until_expiry} days'
            self.stdout.write(
                f'  lot #{alert.stock.pk} {names.get(alert.stock.item_id, alert.stock.item_id)} '
                f'qty {alert.stock.quantity_on_hand} at {alert.stock.location or "-"}: '
                f'{alert.stock.expiration_date.isoformat()} ({label})'
            )
