"""Management command: per-room occupancy and average length of stay."""
from datetime import date

from django.core.management.base import BaseCommand
from django.utils import timezone

from hospital_backend.admissions.models import Admission, Room
from hospital_backend.admissions.services import (
    average_length_of_stay,
    length_of_stay,
    room_availability,
    room_occupancy,
)
from hospital_backend.core.repositories import DjangoRepository


class Command(BaseCommand):
    help = 'Show room occupancy, free places and average length of stay'

    def add_arguments(self, parser):
        parser.add_argument(
            '--as-of',
            type=date.fromisoformat,
            default=None,
            help='Reference date (YYYY-MM-DD) for ongoing stays; defaults to today.',
        )

    def handle(self, *args, **options):
        as_of = options['as_of'] or timezone.localdate()
        repo = DjangoRepository()

        rooms = repo.list_all(Room)
        self.stdout.write('+' + '-' * 12 + '+' + '-' * 11 + '+' + '-' * 10 + '+' + '-' * 10 + '+' + '-' * 8 + '+')
        self.stdout.write('| Room       | Type      | Capacity | Occupied | Free   |')
        self.stdout.write('+' + '-' * 12 + '+' + '-' * 11 + '+' + '-' * 10 + '+' + '-' * 10 + '+' + '-' * 8 + '+')
        for room in rooms:
            occupied = room_occupancy(repo, room.pk)
            free = room_availability(repo, room.pk)
            self.stdout.write(
                f'| {room.room_number:<10} | {room.room_type:<9} |{room.capacity:^10}|{occupied:^10}|{free:^8}|'
            )
        self.stdout.write('+' + '-' * 12 + '+' + '-' * 11 + '+' + '-' * 10 + '+' + '-' * 10 + '+' + '-' * 8 + '+')

        admissions = repo.list_all(Admission)
        ongoing = [adm for adm in admissions if adm.is_current]
        self.stdout.write('')
        self.stdout.write(f'Ongoing admissions as of {as_of.isoformat()}: {len(ongoing)}')
        for adm in ongoing:
            prefix = f'  #{adm.pk} patient_id={adm.patient_id} room_id={adm.room_id} '
            if adm.admission_date > as_of:
                self.stdout.write(self.style.WARNING(
                    prefix + f'starts {adm.admission_date.isoformat()} (after --as-of)'
                ))
                continue
            self.stdout.write(prefix + f'day {length_of_stay(adm, as_of)}')

        average = average_length_of_stay(admissions)
        if average is None:
            self.stdout.write('Average length of stay: n/a (no discharged admissions)')
        else:
            self.stdout.write(f'Average length of stay: {average:.1f} days')
