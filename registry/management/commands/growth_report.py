from django.core.management.base import BaseCommand, CommandError

from registry.backend import BackendError, get_backend
from registry.services.dashboard import build_dashboard
from registry.services.growth import month_label


class Command(BaseCommand):
    help = "Print the monthly average height/weight of one administrator's children."

    def add_arguments(self, parser):
        parser.add_argument('admin_id')
        parser.add_argument('--year', type=int, default=None)
        parser.add_argument('--exclude-missing', action='store_true',
                            help='leave missing measurements out of the averages instead of counting them as 0')

    def handle(self, *args, **options):
        try:
            backend = get_backend()
        except BackendError as exc:
            raise CommandError(exc.message)
        missing_as_zero = False if options['exclude_missing'] else None
        board = build_dashboard(backend, options['admin_id'], options['year'], missing_as_zero)
        if board.error:
            raise CommandError(board.error)

        self.stdout.write(f"Anggota: {board.total_members}  Anak: {board.total_children}")
        self.stdout.write(f"Tahun: {board.selected_year} (tersedia: {', '.join(map(str, board.years)) or '-'})")
        if not board.growth:
            self.stdout.write('Belum ada data pertumbuhan.')
            return
        for point in board.growth:
            height = '-' if point.mean_height is None else f'{point.mean_height:.2f}'
            weight = '-' if point.mean_weight is None else f'{point.mean_weight:.2f}'
            self.stdout.write(f"{month_label(point.month):<10} tinggi {height:>7} cm  berat {weight:>6} kg")
