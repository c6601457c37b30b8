from django.core.management.base import BaseCommand, CommandError

from countries.exceptions import RefreshError
from countries.refresh import refresh
from countries.utils import make_multiplier


class Command(BaseCommand):
    help = "Fetch countries and exchange rates, upsert them and redraw the summary image."

    def add_arguments(self, parser):
        parser.add_argument("--seed", type=int, default=None,
                            help="Seed for the GDP multiplier draws (reproducible estimates).")
        parser.add_argument("--chunk-size", type=int, default=None,
                            help="Rows per bulk write (default: UPSERT_CHUNK_SIZE).")

    def handle(self, *args, **options):
        kwargs = {"chunk_size": options["chunk_size"]}
        if options["seed"] is not None:
            kwargs["multiplier"] = make_multiplier(options["seed"])

        try:
            result = refresh(**kwargs)
        except RefreshError as exc:
            raise CommandError(f"Refresh failed: {exc}") from exc

        self.stdout.write(self.style.SUCCESS(
            f"Refreshed {result.records_written} countries at {result.as_of.isoformat()}"
        ))
