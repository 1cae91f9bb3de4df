from django.core.management.base import BaseCommand

from tickets.services.factory import get_lifecycle_engine


class Command(BaseCommand):
    help = "Expire pending group invitations whose deadline has passed and release their seats."

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=None,
            help="Maximum number of invitations to expire in this run.",
        )

    def handle(self, *args, **options):
        expired = get_lifecycle_engine().sweep_expired(limit=options["limit"])
        self.stdout.write(self.style.SUCCESS(f"Expired {expired} invitation(s)."))
