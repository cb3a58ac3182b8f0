from django.core.management.base import BaseCommand, CommandError

from accounts.session import SessionContext
from blood.display import BLOOD_TYPES
from core.search import ANY_BLOOD_TYPE, DONOR_KINDS, KIND_ALL, SearchFilter, count_by_kind, filter_donors
from core.services import ApiError, DonorApiClient, fetch_directory


class Command(BaseCommand):
    help = "Query the donor API and print the filtered blood + organ donor directory."

    def add_arguments(self, parser):
        parser.add_argument("--search", default="", help="Match name, address or location.")
        parser.add_argument(
            "--blood-type",
            default="",
            type=str.upper,
            choices=[ANY_BLOOD_TYPE.upper()] + BLOOD_TYPES,
            help="Blood type (any case), or 'all'. Ignored for --kind organ.",
        )
        parser.add_argument("--location", default="", help="Location substring.")
        parser.add_argument("--kind", default=KIND_ALL, choices=DONOR_KINDS)
        parser.add_argument("--token", default="", help="Bearer token for the API, if it needs one.")

    def handle(self, *args, **options):
        search_filter = SearchFilter(
            term=options["search"],
            blood_type=options["blood_type"],
            location=options["location"],
            donor_kind=options["kind"],
        )

        ctx = SessionContext()
        if options["token"]:
            ctx.save(options["token"])
        client = DonorApiClient(session_context=ctx)

        try:
            blood_donors, organ_donors = fetch_directory(client, search_filter)
        except ApiError as exc:
            raise CommandError(f"Donor API request failed: {exc}")

        results = filter_donors(blood_donors, organ_donors, search_filter)

        for item in results:
            d = item.donor
            if item.is_blood:
                self.stdout.write(f"[blood] {d.name} ({d.blood_label}) - {d.location} - {d.availability}")
            else:
                self.stdout.write(f"[organ] {d.full_name} - {d.display_location} - {d.organ_list}")

        counts = count_by_kind(results)
        self.stdout.write(self.style.SUCCESS(
            f"Donors found: {counts['total']} (blood: {counts['blood']}, organ: {counts['organ']})"
        ))
