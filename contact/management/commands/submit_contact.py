from django.core.management.base import BaseCommand, CommandError

from contact.processing import build_contact_form


class Command(BaseCommand):
    help = "Send one contact form submission to the configured endpoint"

    def add_arguments(self, parser):
        parser.add_argument("--name", required=True)
        parser.add_argument("--email", required=True)
        parser.add_argument("--message", required=True)
        parser.add_argument(
            "--endpoint",
            help="URL to post to instead of CONTACT_FORM_ENDPOINT; "
            "with neither set the message is stored in this site's database",
        )

    def handle(self, *args, **options):
        contact_form = build_contact_form(
            options["endpoint"],
            name=options["name"],
            email=options["email"],
            message=options["message"],
        )
        if not contact_form.submit():
            raise CommandError(contact_form.error_message)

        destination = contact_form.endpoint or "this site"
        self.stdout.write(self.style.SUCCESS(f"Message sent to {destination}"))
