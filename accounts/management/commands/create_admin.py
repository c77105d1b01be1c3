from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounts.models import Role, User


class Command(BaseCommand):
    help = "Create a platform admin, or reset the password of an existing one."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", required=True)
        parser.add_argument("--name", default="")

    @transaction.atomic
    def handle(self, *args, **options):
        email = options["email"].lower()
        password = options["password"]
        if len(password) < 8:
            raise CommandError("Password must be at least 8 characters")

        user = User.objects.filter(email=email).first()
        if user is None:
            User.objects.create_superuser(email=email, password=password, name=options["name"])
            self.stdout.write(self.style.SUCCESS(f"Admin {email} created."))
            return

        if user.role != Role.ADMIN:
            raise CommandError(f"{email} belongs to a business login")

        user.set_password(password)
        if options["name"]:
            user.name = options["name"]
        user.is_active = True
        user.save(update_fields=["password", "name", "is_active", "updated_at"])
        self.stdout.write(self.style.SUCCESS(f"Admin {email} updated."))


# Run with: python manage.py create_admin --email admin@example.com --password secret123
