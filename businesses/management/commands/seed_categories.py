from django.core.management.base import BaseCommand
from django.db import transaction

from businesses.models import Category

DEFAULT_CATEGORIES = (
    ("Tech Company", "tech", "Technology and software companies"),
    ("Hydropower", "hydropower", "Hydropower and renewable energy"),
    ("Fintech", "fintech", "Financial technology companies"),
    ("Edtech", "edtech", "Education technology companies"),
    ("Manufacturing", "manufacturing", "Manufacturing and production"),
    ("Tourism & Hospitality", "tourism", "Tourism, hotels, and hospitality"),
    ("Agriculture", "agriculture", "Agriculture and agribusiness"),
    ("Real Estate", "real-estate", "Real estate and construction"),
    ("Healthcare", "healthcare", "Healthcare and medical services"),
    ("Food & Beverage", "food-beverage", "Food and beverage industry"),
    ("Retail", "retail", "Retail and e-commerce"),
    ("Others", "others", "Other industries"),
)


@transaction.atomic
def seed_categories() -> int:
    """Inserts missing default categories; existing rows are left untouched."""
    created = 0
    for name, slug, description in DEFAULT_CATEGORIES:
        _, was_created = Category.objects.get_or_create(
            slug=slug,
            defaults={"name": name, "description": description},
        )
        created += was_created
    return created


class Command(BaseCommand):
    help = "Load the default business categories."

    def handle(self, *args, **options):
        created = seed_categories()
        self.stdout.write(self.style.SUCCESS(f"{created} categories created."))


# Run with: python manage.py seed_categories
