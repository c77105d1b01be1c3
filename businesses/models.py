from django.conf import settings
from django.db import models
from django.db.models import Q


class Category(models.Model):
    name = models.CharField(max_length=120, unique=True)
    slug = models.SlugField(max_length=140, unique=True)
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class BusinessStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    APPROVED = "APPROVED", "Approved"
    REJECTED = "REJECTED", "Rejected"


class BusinessQuerySet(models.QuerySet):
    def listed(self):
        """Businesses visible in the public directory."""
        return self.filter(status=BusinessStatus.APPROVED, is_active=True)

    def for_login(self, user_id: int):
        return self.filter(login_id=user_id)


class Business(models.Model):
    """
    A registered company. Created PENDING when an approved applicant finishes
    registration; admins move it to APPROVED or REJECTED. `is_active` is
    independent of status and mirrors the login's `is_active`.
    """
    login = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="business",
    )
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="businesses")

    name = models.CharField(max_length=255)
    registration_number = models.CharField(max_length=100, unique=True)
    pan_number = models.CharField(max_length=50, blank=True, default="")

    business_type = models.CharField(max_length=120, default="Not specified")
    year_established = models.PositiveSmallIntegerField()
    location = models.CharField(max_length=255, default="Not specified")
    address = models.CharField(max_length=500, blank=True, default="")
    team_size = models.CharField(max_length=60, default="Not specified")
    funding_stage = models.CharField(max_length=60, blank=True, default="")

    # financials
    paid_up_capital = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    investment_capacity_min = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    investment_capacity_max = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    minimum_investment_units = models.PositiveIntegerField(null=True, blank=True)
    maximum_investment_units = models.PositiveIntegerField(null=True, blank=True)
    price_per_unit = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)
    expected_return_options = models.CharField(max_length=255, blank=True, default="")
    estimated_market_valuation = models.DecimalField(max_digits=20, decimal_places=2, null=True, blank=True)
    ipo_time_horizon = models.CharField(max_length=100, blank=True, default="")

    # descriptions
    brief_description = models.TextField()
    full_description = models.TextField(blank=True, default="")
    vision = models.TextField(blank=True, default="")
    mission = models.TextField(blank=True, default="")
    growth_plans = models.TextField(blank=True, default="")

    # contact
    contact_email = models.EmailField()
    contact_phone = models.CharField(max_length=20, blank=True, default="")
    website = models.URLField(max_length=255, blank=True, default="")
    facebook_url = models.URLField(max_length=255, blank=True, default="")
    linkedin_url = models.URLField(max_length=255, blank=True, default="")
    twitter_url = models.URLField(max_length=255, blank=True, default="")
    logo_url = models.CharField(max_length=500, blank=True, default="")

    status = models.CharField(max_length=20, choices=BusinessStatus.choices, default=BusinessStatus.PENDING)
    is_active = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    rejection_reason = models.TextField(blank=True, null=True)
    view_count = models.PositiveIntegerField(default=0)

    approved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BusinessQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "businesses"
        indexes = [
            models.Index(fields=["status", "is_active"], name="business_status_active_idx"),
            models.Index(fields=["category", "status"], name="business_category_status_idx"),
        ]

    def __str__(self):
        return self.name


class RemovalStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    APPROVED = "APPROVED", "Approved"
    REJECTED = "REJECTED", "Rejected"


class BusinessRemovalRequest(models.Model):
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="removal_requests")
    reason = models.TextField(blank=True, default="")
    status = models.CharField(max_length=20, choices=RemovalStatus.choices, default=RemovalStatus.PENDING)
    requested_at = models.DateTimeField(auto_now_add=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-requested_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["business"],
                condition=Q(status="PENDING"),
                name="one_pending_removal_per_business",
            ),
        ]

    def __str__(self):
        return f"Removal of {self.business_id} ({self.status})"
