from django.db import models


DEFAULT_LEAD_SOURCES = (
    "Website",
    "Referral",
    "Social Media",
    "Phone Call",
    "Email",
    "Event",
    "Other",
)

DEFAULT_SOURCE = "Website"


class InterestStatus(models.TextChoices):
    NOT_CONTACTED = "NOT_CONTACTED", "Not contacted"
    INTERESTED = "INTERESTED", "Interested"
    NOT_INTERESTED = "NOT_INTERESTED", "Not interested"


class InterestQuerySet(models.QuerySet):
    def for_business(self, business_id):
        return self.filter(business_id=business_id)

    def due_between(self, start, end):
        return self.filter(
            follow_ups__next_follow_up_date__gte=start,
            follow_ups__next_follow_up_date__lt=end,
        ).distinct()


class InterestSubmission(models.Model):
    """
    An investor's inquiry about one business. Only APPROVED businesses take
    new submissions.
    """
    business = models.ForeignKey(
        "businesses.Business",
        on_delete=models.CASCADE,
        related_name="interests",
    )
    investor_name = models.CharField(max_length=100)
    phone_number = models.CharField(max_length=20)
    email = models.EmailField()
    message = models.TextField(blank=True, null=True)
    has_consent = models.BooleanField(default=True)

    contacted = models.BooleanField(default=False)
    follow_up_remarks = models.TextField(blank=True, null=True)
    status = models.CharField(
        max_length=20,
        choices=InterestStatus.choices,
        default=InterestStatus.NOT_CONTACTED,
    )
    source = models.CharField(max_length=100, default=DEFAULT_SOURCE)

    # highest follow-up number ever issued; never decremented
    last_follow_up_number = models.PositiveIntegerField(default=0)

    submitted_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = InterestQuerySet.as_manager()

    class Meta:
        ordering = ["-submitted_at"]
        indexes = [
            models.Index(fields=["business", "submitted_at"], name="interest_business_time_idx"),
            models.Index(fields=["status"], name="interest_status_idx"),
        ]

    def __str__(self):
        return f"{self.investor_name} -> {self.business_id}"


class InterestFollowUp(models.Model):
    interest = models.ForeignKey(
        InterestSubmission,
        on_delete=models.CASCADE,
        related_name="follow_ups",
    )
    follow_up_number = models.PositiveIntegerField()
    remarks = models.TextField()
    next_follow_up_date = models.DateTimeField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["follow_up_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["interest", "follow_up_number"],
                name="unique_follow_up_number_per_interest",
            ),
        ]

    def __str__(self):
        return f"Follow-up #{self.follow_up_number} on {self.interest_id}"


class LeadSource(models.Model):
    """Custom lead-source label owned by one business, layered over DEFAULT_LEAD_SOURCES."""
    business = models.ForeignKey(
        "businesses.Business",
        on_delete=models.CASCADE,
        related_name="lead_sources",
    )
    name = models.CharField(max_length=100)
    is_default = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["business", "name"], name="unique_lead_source_per_business"),
        ]

    def __str__(self):
        return self.name
