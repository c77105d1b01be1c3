from django.conf import settings
from django.db import models
from django.db.models import Q


class OnboardingStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    CONTACTED = "CONTACTED", "Contacted"
    APPROVED = "APPROVED", "Approved"
    REJECTED = "REJECTED", "Rejected"


# statuses that block a second request from the same email
ACTIVE_STATUSES = (
    OnboardingStatus.PENDING,
    OnboardingStatus.CONTACTED,
    OnboardingStatus.APPROVED,
)


class OnboardingRequest(models.Model):
    """
    Inquiry a prospective business submits before any account exists.

    Approval issues a single-use, time-boxed registration token. The token is
    spent when `created_business_login` is set and cleared for good once the
    resulting business is approved or rejected.
    """
    business_name = models.CharField(max_length=255)
    email = models.EmailField()
    phone_number = models.CharField(max_length=20)
    message = models.TextField(blank=True, null=True)

    status = models.CharField(
        max_length=20,
        choices=OnboardingStatus.choices,
        default=OnboardingStatus.PENDING,
        db_index=True,
    )
    onboarding_token = models.CharField(max_length=128, unique=True, null=True, blank=True)
    token_expires_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True, null=True)
    created_business_login = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="onboarding_request",
    )

    submitted_at = models.DateTimeField(auto_now_add=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-submitted_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["email"],
                condition=Q(status__in=["PENDING", "CONTACTED", "APPROVED"]),
                name="unique_active_onboarding_email",
            ),
        ]

    def __str__(self):
        return f"{self.business_name} <{self.email}> ({self.status})"
