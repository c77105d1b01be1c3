import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from django.utils.text import slugify

from accounts.models import User
from businesses.models import Business, Category
from core.exceptions import BadRequestError, ConflictError, NotFoundError
from notifications.tasks import queue_onboarding_approval, queue_onboarding_rejection
from uploads.services import MediaService
from .models import ACTIVE_STATUSES, OnboardingRequest, OnboardingStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationResult:
    user: User
    business: Business


def generate_onboarding_token() -> str:
    return secrets.token_hex(settings.ONBOARDING_TOKEN_BYTES)


def _get_request(request_id, *, lock=False) -> OnboardingRequest:
    qs = OnboardingRequest.objects.all()
    if lock:
        qs = qs.select_for_update()
    request = qs.filter(pk=request_id).first()
    if request is None:
        raise NotFoundError("Onboarding request not found")
    return request


def _location(city: str, district: str) -> str:
    if city and district:
        return f"{city}, {district}"
    return city or district or "Not specified"


def resolve_category(industry: str) -> Category:
    """
    Find-or-create keyed on the unique slug, so two first-time registrations
    naming the same industry end up on one row.
    """
    industry = industry.strip()
    category = Category.objects.filter(name__iexact=industry).first()
    if category is not None:
        return category
    category, _ = Category.objects.get_or_create(
        slug=slugify(industry)[:140] or "other",
        defaults={"name": industry},
    )
    return category


class OnboardingService:
    @staticmethod
    def submit(*, business_name: str, email: str, phone_number: str, message: str | None = None) -> OnboardingRequest:
        email = email.lower()
        if OnboardingRequest.objects.filter(email=email, status__in=ACTIVE_STATUSES).exists():
            raise ConflictError("An onboarding request with this email already exists")

        # unique_active_onboarding_email backs this up against concurrent submits
        with transaction.atomic():
            request = OnboardingRequest.objects.create(
                business_name=business_name,
                email=email,
                phone_number=phone_number,
                message=message or None,
            )
        logger.info("Onboarding request %s submitted by %s", request.id, email)
        return request

    @staticmethod
    def list_requests(status: str | None = None):
        qs = OnboardingRequest.objects.all()
        if status:
            qs = qs.filter(status=status)
        return qs.order_by("-submitted_at")

    @staticmethod
    def get(request_id) -> OnboardingRequest:
        return _get_request(request_id)

    @staticmethod
    @transaction.atomic
    def mark_contacted(request_id) -> OnboardingRequest:
        request = _get_request(request_id, lock=True)
        if request.status != OnboardingStatus.PENDING:
            raise BadRequestError("Only pending requests can be marked as contacted")

        request.status = OnboardingStatus.CONTACTED
        request.save(update_fields=["status"])
        return request

    @staticmethod
    @transaction.atomic
    def approve(request_id) -> OnboardingRequest:
        request = _get_request(request_id, lock=True)
        if request.status == OnboardingStatus.APPROVED:
            raise BadRequestError("Request already approved")
        if request.status == OnboardingStatus.REJECTED:
            raise BadRequestError("Cannot approve a rejected request")

        now = timezone.now()
        request.status = OnboardingStatus.APPROVED
        request.onboarding_token = generate_onboarding_token()
        request.token_expires_at = now + timedelta(hours=settings.ONBOARDING_TOKEN_EXPIRATION_HOURS)
        request.reviewed_at = now
        request.save(update_fields=["status", "onboarding_token", "token_expires_at", "reviewed_at"])

        queue_onboarding_approval(request.id)
        logger.info("Onboarding request %s approved", request.id)
        return request

    @staticmethod
    @transaction.atomic
    def reject(request_id, reason: str) -> OnboardingRequest:
        request = _get_request(request_id, lock=True)
        if request.status == OnboardingStatus.APPROVED:
            raise BadRequestError("Cannot reject an approved request")

        request.status = OnboardingStatus.REJECTED
        request.rejection_reason = reason
        request.reviewed_at = timezone.now()
        request.save(update_fields=["status", "rejection_reason", "reviewed_at"])

        queue_onboarding_rejection(request.id)
        logger.info("Onboarding request %s rejected", request.id)
        return request

    @staticmethod
    def validate_token(token: str, *, lock: bool = False) -> OnboardingRequest:
        """
        Checks, in order: token exists, request is APPROVED, token has not
        expired, token has not been spent on a registration.
        """
        qs = OnboardingRequest.objects.all()
        if lock:
            qs = qs.select_for_update()
        request = qs.filter(onboarding_token=token).first() if token else None

        if request is None:
            raise NotFoundError("Invalid token")
        if request.status != OnboardingStatus.APPROVED:
            raise BadRequestError("Token is not valid")
        if request.token_expires_at is None or request.token_expires_at <= timezone.now():
            raise BadRequestError("Token has expired")
        if request.created_business_login_id is not None:
            raise BadRequestError("Token has already been used")
        return request

    @staticmethod
    def complete_registration(*, token: str, password: str, data: dict, files: dict | None = None) -> RegistrationResult:
        """
        Creates the BUSINESS login and its PENDING business in one transaction
        and marks the token spent. Uploaded files are attached afterwards;
        a file that fails to store is logged and does not undo registration.
        """
        with transaction.atomic():
            request = OnboardingService.validate_token(token, lock=True)

            if User.objects.filter(email__iexact=request.email).exists():
                raise ConflictError("Email already registered")
            if Business.objects.filter(registration_number=data["registration_number"]).exists():
                raise ConflictError("Registration number already exists")

            category = resolve_category(data["industry"])
            user = User.objects.create_business_login(email=request.email, password=password)

            investment_sought = data.get("investment_sought") or 0
            business = Business.objects.create(
                login=user,
                category=category,
                name=data["company_name"],
                registration_number=data["registration_number"],
                pan_number=data.get("pan_number") or "",
                business_type=data.get("company_size") or "Not specified",
                team_size=data.get("company_size") or "Not specified",
                year_established=data.get("founded_year") or timezone.localdate().year,
                location=_location(data.get("city") or "", data.get("district") or ""),
                address=data.get("address") or "",
                funding_stage=data.get("funding_stage") or "",
                paid_up_capital=investment_sought,
                investment_capacity_min=0,
                investment_capacity_max=investment_sought,
                minimum_investment_units=data.get("minimum_investment_units"),
                maximum_investment_units=data.get("maximum_investment_units"),
                price_per_unit=data.get("price_per_unit"),
                expected_return_options=data.get("expected_return_options") or "",
                estimated_market_valuation=data.get("estimated_market_valuation"),
                ipo_time_horizon=data.get("ipo_time_horizon") or "",
                brief_description=data["description"],
                full_description=data.get("revenue_model") or data.get("use_of_funds") or "",
                vision=data.get("vision") or "",
                mission=data.get("mission") or "",
                growth_plans=data.get("use_of_funds") or "",
                contact_email=data.get("email") or request.email,
                contact_phone=data.get("phone") or "",
                website=data.get("website") or "",
                facebook_url=data.get("facebook") or "",
                linkedin_url=data.get("linkedin") or "",
                twitter_url=data.get("twitter") or "",
            )

            request.created_business_login = user
            request.save(update_fields=["created_business_login"])

        logger.info("Business %s registered from onboarding request %s", business.id, request.id)

        if files:
            try:
                MediaService.attach_registration_files(business, files)
            except Exception:
                logger.exception("Failed to store registration files for business %s", business.id)
            business.refresh_from_db()

        return RegistrationResult(user=user, business=business)
