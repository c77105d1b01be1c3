import logging

from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from core.exceptions import BadRequestError, ForbiddenError, NotFoundError, UnauthorizedError
from onboarding.models import OnboardingRequest
from .models import Business, BusinessRemovalRequest, BusinessStatus, RemovalStatus

logger = logging.getLogger(__name__)


def _get_business(business_id, *, lock=False) -> Business:
    qs = Business.objects.select_related("login", "category")
    if lock:
        qs = qs.select_for_update(of=("self",))
    business = qs.filter(pk=business_id).first()
    if business is None:
        raise NotFoundError("Business not found")
    return business


def _clear_onboarding_token(business: Business) -> None:
    # the token was already spent at registration; this retires it for good
    OnboardingRequest.objects.filter(created_business_login_id=business.login_id).update(
        onboarding_token=None,
        token_expires_at=None,
    )


def _search(qs, search):
    if search:
        qs = qs.filter(
            Q(name__icontains=search)
            | Q(registration_number__icontains=search)
            | Q(contact_email__icontains=search)
        )
    return qs


class BusinessService:
    @staticmethod
    def get(business_id) -> Business:
        return _get_business(business_id)

    # ── Directory ─────────────────────────────────────────────────────────────

    @staticmethod
    def list_public(category_id=None, search=None):
        qs = Business.objects.listed().select_related("category")
        if category_id:
            qs = qs.filter(category_id=category_id)
        return _search(qs, search).order_by("-is_featured", "-created_at")

    @staticmethod
    def get_public(business_id) -> Business:
        """Public profile; every read counts as a view."""
        updated = Business.objects.listed().filter(pk=business_id).update(view_count=F("view_count") + 1)
        if not updated:
            raise NotFoundError("Business not found")
        return (
            Business.objects.select_related("category")
            .prefetch_related("media")
            .get(pk=business_id)
        )

    # ── Admin ─────────────────────────────────────────────────────────────────

    @staticmethod
    def list_for_admin(status=None, search=None):
        qs = Business.objects.select_related("category", "login")
        if status:
            qs = qs.filter(status=status)
        return _search(qs, search).order_by("-created_at")

    @staticmethod
    def list_approved_for_admin(search=None):
        qs = Business.objects.select_related("category", "login").filter(status=BusinessStatus.APPROVED)
        return _search(qs, search).order_by("-created_at")

    @staticmethod
    def get_admin_detail(business_id) -> Business:
        business = (
            Business.objects.select_related("category", "login")
            .prefetch_related("media")
            .filter(pk=business_id)
            .first()
        )
        if business is None:
            raise NotFoundError("Business not found")
        return business

    @staticmethod
    @transaction.atomic
    def approve(business_id) -> Business:
        business = _get_business(business_id, lock=True)
        if business.status == BusinessStatus.APPROVED:
            raise BadRequestError("Business already approved")

        business.status = BusinessStatus.APPROVED
        business.rejection_reason = None
        business.approved_at = timezone.now()
        business.save(update_fields=["status", "rejection_reason", "approved_at", "updated_at"])
        _clear_onboarding_token(business)

        logger.info("Business %s approved", business.id)
        return business

    @staticmethod
    @transaction.atomic
    def reject(business_id, reason: str) -> Business:
        business = _get_business(business_id, lock=True)
        if business.status == BusinessStatus.REJECTED:
            raise BadRequestError("Business already rejected")

        business.status = BusinessStatus.REJECTED
        business.rejection_reason = reason
        business.save(update_fields=["status", "rejection_reason", "updated_at"])
        _clear_onboarding_token(business)

        logger.info("Business %s rejected", business.id)
        return business

    @staticmethod
    @transaction.atomic
    def update(business: Business, serializer) -> Business:
        """Applies an already-validated allow-listed update serializer."""
        return serializer.save()

    @staticmethod
    @transaction.atomic
    def toggle_active(business_id) -> Business:
        """Flips the business and its login together."""
        business = _get_business(business_id, lock=True)
        business.is_active = not business.is_active
        business.save(update_fields=["is_active", "updated_at"])

        login = business.login
        login.is_active = business.is_active
        login.save(update_fields=["is_active", "updated_at"])

        logger.info("Business %s active=%s", business.id, business.is_active)
        return business


class RemovalService:
    @staticmethod
    @transaction.atomic
    def request_removal(business: Business, reason: str = "") -> BusinessRemovalRequest:
        if BusinessRemovalRequest.objects.filter(business=business, status=RemovalStatus.PENDING).exists():
            raise ForbiddenError("You already have a pending removal request")

        request = BusinessRemovalRequest.objects.create(business=business, reason=reason or "")
        logger.info("Business %s requested removal (%s)", business.id, request.id)
        return request

    @staticmethod
    def list_requests(status=None):
        qs = BusinessRemovalRequest.objects.select_related("business")
        if status:
            qs = qs.filter(status=status)
        return qs.order_by("-requested_at")

    @staticmethod
    def _get_pending(request_id) -> BusinessRemovalRequest:
        request = (
            BusinessRemovalRequest.objects
            .select_for_update(of=("self",))
            .select_related("business", "business__login")
            .filter(pk=request_id)
            .first()
        )
        if request is None:
            raise NotFoundError("Removal request not found")
        if request.status != RemovalStatus.PENDING:
            raise ForbiddenError("This request has already been reviewed")
        return request

    @staticmethod
    @transaction.atomic
    def approve(request_id) -> BusinessRemovalRequest:
        """Marks the request approved and deactivates the business and its login."""
        request = RemovalService._get_pending(request_id)
        request.status = RemovalStatus.APPROVED
        request.reviewed_at = timezone.now()
        request.save(update_fields=["status", "reviewed_at"])

        business = request.business
        business.is_active = False
        business.save(update_fields=["is_active", "updated_at"])
        business.login.is_active = False
        business.login.save(update_fields=["is_active", "updated_at"])

        logger.info("Removal request %s approved, business %s deactivated", request.id, business.id)
        return request

    @staticmethod
    @transaction.atomic
    def reject(request_id) -> BusinessRemovalRequest:
        request = RemovalService._get_pending(request_id)
        request.status = RemovalStatus.REJECTED
        request.reviewed_at = timezone.now()
        request.save(update_fields=["status", "reviewed_at"])
        return request


class ProfileService:
    @staticmethod
    def get_own(user) -> Business:
        business = (
            Business.objects.select_related("category")
            .prefetch_related("media")
            .for_login(user.id)
            .first()
        )
        if business is None:
            raise NotFoundError("Business profile not found")
        return business

    @staticmethod
    @transaction.atomic
    def change_password(user, current_password: str, new_password: str) -> None:
        if not user.check_password(current_password):
            raise UnauthorizedError("Current password is incorrect")
        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])
        logger.info("Password changed for login %s", user.id)
