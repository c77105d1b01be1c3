import logging
from datetime import datetime, time, timedelta

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from accounts.models import Role
from businesses.models import Business, BusinessStatus
from core.exceptions import BadRequestError, ConflictError, NotFoundError
from notifications.tasks import queue_interest_emails
from .models import (
    DEFAULT_LEAD_SOURCES,
    DEFAULT_SOURCE,
    InterestFollowUp,
    InterestStatus,
    InterestSubmission,
    LeadSource,
)

logger = logging.getLogger(__name__)


def business_scope(user):
    """
    The business id a caller is confined to, or None for admins.
    A BUSINESS login without a business has no profile to act on.
    """
    if user.role == Role.ADMIN:
        return None
    business = getattr(user, "business", None)
    if business is None:
        raise NotFoundError("Business profile not found")
    return business.id


def today_window(now=None):
    """[local midnight today, local midnight tomorrow) as aware datetimes."""
    now = timezone.localtime(now)
    start = timezone.make_aware(datetime.combine(now.date(), time.min), now.tzinfo)
    return start, start + timedelta(days=1)


def _get_interest(interest_id, scope=None, *, lock=False) -> InterestSubmission:
    qs = InterestSubmission.objects.all()
    if lock:
        qs = qs.select_for_update()
    if scope is not None:
        qs = qs.for_business(scope)
    interest = qs.filter(pk=interest_id).first()
    if interest is None:
        raise NotFoundError("Interest not found")
    return interest


def _get_follow_up(follow_up_id, scope=None) -> InterestFollowUp:
    qs = InterestFollowUp.objects.select_related("interest")
    if scope is not None:
        qs = qs.filter(interest__business_id=scope)
    follow_up = qs.filter(pk=follow_up_id).first()
    if follow_up is None:
        raise NotFoundError("Follow-up not found")
    return follow_up


class InterestService:
    @staticmethod
    def submit(*, business_id, investor_name, phone_number, email, message=None, has_consent=True):
        business = Business.objects.filter(pk=business_id).first()
        if business is None:
            raise NotFoundError("Business not found")
        if business.status != BusinessStatus.APPROVED:
            raise BadRequestError("Business is not available for investment inquiries")

        with transaction.atomic():
            interest = InterestSubmission.objects.create(
                business=business,
                investor_name=investor_name,
                phone_number=phone_number,
                email=email.lower(),
                message=message or None,
                has_consent=has_consent,
                source=DEFAULT_SOURCE,
            )
            queue_interest_emails(interest.id)

        logger.info("Interest %s submitted for business %s", interest.id, business.id)
        return interest

    @staticmethod
    def list_for_business(business_id):
        return InterestSubmission.objects.for_business(business_id).order_by("-submitted_at")

    @staticmethod
    def list_all(*, status=None, source=None, business_id=None, search=None):
        qs = InterestSubmission.objects.select_related("business")
        if status:
            qs = qs.filter(status=status)
        if source:
            qs = qs.filter(source=source)
        if business_id:
            qs = qs.filter(business_id=business_id)
        if search:
            qs = qs.filter(
                Q(investor_name__icontains=search)
                | Q(email__icontains=search)
                | Q(phone_number__icontains=search)
            )
        return qs.order_by("-submitted_at")

    @staticmethod
    def get(interest_id, scope=None) -> InterestSubmission:
        return _get_interest(interest_id, scope)

    @staticmethod
    @transaction.atomic
    def update(interest_id, data: dict, scope=None) -> InterestSubmission:
        """
        Partial update of contacted, follow_up_remarks, status and source.
        Any status other than NOT_CONTACTED forces contacted=True; nothing
        forces it back to False.
        """
        interest = _get_interest(interest_id, scope, lock=True)

        fields = []
        for name in ("contacted", "follow_up_remarks", "status", "source"):
            if name in data:
                setattr(interest, name, data[name])
                fields.append(name)

        if "status" in data and data["status"] != InterestStatus.NOT_CONTACTED:
            interest.contacted = True
            if "contacted" not in fields:
                fields.append("contacted")

        interest.save(update_fields=fields + ["updated_at"])
        return interest

    @staticmethod
    def due_today(scope=None, now=None):
        start, end = today_window(now)
        qs = InterestSubmission.objects.due_between(start, end).select_related("business")
        if scope is not None:
            qs = qs.for_business(scope)
        return qs.prefetch_related("follow_ups").order_by("-submitted_at")

    @staticmethod
    def all_sources():
        """Defaults first, then every other source value seen on a submission."""
        used = (
            InterestSubmission.objects.exclude(source__in=DEFAULT_LEAD_SOURCES)
            .order_by("source")
            .values_list("source", flat=True)
            .distinct()
        )
        return list(DEFAULT_LEAD_SOURCES) + [s for s in used if s]


class FollowUpService:
    @staticmethod
    def list_for_interest(interest_id, scope=None):
        interest = _get_interest(interest_id, scope)
        return interest.follow_ups.order_by("follow_up_number")

    @staticmethod
    @transaction.atomic
    def add(interest_id, remarks: str, next_follow_up_date=None, scope=None) -> InterestFollowUp:
        interest = _get_interest(interest_id, scope, lock=True)

        interest.last_follow_up_number += 1
        interest.contacted = True
        interest.save(update_fields=["last_follow_up_number", "contacted", "updated_at"])

        follow_up = InterestFollowUp.objects.create(
            interest=interest,
            follow_up_number=interest.last_follow_up_number,
            remarks=remarks,
            next_follow_up_date=next_follow_up_date,
        )
        logger.info("Follow-up #%s added to interest %s", follow_up.follow_up_number, interest.id)
        return follow_up

    @staticmethod
    @transaction.atomic
    def update(follow_up_id, remarks: str, scope=None, **changes) -> InterestFollowUp:
        """`next_follow_up_date` is only touched when passed (None clears it)."""
        follow_up = _get_follow_up(follow_up_id, scope)
        follow_up.remarks = remarks
        fields = ["remarks", "updated_at"]
        if "next_follow_up_date" in changes:
            follow_up.next_follow_up_date = changes["next_follow_up_date"]
            fields.append("next_follow_up_date")
        follow_up.save(update_fields=fields)
        return follow_up

    @staticmethod
    @transaction.atomic
    def delete(follow_up_id, scope=None) -> None:
        # siblings keep their numbers
        follow_up = _get_follow_up(follow_up_id, scope)
        logger.info("Follow-up #%s deleted from interest %s", follow_up.follow_up_number, follow_up.interest_id)
        follow_up.delete()


class LeadSourceService:
    @staticmethod
    def list_for_business(business_id) -> list[dict]:
        entries = [{"id": None, "name": name, "is_default": True} for name in DEFAULT_LEAD_SOURCES]
        for source in LeadSource.objects.filter(business_id=business_id).order_by("name"):
            entries.append({"id": source.id, "name": source.name, "is_default": source.is_default})
        return entries

    @staticmethod
    @transaction.atomic
    def add(business_id, name: str) -> LeadSource:
        name = name.strip()
        if not name:
            raise BadRequestError("Lead source name is required")
        # exact, case-sensitive comparison on both sets
        if name in DEFAULT_LEAD_SOURCES or LeadSource.objects.filter(business_id=business_id, name=name).exists():
            raise ConflictError("Lead source already exists")
        return LeadSource.objects.create(business_id=business_id, name=name)

    @staticmethod
    @transaction.atomic
    def delete(business_id, source) -> None:
        """`source` is a custom entry's id or its name."""
        source = str(source)
        if source in DEFAULT_LEAD_SOURCES:
            raise BadRequestError("Cannot delete default lead source")

        qs = LeadSource.objects.filter(business_id=business_id)
        entry = (qs.filter(pk=int(source)) if source.isdigit() else qs.filter(name=source)).first()
        if entry is None:
            raise NotFoundError("Lead source not found")
        if entry.is_default:
            raise BadRequestError("Cannot delete default lead source")
        entry.delete()
