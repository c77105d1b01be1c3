"""
Celery tasks for outbound mail.

Every task here is best-effort: delivery failures are logged and swallowed so
the workflow that queued the mail is never affected. Tasks take primary keys
and reload rows, so they are safe to queue from transaction.on_commit.
"""
import logging

from celery import group, shared_task
from django.db import transaction

from interests.models import InterestSubmission
from onboarding.models import OnboardingRequest
from . import emails

logger = logging.getLogger(__name__)


@shared_task(name='notifications.send_onboarding_approval')
def send_onboarding_approval(request_id):
    request = OnboardingRequest.objects.filter(pk=request_id).first()
    if request is None or not request.onboarding_token:
        logger.warning("Onboarding request %s has no token to send", request_id)
        return False

    try:
        emails.send_onboarding_approval_email(request.email, request.business_name, request.onboarding_token)
    except Exception:
        logger.exception("Failed to send approval email for onboarding request %s", request_id)
        return False
    return True


@shared_task(name='notifications.send_onboarding_rejection')
def send_onboarding_rejection(request_id):
    request = OnboardingRequest.objects.filter(pk=request_id).first()
    if request is None:
        return False

    try:
        emails.send_onboarding_rejection_email(
            request.email, request.business_name, request.rejection_reason or "Not specified"
        )
    except Exception:
        logger.exception("Failed to send rejection email for onboarding request %s", request_id)
        return False
    return True


@shared_task(name='notifications.notify_business_of_interest')
def notify_business_of_interest(interest_id):
    interest = (
        InterestSubmission.objects
        .select_related("business", "business__login")
        .filter(pk=interest_id)
        .first()
    )
    if interest is None:
        return False

    business = interest.business
    try:
        emails.send_interest_notification_email(
            business.login.email,
            business.name,
            investor_name=interest.investor_name,
            investor_email=interest.email,
            investor_phone=interest.phone_number,
            message=interest.message,
        )
    except Exception:
        logger.exception("Failed to notify business %s of interest %s", business.id, interest_id)
        return False
    return True


@shared_task(name='notifications.confirm_interest_to_investor')
def confirm_interest_to_investor(interest_id):
    interest = InterestSubmission.objects.select_related("business").filter(pk=interest_id).first()
    if interest is None:
        return False

    try:
        emails.send_interest_confirmation_email(interest.email, interest.investor_name, interest.business.name)
    except Exception:
        logger.exception("Failed to send interest confirmation for %s", interest_id)
        return False
    return True


# ===== DISPATCH HELPERS =====

def queue_onboarding_approval(request_id):
    transaction.on_commit(lambda: send_onboarding_approval.delay(request_id), robust=True)


def queue_onboarding_rejection(request_id):
    transaction.on_commit(lambda: send_onboarding_rejection.delay(request_id), robust=True)


def queue_interest_emails(interest_id):
    """Business notification and investor confirmation go out in parallel."""
    transaction.on_commit(
        lambda: group(
            notify_business_of_interest.s(interest_id),
            confirm_interest_to_investor.s(interest_id),
        ).delay(),
        robust=True,
    )
