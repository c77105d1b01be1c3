import re
from datetime import timedelta

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone

from accounts.models import Role, User
from businesses.models import Business, BusinessStatus, Category
from core.exceptions import BadRequestError, ConflictError, NotFoundError
from onboarding.models import OnboardingRequest, OnboardingStatus
from onboarding.services import OnboardingService, resolve_category
from uploads.models import BusinessMedia, MediaType


pytestmark = pytest.mark.django_db


def registration_payload(token, **overrides):
    payload = {
        "token": token,
        "password": "strong-pass-1",
        "company_name": "Acme Hydro Pvt. Ltd.",
        "registration_number": "REG-ACME-001",
        "industry": "Hydropower",
        "email": "contact@acme.com.np",
        "phone": "9801234567",
        "address": "Baneshwor",
        "city": "Kathmandu",
        "district": "Kathmandu",
        "description": "Run-of-river hydropower developer in central Nepal.",
        "founded_year": 2012,
        "investment_sought": "25000000.00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def approved_request(onboarding_request_factory):
    request = onboarding_request_factory(business_name="Acme", email="a@x.com")
    return OnboardingService.approve(request.id)


# ── submit ──────────────────────────────────────────────────────────────────

def test_submit_creates_pending_request(api_client):
    response = api_client.post(reverse("onboarding-request-create"), {
        "business_name": "Acme",
        "email": "A@X.com",
        "phone_number": "9801234567",
    }, format="json")

    assert response.status_code == 201, response.content
    body = response.json()["request"]
    assert body["status"] == OnboardingStatus.PENDING
    assert body["email"] == "a@x.com"
    assert "onboarding_token" not in body


def test_submit_validation_error_shape(api_client):
    response = api_client.post(reverse("onboarding-request-create"), {"business_name": "A"}, format="json")

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    fields = {detail["field"] for detail in body["details"]}
    assert {"business_name", "email", "phone_number"} <= fields


def test_submit_duplicate_active_email_conflicts(onboarding_request_factory):
    onboarding_request_factory(email="dup@example.com", status=OnboardingStatus.CONTACTED)

    with pytest.raises(ConflictError):
        OnboardingService.submit(business_name="Again", email="DUP@example.com", phone_number="9801234567")


def test_submit_allowed_again_after_rejection(onboarding_request_factory):
    onboarding_request_factory(email="retry@example.com", status=OnboardingStatus.REJECTED)

    request = OnboardingService.submit(business_name="Retry", email="retry@example.com", phone_number="9801234567")
    assert request.status == OnboardingStatus.PENDING


# ── admin transitions ───────────────────────────────────────────────────────

def test_list_requires_admin_and_filters_by_status(admin_api, onboarding_request_factory):
    onboarding_request_factory(status=OnboardingStatus.PENDING)
    onboarding_request_factory(status=OnboardingStatus.REJECTED)

    response = admin_api.get(reverse("onboarding-request-list"), {"status": "PENDING"})

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["total"] == 1
    assert body["pagination"]["limit"] == 20
    assert body["items"][0]["status"] == OnboardingStatus.PENDING


def test_mark_contacted_only_from_pending(onboarding_request_factory):
    request = onboarding_request_factory()

    assert OnboardingService.mark_contacted(request.id).status == OnboardingStatus.CONTACTED
    with pytest.raises(BadRequestError, match="Only pending requests"):
        OnboardingService.mark_contacted(request.id)


def test_approve_issues_token_and_expiry(approved_request):
    assert approved_request.status == OnboardingStatus.APPROVED
    assert re.fullmatch(r"[0-9a-f]{64}", approved_request.onboarding_token)

    expected = timezone.now() + timedelta(hours=72)
    assert abs((approved_request.token_expires_at - expected).total_seconds()) < 60
    assert approved_request.reviewed_at is not None


def test_approve_from_contacted(onboarding_request_factory):
    request = onboarding_request_factory(status=OnboardingStatus.CONTACTED)
    assert OnboardingService.approve(request.id).status == OnboardingStatus.APPROVED


@pytest.mark.parametrize("status, message", [
    (OnboardingStatus.APPROVED, "Request already approved"),
    (OnboardingStatus.REJECTED, "Cannot approve a rejected request"),
])
def test_approve_refused_from_terminal_states(onboarding_request_factory, status, message):
    request = onboarding_request_factory(status=status)

    with pytest.raises(BadRequestError) as exc:
        OnboardingService.approve(request.id)
    assert str(exc.value.detail) == message


def test_reject_refused_once_approved(approved_request):
    with pytest.raises(BadRequestError, match="Cannot reject an approved request"):
        OnboardingService.reject(approved_request.id, "Changed our mind entirely")


def test_approve_missing_request():
    with pytest.raises(NotFoundError):
        OnboardingService.approve(999999)


def test_reject_requires_reason_length(admin_api, onboarding_request_factory):
    request = onboarding_request_factory()

    response = admin_api.put(reverse("onboarding-request-reject", args=[request.id]), {"rejection_reason": "no"}, format="json")

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "rejection_reason"


def test_approve_sends_registration_email(
    admin_api, onboarding_request_factory, mailoutbox, django_capture_on_commit_callbacks
):
    request = onboarding_request_factory(business_name="Acme", email="a@x.com")

    with django_capture_on_commit_callbacks(execute=True):
        response = admin_api.put(reverse("onboarding-request-approve", args=[request.id]))

    assert response.status_code == 200, response.content
    request.refresh_from_db()
    assert len(mailoutbox) == 1
    mail = mailoutbox[0]
    assert mail.to == ["a@x.com"]
    assert mail.subject == "Business Onboarding Approved - Capital Bridge Nepal"
    assert f"/register?token={request.onboarding_token}" in mail.body


def test_reject_sends_reason_email(
    admin_api, onboarding_request_factory, mailoutbox, django_capture_on_commit_callbacks
):
    request = onboarding_request_factory(email="nope@example.com")

    with django_capture_on_commit_callbacks(execute=True):
        response = admin_api.put(
            reverse("onboarding-request-reject", args=[request.id]),
            {"rejection_reason": "Outside our investment focus"},
            format="json",
        )

    assert response.status_code == 200
    assert response.json()["request"]["status"] == OnboardingStatus.REJECTED
    assert len(mailoutbox) == 1
    assert "Outside our investment focus" in mailoutbox[0].body


@pytest.mark.parametrize("action", ["approve", "reject"])
def test_email_failure_does_not_undo_transition(
    monkeypatch, onboarding_request_factory, mailoutbox, django_capture_on_commit_callbacks, action
):
    def broken(*args, **kwargs):
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr("notifications.emails._send", broken)
    request = onboarding_request_factory()

    with django_capture_on_commit_callbacks(execute=True):
        if action == "approve":
            OnboardingService.approve(request.id)
        else:
            OnboardingService.reject(request.id, "Documents could not be verified")

    request.refresh_from_db()
    expected = OnboardingStatus.APPROVED if action == "approve" else OnboardingStatus.REJECTED
    assert request.status == expected
    assert mailoutbox == []


# ── token validation ────────────────────────────────────────────────────────

def test_validate_token_returns_prefill(api_client, approved_request):
    response = api_client.get(reverse("onboarding-validate-token", args=[approved_request.onboarding_token]))

    assert response.status_code == 200
    assert response.json() == {
        "is_valid": True,
        "business_name": "Acme",
        "email": "a@x.com",
        "phone_number": approved_request.phone_number,
    }


def test_validate_unknown_token(api_client):
    response = api_client.get(reverse("onboarding-validate-token", args=["f" * 64]))

    assert response.status_code == 404
    assert response.json() == {"error": "Invalid token"}


def test_validate_token_on_unapproved_request(onboarding_request_factory):
    request = onboarding_request_factory(
        status=OnboardingStatus.CONTACTED,
        onboarding_token="a" * 64,
        token_expires_at=timezone.now() + timedelta(hours=1),
    )
    with pytest.raises(BadRequestError, match="Token is not valid"):
        OnboardingService.validate_token(request.onboarding_token)


def test_expired_token_is_rejected_even_when_approved(approved_request):
    OnboardingRequest.objects.filter(pk=approved_request.pk).update(
        token_expires_at=timezone.now() - timedelta(minutes=1)
    )
    with pytest.raises(BadRequestError, match="Token has expired"):
        OnboardingService.validate_token(approved_request.onboarding_token)


# ── registration ────────────────────────────────────────────────────────────

def test_complete_registration_creates_login_and_pending_business(api_client, approved_request):
    response = api_client.post(
        reverse("onboarding-register"), registration_payload(approved_request.onboarding_token), format="json"
    )

    assert response.status_code == 201, response.content
    body = response.json()
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["role"] == Role.BUSINESS
    assert body["business"]["status"] == BusinessStatus.PENDING
    assert body["business"]["location"] == "Kathmandu, Kathmandu"
    assert body["business"]["category"]["name"] == "Hydropower"

    user = User.objects.get(email="a@x.com")
    assert user.check_password("strong-pass-1")
    assert user.business.registration_number == "REG-ACME-001"

    approved_request.refresh_from_db()
    assert approved_request.created_business_login == user


def test_token_is_single_use(approved_request):
    token = approved_request.onboarding_token
    OnboardingService.complete_registration(
        token=token, password="strong-pass-1", data=registration_payload(token)
    )

    with pytest.raises(BadRequestError, match="Token has already been used"):
        OnboardingService.complete_registration(
            token=token,
            password="strong-pass-1",
            data=registration_payload(token, registration_number="REG-OTHER"),
        )
    assert Business.objects.count() == 1


def test_registration_refuses_taken_email(approved_request, user_factory):
    user_factory(email="a@x.com")
    token = approved_request.onboarding_token

    with pytest.raises(ConflictError, match="Email already registered"):
        OnboardingService.complete_registration(token=token, password="strong-pass-1", data=registration_payload(token))


def test_registration_refuses_taken_registration_number(approved_request, business_factory):
    business_factory(registration_number="REG-ACME-001")
    token = approved_request.onboarding_token

    with pytest.raises(ConflictError, match="Registration number already exists"):
        OnboardingService.complete_registration(token=token, password="strong-pass-1", data=registration_payload(token))

    approved_request.refresh_from_db()
    assert approved_request.created_business_login is None
    assert not User.objects.filter(email="a@x.com").exists()


def test_resolve_category_reuses_by_name_then_slug(category_factory):
    existing = category_factory(name="Tech Company", slug="tech")

    assert resolve_category("tech company") == existing
    created = resolve_category("Renewable Energy")
    assert created.slug == "renewable-energy"
    assert resolve_category("Renewable Energy") == created
    assert Category.objects.count() == 2


def test_registration_stores_uploaded_files(api_client, approved_request):
    payload = registration_payload(approved_request.onboarding_token)
    payload["company_logo"] = SimpleUploadedFile("logo.png", b"\x89PNG fake", content_type="image/png")
    payload["pitch_deck"] = SimpleUploadedFile("deck.pdf", b"%PDF-1.4 deck", content_type="application/pdf")

    response = api_client.post(reverse("onboarding-register"), payload, format="multipart")

    assert response.status_code == 201, response.content
    business = Business.objects.get(registration_number="REG-ACME-001")
    types = set(BusinessMedia.objects.filter(business=business).values_list("media_type", flat=True))
    assert types == {MediaType.COMPANY_LOGO, MediaType.PITCH_DECK}
    assert business.logo_url
    assert response.json()["business"]["logo_url"] == business.logo_url

    deck = BusinessMedia.objects.get(business=business, media_type=MediaType.PITCH_DECK)
    assert deck.private_file and not deck.file


def test_registration_survives_a_bad_file(api_client, approved_request):
    payload = registration_payload(approved_request.onboarding_token)
    payload["registration_certificate"] = SimpleUploadedFile("cert.exe", b"MZ", content_type="application/x-msdownload")

    response = api_client.post(reverse("onboarding-register"), payload, format="multipart")

    assert response.status_code == 201
    assert not BusinessMedia.objects.exists()


def test_full_onboarding_scenario(admin_api, api_client):
    created = api_client.post(reverse("onboarding-request-create"), {
        "business_name": "Acme", "email": "a@x.com", "phone_number": "9801234567",
    }, format="json").json()["request"]
    assert created["status"] == OnboardingStatus.PENDING

    approved = admin_api.put(reverse("onboarding-request-approve", args=[created["id"]])).json()["request"]
    assert approved["status"] == OnboardingStatus.APPROVED
    assert approved["onboarding_token"]

    OnboardingRequest.objects.filter(pk=created["id"]).update(token_expires_at=timezone.now() - timedelta(hours=1))
    response = api_client.post(
        reverse("onboarding-register"), registration_payload(approved["onboarding_token"]), format="json"
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Token has expired"}

    again = admin_api.put(reverse("onboarding-request-approve", args=[created["id"]]))
    assert again.status_code == 400
    assert again.json() == {"error": "Request already approved"}
