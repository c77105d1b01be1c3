from decimal import Decimal

import pytest
from django.core.management import call_command
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone

from businesses.models import Business, BusinessStatus, Category, RemovalStatus
from businesses.services import BusinessService, RemovalService
from core.exceptions import BadRequestError, ForbiddenError
from onboarding.models import OnboardingRequest, OnboardingStatus
from uploads.models import BusinessMedia, MediaType


pytestmark = pytest.mark.django_db


# ── public directory ────────────────────────────────────────────────────────

def test_public_list_shows_only_approved_and_active(api_client, approved_business, pending_business, business_factory):
    business_factory(status=BusinessStatus.APPROVED, is_active=False)
    business_factory(status=BusinessStatus.REJECTED)

    response = api_client.get(reverse("business-list"))

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["items"]] == [approved_business.id]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "total_pages": 1}


def test_public_list_filters_by_category(api_client, approved_business, business_factory, category_factory):
    other = business_factory(category=category_factory(name="Fintech", slug="fintech"))

    response = api_client.get(reverse("business-list"), {"category_id": other.category_id})

    assert [item["id"] for item in response.json()["items"]] == [other.id]


def test_public_list_respects_limit(api_client, business_factory):
    business_factory.create_batch(3)

    body = api_client.get(reverse("business-list"), {"limit": 2, "page": 2}).json()

    assert len(body["items"]) == 1
    assert body["pagination"]["total_pages"] == 2


def test_public_list_past_last_page_is_empty(api_client, approved_business):
    response = api_client.get(reverse("business-list"), {"page": 5})

    assert response.status_code == 200
    assert response.json() == {
        "items": [],
        "pagination": {"page": 5, "limit": 20, "total": 1, "total_pages": 1},
    }


def test_admin_list_past_last_page_is_empty(admin_api, pending_business):
    body = admin_api.get(reverse("business-admin-list"), {"page": 3, "limit": 10}).json()

    assert body["items"] == []
    assert body["pagination"] == {"page": 3, "limit": 10, "total": 1, "total_pages": 1}


@pytest.mark.parametrize("page", ["0", "abc"])
def test_public_list_rejects_malformed_page(api_client, approved_business, page):
    response = api_client.get(reverse("business-list"), {"page": page})

    assert response.status_code == 404
    assert response.json() == {"error": "Invalid page."}


def test_public_detail_counts_views(api_client, approved_business):
    url = reverse("business-detail", args=[approved_business.id])

    api_client.get(url)
    response = api_client.get(url)

    assert response.status_code == 200
    approved_business.refresh_from_db()
    assert approved_business.view_count == 2
    assert "registration_number" not in response.json()


def test_public_detail_hides_unapproved(api_client, pending_business):
    response = api_client.get(reverse("business-detail", args=[pending_business.id]))

    assert response.status_code == 404
    pending_business.refresh_from_db()
    assert pending_business.view_count == 0


def test_public_detail_never_lists_private_documents(api_client, approved_business, business_media_factory):
    business_media_factory(business=approved_business)
    BusinessMedia.objects.create(
        business=approved_business,
        media_type=MediaType.PITCH_DECK,
        private_file=SimpleUploadedFile("deck.pdf", b"%PDF", content_type="application/pdf"),
    )

    media = api_client.get(reverse("business-detail", args=[approved_business.id])).json()["media"]

    assert [m["media_type"] for m in media] == [MediaType.YOUTUBE_VIDEO]


def test_categories_endpoint(api_client, category_factory):
    category_factory(name="Agriculture", slug="agriculture")

    response = api_client.get(reverse("category-list"))

    assert response.status_code == 200
    assert response.json()[0]["slug"] == "agriculture"


# ── admin review ────────────────────────────────────────────────────────────

@pytest.fixture
def registered(pending_business, onboarding_request_factory):
    """A pending business with the onboarding request it came from."""
    onboarding_request_factory(
        email=pending_business.login.email,
        status=OnboardingStatus.APPROVED,
        onboarding_token="b" * 64,
        token_expires_at=timezone.now(),
        created_business_login=pending_business.login,
    )
    return pending_business


def test_approve_business_clears_onboarding_token(admin_api, registered):
    response = admin_api.put(reverse("business-approve", args=[registered.id]))

    assert response.status_code == 200
    registered.refresh_from_db()
    assert registered.status == BusinessStatus.APPROVED
    assert registered.approved_at is not None
    request = OnboardingRequest.objects.get(created_business_login=registered.login)
    assert request.onboarding_token is None
    assert request.token_expires_at is None


def test_reject_business_clears_onboarding_token(registered):
    business = BusinessService.reject(registered.id, "Registration documents are forged")

    assert business.status == BusinessStatus.REJECTED
    assert business.rejection_reason == "Registration documents are forged"
    request = OnboardingRequest.objects.get(created_business_login=registered.login)
    assert request.onboarding_token is None


def test_business_transitions_refuse_repeats(approved_business, business_factory):
    with pytest.raises(BadRequestError, match="Business already approved"):
        BusinessService.approve(approved_business.id)

    rejected = business_factory(status=BusinessStatus.REJECTED)
    with pytest.raises(BadRequestError, match="Business already rejected"):
        BusinessService.reject(rejected.id, "Still not acceptable at all")


def test_rejected_business_can_later_be_approved(business_factory):
    rejected = business_factory(status=BusinessStatus.REJECTED, rejection_reason="Missing PAN")

    business = BusinessService.approve(rejected.id)

    assert business.status == BusinessStatus.APPROVED
    assert business.rejection_reason is None


def test_reject_requires_reason(admin_api, pending_business):
    response = admin_api.put(reverse("business-reject", args=[pending_business.id]), {}, format="json")

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "rejection_reason"


def test_admin_list_filters_by_status(admin_api, approved_business, pending_business):
    response = admin_api.get(reverse("business-admin-list"), {"status": "PENDING"})

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["items"]] == [pending_business.id]
    assert body["pagination"]["limit"] == 50


def test_admin_active_list(admin_api, approved_business, pending_business):
    body = admin_api.get(reverse("business-admin-active")).json()
    assert [item["id"] for item in body["items"]] == [approved_business.id]


def test_admin_detail_includes_recent_interests(admin_api, approved_business, interest_submission_factory):
    interest_submission_factory.create_batch(12, business=approved_business)

    body = admin_api.get(reverse("business-admin-detail", args=[approved_business.id])).json()

    assert body["interest_count"] == 12
    assert len(body["recent_interests"]) == 10
    assert body["login_email"] == approved_business.login.email


def test_business_login_cannot_use_admin_routes(owner_api, pending_business):
    assert owner_api.put(reverse("business-approve", args=[pending_business.id])).status_code == 403


def test_admin_update_is_allow_listed(admin_api, pending_business):
    response = admin_api.put(reverse("business-detail", args=[pending_business.id]), {
        "name": "Renamed Ventures",
        "is_featured": True,
        "status": BusinessStatus.APPROVED,
        "view_count": 5000,
    }, format="json")

    assert response.status_code == 200, response.content
    pending_business.refresh_from_db()
    assert pending_business.name == "Renamed Ventures"
    assert pending_business.is_featured is True
    assert pending_business.status == BusinessStatus.PENDING
    assert pending_business.view_count == 0


def test_admin_update_checks_capacity_range(admin_api, approved_business):
    response = admin_api.put(reverse("business-detail", args=[approved_business.id]), {
        "investment_capacity_min": "9000000.00",
    }, format="json")

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "investment_capacity_min"


def test_toggle_active_flips_business_and_login(admin_api, approved_business):
    url = reverse("business-toggle-active", args=[approved_business.id])

    admin_api.put(url)
    approved_business.refresh_from_db()
    approved_business.login.refresh_from_db()
    assert approved_business.is_active is False
    assert approved_business.login.is_active is False

    admin_api.put(url)
    approved_business.refresh_from_db()
    approved_business.login.refresh_from_db()
    assert approved_business.is_active is True
    assert approved_business.login.is_active is True


# ── removal requests ────────────────────────────────────────────────────────

def test_removal_request_lifecycle(owner_api, admin_api, approved_business):
    created = owner_api.post(reverse("profile-request-removal"), {"reason": "Merging with a partner"}, format="json")
    assert created.status_code == 201
    request_id = created.json()["request"]["id"]

    duplicate = owner_api.post(reverse("profile-request-removal"), {}, format="json")
    assert duplicate.status_code == 403

    listed = admin_api.get(reverse("removal-request-list")).json()
    assert listed["items"][0]["business"]["id"] == approved_business.id

    approved = admin_api.put(reverse("removal-request-approve", args=[request_id]))
    assert approved.status_code == 200
    assert approved.json()["request"]["status"] == RemovalStatus.APPROVED

    approved_business.refresh_from_db()
    approved_business.login.refresh_from_db()
    assert approved_business.is_active is False
    assert approved_business.login.is_active is False


def test_reviewed_removal_request_cannot_be_reviewed_again(business_removal_request_factory, approved_business):
    removal = business_removal_request_factory(business=approved_business)

    RemovalService.reject(removal.id)

    with pytest.raises(ForbiddenError):
        RemovalService.approve(removal.id)
    approved_business.refresh_from_db()
    assert approved_business.is_active is True


# ── self-service profile ────────────────────────────────────────────────────

def test_profile_get_and_update(owner_api, approved_business):
    assert owner_api.get(reverse("profile")).json()["id"] == approved_business.id

    response = owner_api.put(reverse("profile"), {
        "vision": "Power every valley",
        "price_per_unit": "100.00",
        "registration_number": "HACKED",
    }, format="json")

    assert response.status_code == 200, response.content
    approved_business.refresh_from_db()
    assert approved_business.vision == "Power every valley"
    assert approved_business.price_per_unit == Decimal("100.00")
    assert approved_business.registration_number != "HACKED"


def test_profile_update_rejects_inverted_units(owner_api):
    response = owner_api.put(reverse("profile"), {
        "minimum_investment_units": 50,
        "maximum_investment_units": 10,
    }, format="json")

    assert response.status_code == 400


def test_change_password(owner_api, approved_business):
    wrong = owner_api.put(reverse("profile-change-password"), {
        "current_password": "not-it", "new_password": "brand-new-pass",
    }, format="json")
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Current password is incorrect"}

    right = owner_api.put(reverse("profile-change-password"), {
        "current_password": "password123", "new_password": "brand-new-pass",
    }, format="json")
    assert right.status_code == 200
    approved_business.login.refresh_from_db()
    assert approved_business.login.check_password("brand-new-pass")


def test_seed_categories_is_idempotent():
    call_command("seed_categories")
    call_command("seed_categories")

    assert Category.objects.count() == 12
    assert Category.objects.filter(slug="hydropower", name="Hydropower").exists()


def test_business_requires_login_one_to_one(approved_business):
    assert Business.objects.for_login(approved_business.login_id).get() == approved_business
