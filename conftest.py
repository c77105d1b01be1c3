import pytest
from pytest_factoryboy import register
from rest_framework.test import APIClient

from accounts.tests.factory import AdminUserFactory, UserFactory
from authflow.services import issue_jwt_for_user
from businesses.models import BusinessStatus
from businesses.tests.factory import BusinessFactory, BusinessRemovalRequestFactory, CategoryFactory
from interests.tests.factory import InterestFollowUpFactory, InterestSubmissionFactory, LeadSourceFactory
from onboarding.tests.factory import OnboardingRequestFactory
from uploads.tests.factory import BusinessMediaFactory

# Register all factories as pytest fixtures
register(UserFactory)
register(AdminUserFactory, "admin_account")
register(CategoryFactory)
register(BusinessFactory)
register(BusinessRemovalRequestFactory)
register(OnboardingRequestFactory)
register(InterestSubmissionFactory)
register(InterestFollowUpFactory)
register(LeadSourceFactory)
register(BusinessMediaFactory)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    """Builds an APIClient carrying a bearer token for the given user."""
    def _make(user):
        client = APIClient()
        token = issue_jwt_for_user(user)["access"]
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return client
    return _make


@pytest.fixture
def platform_admin(db, admin_user_factory):
    return admin_user_factory(email="admin@capitalbridge.test", name="Platform Admin")


@pytest.fixture
def admin_api(client_for, platform_admin):
    return client_for(platform_admin)


@pytest.fixture
def approved_business(db, business_factory, category_factory):
    category = category_factory(name="Hydropower", slug="hydropower")
    return business_factory(name="Himal Hydro", category=category, status=BusinessStatus.APPROVED)


@pytest.fixture
def pending_business(db, business_factory):
    return business_factory(name="Pending Ventures", status=BusinessStatus.PENDING)


@pytest.fixture
def owner_api(client_for, approved_business):
    return client_for(approved_business.login)
