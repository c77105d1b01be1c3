import jwt
import pytest
from django.conf import settings
from django.urls import reverse

from accounts.models import Role
from authflow.services import issue_jwt_for_user


pytestmark = pytest.mark.django_db


def test_access_token_carries_identity_claims(platform_admin):
    access = issue_jwt_for_user(platform_admin)["access"]

    claims = jwt.decode(access, settings.SECRET_KEY, algorithms=["HS256"])

    # newer simplejwt releases serialize the id as a string
    assert str(claims["user_id"]) == str(platform_admin.id)
    assert claims["email"] == platform_admin.email
    assert claims["role"] == Role.ADMIN
    assert claims["exp"] > claims["iat"]


def test_tampered_token_is_rejected(api_client, platform_admin):
    access = issue_jwt_for_user(platform_admin)["access"]
    header, payload, signature = access.split(".")
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {header}.{payload}.{signature[::-1]}")

    assert api_client.get(reverse("me")).status_code == 401


def test_anonymous_caller_gets_401_on_admin_route(api_client):
    response = api_client.get(reverse("onboarding-request-list"))
    assert response.status_code == 401


def test_business_login_gets_403_on_admin_route(owner_api):
    response = owner_api.get(reverse("onboarding-request-list"))

    assert response.status_code == 403
    assert "error" in response.json()


def test_admin_gets_403_on_business_route(admin_api):
    assert admin_api.get(reverse("profile")).status_code == 403
