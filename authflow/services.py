import logging

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.models import Role, User
from businesses.models import BusinessStatus
from core.exceptions import NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


def issue_jwt_for_user(user: User):
    """
    Signed access/refresh pair. Both carry user_id, email and role plus the
    standard iat/exp claims; custom claims set on the refresh token are
    copied into the access token by simplejwt.
    """
    refresh = RefreshToken.for_user(user)
    refresh["email"] = user.email
    refresh["role"] = user.role
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


def refresh_access_token(refresh_token: str) -> dict:
    try:
        refresh = RefreshToken(refresh_token)
    except TokenError:
        raise UnauthorizedError("Invalid or expired refresh token")

    return {
        "access": str(refresh.access_token),
        "refresh": refresh_token,
    }


def login_user(email: str, password: str) -> dict:
    """
    Checks credentials and, for BUSINESS logins, the business review state.
    Returns the public user payload; the caller mints tokens.
    """
    user = (
        User.objects.select_related("business")
        .filter(email=email.lower())
        .first()
    )
    if user is None:
        raise NotFoundError("Invalid email or password")

    if not user.is_active:
        raise UnauthorizedError("Account is inactive")

    if not user.check_password(password):
        raise UnauthorizedError("Invalid email or password")

    if user.role == Role.ADMIN:
        return {
            "user": user,
            "payload": {
                "id": user.id,
                "email": user.email,
                "role": user.role,
                "username": user.name or None,
            },
        }

    business = getattr(user, "business", None)
    if business is not None:
        if business.status == BusinessStatus.REJECTED:
            raise UnauthorizedError(
                "Your business registration was rejected. "
                f"Reason: {business.rejection_reason or 'Not specified'}"
            )
        if business.status == BusinessStatus.PENDING:
            raise UnauthorizedError(
                "Your business registration is still pending admin approval. "
                "Please wait for approval before logging in."
            )

    logger.info("Business login %s signed in", user.id)
    return {
        "user": user,
        "payload": {
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "username": business.name if business else None,
            "business_id": business.id if business else None,
            "business_status": business.status if business else None,
        },
    }
