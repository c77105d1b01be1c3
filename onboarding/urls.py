from django.urls import path
from .views import (
    OnboardingRequestCreateView, OnboardingRequestListView, OnboardingRequestDetailView,
    OnboardingRequestContactedView, OnboardingRequestApproveView, OnboardingRequestRejectView,
    ValidateTokenView, CompleteRegistrationView,
)

urlpatterns = [
    path("request/", OnboardingRequestCreateView.as_view(), name="onboarding-request-create"),
    path("requests/", OnboardingRequestListView.as_view(), name="onboarding-request-list"),
    path("requests/<int:pk>/", OnboardingRequestDetailView.as_view(), name="onboarding-request-detail"),
    path("requests/<int:pk>/contacted/", OnboardingRequestContactedView.as_view(), name="onboarding-request-contacted"),
    path("requests/<int:pk>/approve/", OnboardingRequestApproveView.as_view(), name="onboarding-request-approve"),
    path("requests/<int:pk>/reject/", OnboardingRequestRejectView.as_view(), name="onboarding-request-reject"),
    path("validate/<str:token>/", ValidateTokenView.as_view(), name="onboarding-validate-token"),
    path("register/", CompleteRegistrationView.as_view(), name="onboarding-register"),
]
