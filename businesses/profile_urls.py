from django.urls import path

from interests.views import (
    OwnInterestListView, InterestDetailView, TodayFollowUpsView,
    FollowUpListCreateView, FollowUpDetailView,
    LeadSourceListCreateView, LeadSourceDeleteView,
)
from .views import ProfileView, ChangePasswordView, RequestRemovalView

# self-service routes for BUSINESS logins, mounted at /api/business/
urlpatterns = [
    path("profile/", ProfileView.as_view(), name="profile"),
    path("change-password/", ChangePasswordView.as_view(), name="profile-change-password"),
    path("request-removal/", RequestRemovalView.as_view(), name="profile-request-removal"),

    path("interests/", OwnInterestListView.as_view(), name="profile-interests"),
    path("interests/today/", TodayFollowUpsView.as_view(), name="profile-interests-today"),
    path("interests/<int:pk>/", InterestDetailView.as_view(), name="profile-interest-detail"),
    path("interests/<int:pk>/followups/", FollowUpListCreateView.as_view(), name="profile-interest-followups"),
    path("followups/<int:pk>/", FollowUpDetailView.as_view(), name="profile-followup-detail"),

    path("lead-sources/", LeadSourceListCreateView.as_view(), name="lead-source-list"),
    path("lead-sources/<str:source>/", LeadSourceDeleteView.as_view(), name="lead-source-delete"),
]
