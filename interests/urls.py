from django.urls import path
from .views import (
    InterestListCreateView, BusinessInterestsAdminView, InterestDetailView,
    FollowUpListCreateView, FollowUpDetailView, TodayFollowUpsView, SourcesView,
)

urlpatterns = [
    path("", InterestListCreateView.as_view(), name="interest-list"),
    path("today/", TodayFollowUpsView.as_view(), name="interest-today"),
    path("sources/", SourcesView.as_view(), name="interest-sources"),
    path("business/<int:business_id>/", BusinessInterestsAdminView.as_view(), name="interest-business-list"),
    path("followups/<int:pk>/", FollowUpDetailView.as_view(), name="followup-detail"),
    path("<int:pk>/", InterestDetailView.as_view(), name="interest-detail"),
    path("<int:pk>/followups/", FollowUpListCreateView.as_view(), name="interest-followups"),
]
