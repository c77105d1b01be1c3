from django.urls import path
from .views import (
    BusinessListView, CategoryListView, BusinessDetailView,
    AdminBusinessListView, AdminActiveBusinessListView, AdminBusinessDetailView,
    ApproveBusinessView, RejectBusinessView, ToggleActiveView,
    RemovalRequestListView, ApproveRemovalView, RejectRemovalView,
)

urlpatterns = [
    # public directory
    path("", BusinessListView.as_view(), name="business-list"),
    path("categories/", CategoryListView.as_view(), name="category-list"),

    # admin
    path("pending/", AdminBusinessListView.as_view(), name="business-admin-list"),
    path("active/", AdminActiveBusinessListView.as_view(), name="business-admin-active"),
    path("removal-requests/", RemovalRequestListView.as_view(), name="removal-request-list"),
    path("removal-requests/<int:pk>/approve/", ApproveRemovalView.as_view(), name="removal-request-approve"),
    path("removal-requests/<int:pk>/reject/", RejectRemovalView.as_view(), name="removal-request-reject"),
    path("<int:pk>/details/", AdminBusinessDetailView.as_view(), name="business-admin-detail"),
    path("<int:pk>/approve/", ApproveBusinessView.as_view(), name="business-approve"),
    path("<int:pk>/reject/", RejectBusinessView.as_view(), name="business-reject"),
    path("<int:pk>/toggle-active/", ToggleActiveView.as_view(), name="business-toggle-active"),

    path("<int:pk>/", BusinessDetailView.as_view(), name="business-detail"),
]
