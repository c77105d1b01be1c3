from django.urls import path
from .views import (
    MediaTypesView, MediaUploadView, LogoUploadView, ExternalUrlView,
    BusinessMediaListView, MediaItemView, MediaDownloadView,
)

urlpatterns = [
    path("media-types/", MediaTypesView.as_view(), name="media-types"),
    path("media/", MediaUploadView.as_view(), name="media-upload"),
    path("logo/", LogoUploadView.as_view(), name="media-logo"),
    path("external-url/", ExternalUrlView.as_view(), name="media-external-url"),
    path("media/<int:business_id>/", BusinessMediaListView.as_view(), name="media-list"),
    path("media/item/<int:media_id>/", MediaItemView.as_view(), name="media-item"),
    path("media/item/<int:media_id>/download/", MediaDownloadView.as_view(), name="media-download"),
]
