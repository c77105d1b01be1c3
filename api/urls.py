from django.urls import path, include

urlpatterns = [
    path("auth/", include("accounts.urls")),
    path("onboarding/", include("onboarding.urls")),
    path("businesses/", include("businesses.urls")),
    path("business/", include("businesses.profile_urls")),
    path("interests/", include("interests.urls")),
    path("upload/", include("uploads.urls")),
]
