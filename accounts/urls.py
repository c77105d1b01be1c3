from django.urls import path
from .views import LogInView, RefreshTokenView, MeView

urlpatterns = [
    path("login/", LogInView.as_view(), name="login"),
    path("refresh/", RefreshTokenView.as_view(), name="refresh"),
    path("me/", MeView.as_view(), name="me"),
]
