from .jwt_views import LogInView, RefreshTokenView, MeView  # noqa: F401
