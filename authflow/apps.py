from django.apps import AppConfig


class AuthflowConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'authflow'
