from django.contrib import admin

from .models import OnboardingRequest


@admin.register(OnboardingRequest)
class OnboardingRequestAdmin(admin.ModelAdmin):
    list_display = ("business_name", "email", "status", "submitted_at", "reviewed_at")
    list_filter = ("status",)
    search_fields = ("business_name", "email", "phone_number")
    readonly_fields = ("onboarding_token", "token_expires_at", "created_business_login", "submitted_at", "reviewed_at")
