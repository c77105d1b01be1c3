from django.contrib import admin

from .models import InterestFollowUp, InterestSubmission, LeadSource


class InterestFollowUpInline(admin.TabularInline):
    model = InterestFollowUp
    extra = 0
    readonly_fields = ("follow_up_number", "created_at")


@admin.register(InterestSubmission)
class InterestSubmissionAdmin(admin.ModelAdmin):
    list_display = ("investor_name", "email", "business", "status", "contacted", "source", "submitted_at")
    list_filter = ("status", "contacted", "source")
    search_fields = ("investor_name", "email", "phone_number", "business__name")
    raw_id_fields = ("business",)
    readonly_fields = ("last_follow_up_number",)
    inlines = [InterestFollowUpInline]


@admin.register(LeadSource)
class LeadSourceAdmin(admin.ModelAdmin):
    list_display = ("name", "business", "is_default", "created_at")
    raw_id_fields = ("business",)
