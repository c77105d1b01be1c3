from django.contrib import admin

from .models import Business, BusinessRemovalRequest, Category


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "created_at")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ("name", "registration_number", "category", "status", "is_active", "is_featured", "created_at")
    list_filter = ("status", "is_active", "is_featured", "category")
    search_fields = ("name", "registration_number", "contact_email", "login__email")
    raw_id_fields = ("login",)
    readonly_fields = ("view_count", "approved_at", "created_at", "updated_at")


@admin.register(BusinessRemovalRequest)
class BusinessRemovalRequestAdmin(admin.ModelAdmin):
    list_display = ("business", "status", "requested_at", "reviewed_at")
    list_filter = ("status",)
    raw_id_fields = ("business",)
