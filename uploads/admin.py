from django.contrib import admin

from .models import BusinessMedia


@admin.register(BusinessMedia)
class BusinessMediaAdmin(admin.ModelAdmin):
    list_display = ("business", "media_type", "file_name", "display_order", "created_at")
    list_filter = ("media_type",)
    raw_id_fields = ("business",)
