from django.urls import reverse
from rest_framework import serializers

from accounts.models import Role
from .models import BusinessMedia, MediaType
from .rules import EXTERNAL_URL_TYPES


def can_see_private(user, business_id) -> bool:
    if not user or not user.is_authenticated:
        return False
    if user.role == Role.ADMIN:
        return True
    business = getattr(user, "business", None)
    return business is not None and business.id == business_id


class BusinessMediaSerializer(serializers.ModelSerializer):
    url = serializers.SerializerMethodField()
    is_private = serializers.SerializerMethodField()

    class Meta:
        model = BusinessMedia
        fields = [
            "id", "business", "media_type", "url", "external_url", "is_private",
            "file_name", "file_size", "mime_type", "title", "description", "display_order", "created_at",
        ]
        read_only_fields = fields

    def _absolute(self, url):
        request = self.context.get("request")
        return request.build_absolute_uri(url) if request is not None else url

    def get_is_private(self, obj):
        return bool(obj.private_file)

    def get_url(self, obj):
        if obj.external_url:
            return obj.external_url
        if obj.private_file:
            request = self.context.get("request")
            if request is None or not can_see_private(request.user, obj.business_id):
                return None
            return self._absolute(reverse("media-download", args=[obj.id]))
        if obj.file:
            return self._absolute(obj.file.url)
        return None


def _normalize_type(value):
    value = (value or "").strip().upper()
    if value not in MediaType.values:
        raise serializers.ValidationError(f"Invalid media type. Valid types: {', '.join(MediaType.values)}")
    return value


class MediaUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    media_type = serializers.CharField(max_length=40)
    business_id = serializers.IntegerField(required=False, min_value=1)
    title = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True, allow_null=True)

    def validate_media_type(self, value):
        value = _normalize_type(value)
        if value in EXTERNAL_URL_TYPES:
            raise serializers.ValidationError("Use the external URL endpoint for link media")
        return value


class LogoUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    business_id = serializers.IntegerField(required=False, min_value=1)


class ExternalUrlSerializer(serializers.Serializer):
    media_type = serializers.CharField(max_length=40)
    external_url = serializers.URLField(max_length=500)
    business_id = serializers.IntegerField(required=False, min_value=1)
    title = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True, allow_null=True)

    def validate_media_type(self, value):
        value = _normalize_type(value)
        if value not in EXTERNAL_URL_TYPES:
            raise serializers.ValidationError(
                f"Invalid media type for external URL. Valid types: {', '.join(EXTERNAL_URL_TYPES)}"
            )
        return value


class MediaListQuerySerializer(serializers.Serializer):
    media_type = serializers.CharField(required=False)
    grouped = serializers.BooleanField(required=False, default=False)

    def validate_media_type(self, value):
        return _normalize_type(value)
