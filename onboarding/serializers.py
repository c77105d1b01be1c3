from django.utils import timezone
from rest_framework import serializers

from core.validators import phone_validator
from .models import OnboardingRequest, OnboardingStatus


class OnboardingRequestCreateSerializer(serializers.Serializer):
    business_name = serializers.CharField(min_length=2, max_length=255)
    email = serializers.EmailField()
    phone_number = serializers.CharField(min_length=10, max_length=20, validators=[phone_validator])
    message = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)

    def validate_email(self, value):
        return value.lower()


class OnboardingRequestSerializer(serializers.ModelSerializer):
    class Meta:
        model = OnboardingRequest
        fields = [
            "id", "business_name", "email", "phone_number", "message",
            "status", "submitted_at",
        ]
        read_only_fields = fields


class OnboardingRequestAdminSerializer(serializers.ModelSerializer):
    token_expired = serializers.SerializerMethodField()
    registration_completed = serializers.SerializerMethodField()

    class Meta:
        model = OnboardingRequest
        fields = [
            "id", "business_name", "email", "phone_number", "message",
            "status", "onboarding_token", "token_expires_at", "token_expired",
            "rejection_reason", "created_business_login", "registration_completed",
            "submitted_at", "reviewed_at",
        ]
        read_only_fields = fields

    def get_token_expired(self, obj):
        if not obj.token_expires_at:
            return None
        return obj.token_expires_at <= timezone.now()

    def get_registration_completed(self, obj):
        return obj.created_business_login_id is not None


class OnboardingListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OnboardingStatus.choices, required=False)


class RejectSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(min_length=10, max_length=500)


class TokenDetailsSerializer(serializers.Serializer):
    is_valid = serializers.BooleanField()
    business_name = serializers.CharField()
    email = serializers.EmailField()
    phone_number = serializers.CharField()


class CompleteRegistrationSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=128)
    password = serializers.CharField(min_length=8, max_length=128, write_only=True, trim_whitespace=False)

    # company
    company_name = serializers.CharField(min_length=2, max_length=255)
    registration_number = serializers.CharField(max_length=100)
    industry = serializers.CharField(max_length=100)
    pan_number = serializers.CharField(max_length=50, required=False, allow_blank=True)
    founded_year = serializers.IntegerField(min_value=1800, required=False, allow_null=True)
    company_size = serializers.CharField(max_length=50, required=False, allow_blank=True)

    # contact
    email = serializers.EmailField()
    phone = serializers.CharField(min_length=10, max_length=20, validators=[phone_validator])
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    district = serializers.CharField(max_length=100)
    website = serializers.URLField(max_length=255, required=False, allow_blank=True)

    # details
    description = serializers.CharField(min_length=10, max_length=2000)
    vision = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    mission = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    funding_stage = serializers.CharField(max_length=60, required=False, allow_blank=True)
    investment_sought = serializers.DecimalField(
        max_digits=18, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    use_of_funds = serializers.CharField(required=False, allow_blank=True)
    revenue_model = serializers.CharField(required=False, allow_blank=True)

    # investment parameters
    minimum_investment_units = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    maximum_investment_units = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    price_per_unit = serializers.DecimalField(
        max_digits=18, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    expected_return_options = serializers.CharField(max_length=255, required=False, allow_blank=True)
    estimated_market_valuation = serializers.DecimalField(
        max_digits=20, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    ipo_time_horizon = serializers.CharField(max_length=100, required=False, allow_blank=True)

    # social
    linkedin = serializers.URLField(max_length=255, required=False, allow_blank=True)
    facebook = serializers.URLField(max_length=255, required=False, allow_blank=True)
    twitter = serializers.URLField(max_length=255, required=False, allow_blank=True)

    # files (multipart only)
    company_logo = serializers.FileField(required=False, write_only=True)
    registration_certificate = serializers.FileField(required=False, write_only=True)
    pan_certificate = serializers.FileField(required=False, write_only=True)
    pitch_deck = serializers.FileField(required=False, write_only=True)
    gallery_images = serializers.ListField(
        child=serializers.FileField(), required=False, write_only=True, max_length=6
    )

    FILE_FIELDS = ("company_logo", "registration_certificate", "pan_certificate", "pitch_deck", "gallery_images")

    def validate_email(self, value):
        return value.lower()

    def validate_founded_year(self, value):
        if value is not None and value > timezone.localdate().year:
            raise serializers.ValidationError("Year cannot be in the future")
        return value

    def validate(self, attrs):
        low = attrs.get("minimum_investment_units")
        high = attrs.get("maximum_investment_units")
        if low is not None and high is not None and low > high:
            raise serializers.ValidationError(
                {"minimum_investment_units": "Minimum investment units cannot be greater than maximum"}
            )
        return attrs

    def split(self):
        """Returns (token, password, business data, uploaded files)."""
        data = dict(self.validated_data)
        token = data.pop("token")
        password = data.pop("password")
        files = {}
        for name in self.FILE_FIELDS:
            value = data.pop(name, None)
            if value:
                files[name] = value
        return token, password, data, files
