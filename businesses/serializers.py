from django.utils import timezone
from rest_framework import serializers

from core.validators import phone_validator
from interests.serializers import InterestSubmissionSerializer
from uploads.serializers import BusinessMediaSerializer
from .models import Business, BusinessRemovalRequest, BusinessStatus, Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description"]


class BusinessSerializer(serializers.ModelSerializer):
    category = CategorySerializer(read_only=True)

    class Meta:
        model = Business
        fields = [
            "id", "name", "registration_number", "pan_number", "category",
            "business_type", "year_established", "location", "address", "team_size", "funding_stage",
            "paid_up_capital", "investment_capacity_min", "investment_capacity_max",
            "minimum_investment_units", "maximum_investment_units", "price_per_unit",
            "expected_return_options", "estimated_market_valuation", "ipo_time_horizon",
            "brief_description", "full_description", "vision", "mission", "growth_plans",
            "contact_email", "contact_phone", "website", "facebook_url", "linkedin_url", "twitter_url",
            "logo_url", "status", "is_active", "is_featured", "rejection_reason", "view_count",
            "approved_at", "created_at", "updated_at",
        ]
        read_only_fields = fields


class BusinessListSerializer(serializers.ModelSerializer):
    category = CategorySerializer(read_only=True)

    class Meta:
        model = Business
        fields = [
            "id", "name", "category", "location", "business_type", "year_established", "team_size",
            "brief_description", "logo_url", "is_featured",
            "investment_capacity_min", "investment_capacity_max", "price_per_unit",
            "view_count", "created_at",
        ]
        read_only_fields = fields


class BusinessPublicDetailSerializer(serializers.ModelSerializer):
    category = CategorySerializer(read_only=True)
    media = serializers.SerializerMethodField()

    class Meta:
        model = Business
        fields = [
            "id", "name", "category",
            "business_type", "year_established", "location", "team_size", "funding_stage",
            "paid_up_capital", "investment_capacity_min", "investment_capacity_max",
            "minimum_investment_units", "maximum_investment_units", "price_per_unit",
            "expected_return_options", "estimated_market_valuation", "ipo_time_horizon",
            "brief_description", "full_description", "vision", "mission", "growth_plans",
            "contact_email", "contact_phone", "website", "facebook_url", "linkedin_url", "twitter_url",
            "logo_url", "is_featured", "view_count", "created_at", "media",
        ]
        read_only_fields = fields

    def get_media(self, obj):
        # confidential documents live in private_file and are never listed publicly
        public = [m for m in obj.media.all() if not m.private_file]
        return BusinessMediaSerializer(public, many=True, context=self.context).data


class BusinessAdminListSerializer(BusinessListSerializer):
    login_email = serializers.EmailField(source="login.email", read_only=True)

    class Meta(BusinessListSerializer.Meta):
        fields = BusinessListSerializer.Meta.fields + [
            "registration_number", "status", "is_active", "rejection_reason",
            "contact_email", "contact_phone", "login_email", "updated_at",
        ]
        read_only_fields = fields


class BusinessAdminDetailSerializer(BusinessSerializer):
    login_email = serializers.EmailField(source="login.email", read_only=True)
    media = BusinessMediaSerializer(many=True, read_only=True)
    recent_interests = serializers.SerializerMethodField()
    interest_count = serializers.SerializerMethodField()

    class Meta(BusinessSerializer.Meta):
        fields = BusinessSerializer.Meta.fields + ["login_email", "media", "recent_interests", "interest_count"]
        read_only_fields = fields

    def get_recent_interests(self, obj):
        latest = obj.interests.order_by("-submitted_at")[:10]
        return InterestSubmissionSerializer(latest, many=True).data

    def get_interest_count(self, obj):
        return obj.interests.count()


class _CapacityRangeMixin:
    """min <= max checks, falling back to stored values on partial updates."""

    def _check_range(self, attrs, low_field, high_field, message):
        low = attrs.get(low_field, getattr(self.instance, low_field, None))
        high = attrs.get(high_field, getattr(self.instance, high_field, None))
        if low is not None and high is not None and low > high:
            raise serializers.ValidationError({low_field: message})

    def validate(self, attrs):
        self._check_range(
            attrs, "investment_capacity_min", "investment_capacity_max",
            "Minimum investment capacity cannot be greater than maximum",
        )
        self._check_range(
            attrs, "minimum_investment_units", "maximum_investment_units",
            "Minimum investment units cannot be greater than maximum",
        )
        return attrs


PROFILE_FIELDS = [
    "name", "business_type", "year_established", "location", "address", "team_size", "funding_stage",
    "paid_up_capital", "investment_capacity_min", "investment_capacity_max",
    "minimum_investment_units", "maximum_investment_units", "price_per_unit",
    "expected_return_options", "estimated_market_valuation", "ipo_time_horizon",
    "brief_description", "full_description", "vision", "mission", "growth_plans",
    "contact_email", "contact_phone", "website", "facebook_url", "linkedin_url", "twitter_url",
]


class BusinessProfileUpdateSerializer(_CapacityRangeMixin, serializers.ModelSerializer):
    """Fields a business may edit on its own profile."""
    name = serializers.CharField(min_length=2, max_length=100, required=False)
    year_established = serializers.IntegerField(min_value=1900, required=False)
    brief_description = serializers.CharField(min_length=10, max_length=200, required=False)
    full_description = serializers.CharField(max_length=5000, required=False, allow_blank=True)
    vision = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    mission = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    growth_plans = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    contact_phone = serializers.CharField(max_length=20, required=False, validators=[phone_validator])

    class Meta:
        model = Business
        fields = PROFILE_FIELDS
        extra_kwargs = {
            "paid_up_capital": {"min_value": 0},
            "investment_capacity_min": {"min_value": 0},
            "investment_capacity_max": {"min_value": 0},
            "price_per_unit": {"min_value": 0},
            "estimated_market_valuation": {"min_value": 0},
        }

    def validate_year_established(self, value):
        if value > timezone.localdate().year:
            raise serializers.ValidationError("Year cannot be in the future")
        return value


class BusinessAdminUpdateSerializer(BusinessProfileUpdateSerializer):
    """Admin edit: the profile fields plus curation fields. Status moves only through approve/reject."""
    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all(), required=False)

    class Meta(BusinessProfileUpdateSerializer.Meta):
        fields = PROFILE_FIELDS + ["category", "registration_number", "pan_number", "logo_url", "is_featured"]


class BusinessListQuerySerializer(serializers.Serializer):
    category_id = serializers.IntegerField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class BusinessAdminListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BusinessStatus.choices, required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class RejectBusinessSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(min_length=10, max_length=500)


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(trim_whitespace=False)
    new_password = serializers.CharField(min_length=8, max_length=128, trim_whitespace=False)


class RemovalRequestCreateSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=1000, required=False, allow_blank=True)


class RemovalBusinessSerializer(serializers.ModelSerializer):
    class Meta:
        model = Business
        fields = ["id", "name", "contact_email", "contact_phone", "is_active"]


class BusinessRemovalRequestSerializer(serializers.ModelSerializer):
    business = RemovalBusinessSerializer(read_only=True)

    class Meta:
        model = BusinessRemovalRequest
        fields = ["id", "business", "reason", "status", "requested_at", "reviewed_at"]
        read_only_fields = fields
