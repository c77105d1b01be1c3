from rest_framework import serializers

from core.validators import phone_validator
from .models import InterestFollowUp, InterestStatus, InterestSubmission, LeadSource


class InterestFollowUpSerializer(serializers.ModelSerializer):
    class Meta:
        model = InterestFollowUp
        fields = ["id", "follow_up_number", "remarks", "next_follow_up_date", "created_at", "updated_at"]
        read_only_fields = fields


class InterestSubmissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = InterestSubmission
        fields = [
            "id", "business", "investor_name", "phone_number", "email", "message", "has_consent",
            "contacted", "follow_up_remarks", "status", "source", "submitted_at", "updated_at",
        ]
        read_only_fields = fields


class InterestSubmissionDetailSerializer(InterestSubmissionSerializer):
    business_name = serializers.CharField(source="business.name", read_only=True)
    follow_ups = InterestFollowUpSerializer(many=True, read_only=True)

    class Meta(InterestSubmissionSerializer.Meta):
        fields = InterestSubmissionSerializer.Meta.fields + ["business_name", "follow_ups"]
        read_only_fields = fields


class InterestCreateSerializer(serializers.Serializer):
    business_id = serializers.IntegerField(min_value=1)
    investor_name = serializers.CharField(min_length=2, max_length=100)
    phone_number = serializers.CharField(min_length=10, max_length=20, validators=[phone_validator])
    email = serializers.EmailField()
    message = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    has_consent = serializers.BooleanField(required=False, default=True)

    def validate_email(self, value):
        return value.lower()


class InterestUpdateSerializer(serializers.Serializer):
    contacted = serializers.BooleanField(required=False)
    follow_up_remarks = serializers.CharField(max_length=2000, required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(choices=InterestStatus.choices, required=False)
    source = serializers.CharField(max_length=100, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("No fields to update")
        return attrs


class FollowUpCreateSerializer(serializers.Serializer):
    remarks = serializers.CharField(min_length=1, max_length=2000)
    next_follow_up_date = serializers.DateTimeField(required=False, allow_null=True)


class FollowUpUpdateSerializer(FollowUpCreateSerializer):
    pass


class InterestListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=InterestStatus.choices, required=False)
    source = serializers.CharField(max_length=100, required=False)
    business_id = serializers.IntegerField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class LeadSourceSerializer(serializers.ModelSerializer):
    class Meta:
        model = LeadSource
        fields = ["id", "name", "is_default", "created_at"]
        read_only_fields = fields


class LeadSourceCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=100)


class LeadSourceEntrySerializer(serializers.Serializer):
    """One row of the merged default + custom source list."""
    id = serializers.IntegerField(allow_null=True)
    name = serializers.CharField()
    is_default = serializers.BooleanField()
