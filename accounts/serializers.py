from rest_framework import serializers

from .models import User


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        return value.lower()


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class LoginUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()
    role = serializers.CharField()
    username = serializers.CharField(allow_null=True)
    business_id = serializers.IntegerField(required=False, allow_null=True)
    business_status = serializers.CharField(required=False, allow_null=True)


class LoginResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = LoginUserSerializer()
    access = serializers.CharField()
    refresh = serializers.CharField()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "name", "role", "is_active", "created_at"]
        read_only_fields = fields
