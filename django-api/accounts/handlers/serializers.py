"""Serializers for account requests and responses."""

from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    # Organizer or Attendee; parsed by the service
    role = serializers.CharField()

    def validate_password(self, value: str) -> str:
        try:
            password_validation.validate_password(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.messages) from exc
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class KycSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=255)
    address = serializers.CharField()
    governmentId = serializers.CharField(max_length=64)


class ProfileSerializer(serializers.Serializer):
    """Serializer for Profile domain model."""

    id = serializers.IntegerField(source="user_id")
    name = serializers.CharField()
    email = serializers.EmailField()
    role = serializers.CharField(source="role.value")
    isVerified = serializers.BooleanField(source="is_verified")
    verifiedAt = serializers.DateTimeField(source="verified_at", allow_null=True)
