from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .validators import strip_script_tags

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for user details.
    Used for the current user, profile responses and the admin user list.
    """
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    lastLogin = serializers.DateTimeField(source='last_login_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = (
            'id', 'name', 'email', 'role', 'bio', 'avatar',
            'isActive', 'lastLogin', 'createdAt', 'updatedAt'
        )
        read_only_fields = fields


class UserRegistrationSerializer(serializers.ModelSerializer):
    """
    Serializer for user registration.
    Handles password validation and user creation.
    """
    name = serializers.CharField(min_length=2, max_length=50)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    confirmPassword = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'password', 'confirmPassword')
        read_only_fields = ('id',)

    def validate_name(self, value):
        value = strip_script_tags(value)
        if len(value) < 2:
            raise serializers.ValidationError("Name must be between 2 and 50 characters")
        return value

    def validate_email(self, value):
        """Normalize email and ensure it is not taken."""
        email = value.strip().lower()
        if User.objects.filter(email=email).exists():
            raise serializers.ValidationError("User already exists with this email")
        return email

    def validate(self, attrs):
        """Validate that passwords match."""
        if attrs['password'] != attrs['confirmPassword']:
            raise serializers.ValidationError(
                {"confirmPassword": "Passwords do not match"}
            )
        return attrs

    def create(self, validated_data):
        """Create a new user with encrypted password."""
        validated_data.pop('confirmPassword')
        return User.objects.create_user(**validated_data)


class LoginSerializer(serializers.Serializer):
    """Serializer for email/password login."""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate_email(self, value):
        return value.strip().lower()


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """
    Serializer for profile updates.
    Role and password are not writable here.
    """
    name = serializers.CharField(min_length=2, max_length=50, required=False)
    email = serializers.EmailField(required=False)
    bio = serializers.CharField(max_length=500, required=False, allow_blank=True)
    avatar = serializers.URLField(required=False, allow_blank=True)

    class Meta:
        model = User
        fields = ('name', 'email', 'bio', 'avatar')

    def validate_name(self, value):
        return strip_script_tags(value)

    def validate_bio(self, value):
        return strip_script_tags(value)

    def validate_email(self, value):
        email = value.strip().lower()
        taken = User.objects.filter(email=email).exclude(pk=self.instance.pk)
        if taken.exists():
            raise serializers.ValidationError("Email is already in use")
        return email


class ChangePasswordSerializer(serializers.Serializer):
    """Serializer for password change endpoint."""
    currentPassword = serializers.CharField(required=True, write_only=True)
    newPassword = serializers.CharField(
        required=True,
        write_only=True,
        validators=[validate_password]
    )

    def validate_currentPassword(self, value):
        """Validate that current password is correct."""
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect")
        return value
