"""
Contact Management Serializers

Serializers for contact form submissions and admin management.
"""
from rest_framework import serializers
from django.core.validators import EmailValidator, RegexValidator

from accounts.validators import strip_script_tags
from .models import ContactMessage, ContactReply


class ContactFormSubmitSerializer(serializers.Serializer):
    """
    Public contact form submission serializer.

    Validates and sanitizes user input from the contact form.
    """

    name = serializers.CharField(min_length=2, max_length=50)

    email = serializers.EmailField(
        max_length=255,
        validators=[EmailValidator()],
        help_text="Valid email address for follow-up"
    )

    subject = serializers.CharField(min_length=5, max_length=100)

    message = serializers.CharField(
        min_length=10,
        max_length=1000,
        help_text="Message content (10-1000 characters)"
    )

    phone = serializers.CharField(
        max_length=20,
        required=False,
        allow_blank=True,
        validators=[RegexValidator(r'^\+?[1-9]\d{0,15}$', 'Please provide a valid phone number')]
    )

    company = serializers.CharField(max_length=100, required=False, allow_blank=True)

    projectType = serializers.ChoiceField(
        choices=ContactMessage.PROJECT_TYPE_CHOICES,
        required=False,
        default='other'
    )

    budget = serializers.ChoiceField(
        choices=ContactMessage.BUDGET_CHOICES,
        required=False,
        default='negotiable'
    )

    timeline = serializers.ChoiceField(
        choices=ContactMessage.TIMELINE_CHOICES,
        required=False,
        default='flexible'
    )

    source = serializers.ChoiceField(
        choices=ContactMessage.SOURCE_CHOICES,
        required=False,
        default='website'
    )

    def _sanitized(self, value, min_length, label):
        value = strip_script_tags(value)
        if len(value) < min_length:
            raise serializers.ValidationError(
                f"{label} must be at least {min_length} characters"
            )
        return value

    def validate_name(self, value):
        return self._sanitized(value, 2, 'Name')

    def validate_subject(self, value):
        return self._sanitized(value, 5, 'Subject')

    def validate_message(self, value):
        return self._sanitized(value, 10, 'Message')

    def validate_company(self, value):
        return strip_script_tags(value)

    def validate_email(self, value):
        return value.strip().lower()

    def create(self, validated_data):
        return ContactMessage.objects.create(
            name=validated_data['name'],
            email=validated_data['email'],
            subject=validated_data['subject'],
            message=validated_data['message'],
            phone=validated_data.get('phone', ''),
            company=validated_data.get('company', ''),
            project_type=validated_data['projectType'],
            budget=validated_data['budget'],
            timeline=validated_data['timeline'],
            source=validated_data['source'],
            ip_address=self.context.get('ip_address'),
            user_agent=self.context.get('user_agent', ''),
        )


class ContactReplySerializer(serializers.ModelSerializer):
    """
    Serializer for contact message replies.
    """

    sentBy = serializers.UUIDField(source='sent_by_id', read_only=True)
    sentByName = serializers.SerializerMethodField()
    sentAt = serializers.DateTimeField(source='sent_at', read_only=True)

    class Meta:
        model = ContactReply
        fields = ['id', 'message', 'sentBy', 'sentByName', 'sentAt']
        read_only_fields = fields

    def get_sentByName(self, obj):
        """Get sender's name."""
        if obj.sent_by:
            return obj.sent_by.get_full_name()
        return None


class ContactMessageSerializer(serializers.ModelSerializer):
    """
    Serializer for contact messages in the admin API.
    """

    projectType = serializers.CharField(source='project_type', read_only=True)
    ipAddress = serializers.CharField(source='ip_address', read_only=True)
    userAgent = serializers.CharField(source='user_agent', read_only=True)
    isSpam = serializers.BooleanField(source='is_spam', read_only=True)
    repliedAt = serializers.DateTimeField(source='replied_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    replies = ContactReplySerializer(many=True, read_only=True)

    class Meta:
        model = ContactMessage
        fields = [
            'id', 'name', 'email', 'phone', 'company', 'subject', 'message',
            'projectType', 'budget', 'timeline', 'status', 'priority', 'notes',
            'ipAddress', 'userAgent', 'source', 'isSpam', 'repliedAt',
            'replies', 'createdAt', 'updatedAt'
        ]
        read_only_fields = fields


class ContactStatusUpdateSerializer(serializers.ModelSerializer):
    """
    Serializer for updating contact message status, priority and notes.
    Every field is optional; only the fields present are applied.
    """

    status = serializers.ChoiceField(choices=ContactMessage.STATUS_CHOICES, required=False)
    priority = serializers.ChoiceField(choices=ContactMessage.PRIORITY_CHOICES, required=False)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True)

    class Meta:
        model = ContactMessage
        fields = ['status', 'priority', 'notes']

    def validate_notes(self, value):
        return strip_script_tags(value)


class ContactReplyCreateSerializer(serializers.Serializer):
    """
    Serializer for creating a new reply to a contact message.
    """

    message = serializers.CharField(
        required=True,
        allow_blank=False,
        max_length=5000,
        help_text="Reply message content"
    )

    def validate_message(self, value):
        value = strip_script_tags(value)
        if not value:
            raise serializers.ValidationError("Reply message is required")
        return value
