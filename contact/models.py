"""
Contact Management Models

Database schema for contact form submissions and replies.
"""
import uuid
from django.db import models
from django.core.validators import MinLengthValidator, EmailValidator, RegexValidator
from django.utils import timezone
from accounts.models import User


phone_validator = RegexValidator(
    regex=r'^\+?[1-9]\d{0,15}$',
    message='Please provide a valid phone number'
)


class ContactMessage(models.Model):
    """
    Contact form submissions from the portfolio site.

    Stores project inquiries together with their triage state (status,
    priority, notes) and spam flag.
    """

    PROJECT_TYPE_CHOICES = [
        ('web-development', 'Web Development'),
        ('mobile-app', 'Mobile App'),
        ('consultation', 'Consultation'),
        ('collaboration', 'Collaboration'),
        ('other', 'Other'),
    ]

    BUDGET_CHOICES = [
        ('<$1000', 'Less than $1,000'),
        ('$1000-$5000', '$1,000 - $5,000'),
        ('$5000-$10000', '$5,000 - $10,000'),
        ('$10000+', '$10,000+'),
        ('negotiable', 'Negotiable'),
    ]

    TIMELINE_CHOICES = [
        ('asap', 'ASAP'),
        ('1-month', 'Within 1 month'),
        ('2-3 months', '2-3 months'),
        ('3-6 months', '3-6 months'),
        ('flexible', 'Flexible'),
    ]

    STATUS_CHOICES = [
        ('new', 'New'),
        ('read', 'Read'),
        ('replied', 'Replied'),
        ('in-progress', 'In Progress'),
        ('completed', 'Completed'),
        ('archived', 'Archived'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    SOURCE_CHOICES = [
        ('website', 'Website'),
        ('linkedin', 'LinkedIn'),
        ('email', 'Email'),
        ('referral', 'Referral'),
        ('other', 'Other'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    # Contact Information
    name = models.CharField(
        max_length=50,
        validators=[MinLengthValidator(2)],
        help_text="Name of the person getting in touch"
    )

    email = models.EmailField(
        max_length=255,
        validators=[EmailValidator()],
        help_text="Email address for follow-up (stored lower-cased)"
    )

    phone = models.CharField(
        max_length=20,
        blank=True,
        default='',
        validators=[phone_validator]
    )

    company = models.CharField(
        max_length=100,
        blank=True,
        default=''
    )

    # Message Details
    subject = models.CharField(
        max_length=100,
        validators=[MinLengthValidator(5)]
    )

    message = models.TextField(
        max_length=1000,
        validators=[MinLengthValidator(10)],
        help_text="The actual message content (10-1000 characters)"
    )

    project_type = models.CharField(
        max_length=30,
        choices=PROJECT_TYPE_CHOICES,
        default='other',
        db_index=True
    )

    budget = models.CharField(
        max_length=20,
        choices=BUDGET_CHOICES,
        default='negotiable'
    )

    timeline = models.CharField(
        max_length=20,
        choices=TIMELINE_CHOICES,
        default='flexible'
    )

    # Triage
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default='new',
        db_index=True,
        help_text="Current status of the message"
    )

    priority = models.CharField(
        max_length=10,
        choices=PRIORITY_CHOICES,
        default='medium',
        db_index=True
    )

    notes = models.TextField(
        max_length=500,
        blank=True,
        default='',
        help_text="Internal notes from the admin"
    )

    # Security and Tracking
    ip_address = models.GenericIPAddressField(
        null=True,
        blank=True,
        help_text="IP address of the submitter (for spam prevention)"
    )

    user_agent = models.TextField(
        blank=True,
        default='',
        help_text="Browser user agent (for spam prevention)"
    )

    source = models.CharField(
        max_length=20,
        choices=SOURCE_CHOICES,
        default='website'
    )

    is_spam = models.BooleanField(
        default=False,
        db_index=True
    )

    replied_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the last reply was sent"
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the message was submitted"
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the message was last updated"
    )

    class Meta:
        db_table = 'contact_messages'
        ordering = ['-created_at']
        verbose_name = 'Contact Message'
        verbose_name_plural = 'Contact Messages'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='contact_status_created_idx'),
            models.Index(fields=['email'], name='contact_email_idx'),
            models.Index(fields=['is_spam', 'status'], name='contact_spam_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} - {self.subject} ({self.status})"

    def mark_read(self):
        """Move a new message to read."""
        if self.status == 'new':
            self.status = 'read'
            self.save(update_fields=['status', 'updated_at'])

    def mark_spam(self):
        """Flag as spam and archive."""
        self.is_spam = True
        self.status = 'archived'
        self.save(update_fields=['is_spam', 'status', 'updated_at'])

    def record_reply(self, message, sent_by=None):
        """Store a sent reply and move the message to replied."""
        reply = ContactReply.objects.create(
            contact=self,
            message=message,
            sent_by=sent_by,
        )
        self.status = 'replied'
        self.replied_at = reply.sent_at
        self.save(update_fields=['status', 'replied_at', 'updated_at'])
        return reply


class ContactReply(models.Model):
    """
    Replies sent to contact messages.

    Maintains a history of all responses to an inquiry.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    contact = models.ForeignKey(
        ContactMessage,
        on_delete=models.CASCADE,
        related_name='replies',
        help_text="The contact message being replied to"
    )

    message = models.TextField(
        help_text="The reply message content"
    )

    sent_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        related_name='contact_replies',
        help_text="Admin who sent the reply"
    )

    sent_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the reply email was sent"
    )

    class Meta:
        db_table = 'contact_message_replies'
        ordering = ['sent_at']
        verbose_name = 'Contact Reply'
        verbose_name_plural = 'Contact Replies'

    def __str__(self):
        sender = self.sent_by.get_full_name() if self.sent_by else 'Unknown'
        return f"Reply by {sender} to {self.contact_id}"


class ContactFormRateLimit(models.Model):
    """
    Rate limiting tracker for contact form submissions.

    Prevents spam by tracking submissions per IP and email.
    """

    identifier = models.CharField(
        max_length=255,
        db_index=True,
        help_text="IP address or email"
    )

    identifier_type = models.CharField(
        max_length=10,
        choices=[('ip', 'IP Address'), ('email', 'Email')],
        help_text="Type of identifier"
    )

    count = models.IntegerField(
        default=0,
        help_text="Number of submissions"
    )

    window_start = models.DateTimeField(
        help_text="Start of the rate limit window"
    )

    last_submission = models.DateTimeField(
        auto_now=True,
        help_text="Last submission time"
    )

    class Meta:
        db_table = 'contact_form_rate_limits'
        unique_together = [['identifier', 'identifier_type']]
        verbose_name = 'Contact Form Rate Limit'
        verbose_name_plural = 'Contact Form Rate Limits'

    def __str__(self):
        return f"{self.identifier_type}: {self.identifier} ({self.count} submissions)"
