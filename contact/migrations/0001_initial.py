import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ContactFormRateLimit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('identifier', models.CharField(db_index=True, help_text='IP address or email', max_length=255)),
                ('identifier_type', models.CharField(choices=[('ip', 'IP Address'), ('email', 'Email')], help_text='Type of identifier', max_length=10)),
                ('count', models.IntegerField(default=0, help_text='Number of submissions')),
                ('window_start', models.DateTimeField(help_text='Start of the rate limit window')),
                ('last_submission', models.DateTimeField(auto_now=True, help_text='Last submission time')),
            ],
            options={
                'verbose_name': 'Contact Form Rate Limit',
                'verbose_name_plural': 'Contact Form Rate Limits',
                'db_table': 'contact_form_rate_limits',
                'unique_together': {('identifier', 'identifier_type')},
            },
        ),
        migrations.CreateModel(
            name='ContactMessage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(help_text='Name of the person getting in touch', max_length=50, validators=[django.core.validators.MinLengthValidator(2)])),
                ('email', models.EmailField(help_text='Email address for follow-up (stored lower-cased)', max_length=255, validators=[django.core.validators.EmailValidator()])),
                ('phone', models.CharField(blank=True, default='', max_length=20, validators=[django.core.validators.RegexValidator(message='Please provide a valid phone number', regex='^\\+?[1-9]\\d{0,15}$')])),
                ('company', models.CharField(blank=True, default='', max_length=100)),
                ('subject', models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(5)])),
                ('message', models.TextField(help_text='The actual message content (10-1000 characters)', max_length=1000, validators=[django.core.validators.MinLengthValidator(10)])),
                ('project_type', models.CharField(choices=[('web-development', 'Web Development'), ('mobile-app', 'Mobile App'), ('consultation', 'Consultation'), ('collaboration', 'Collaboration'), ('other', 'Other')], db_index=True, default='other', max_length=30)),
                ('budget', models.CharField(choices=[('<$1000', 'Less than $1,000'), ('$1000-$5000', '$1,000 - $5,000'), ('$5000-$10000', '$5,000 - $10,000'), ('$10000+', '$10,000+'), ('negotiable', 'Negotiable')], default='negotiable', max_length=20)),
                ('timeline', models.CharField(choices=[('asap', 'ASAP'), ('1-month', 'Within 1 month'), ('2-3 months', '2-3 months'), ('3-6 months', '3-6 months'), ('flexible', 'Flexible')], default='flexible', max_length=20)),
                ('status', models.CharField(choices=[('new', 'New'), ('read', 'Read'), ('replied', 'Replied'), ('in-progress', 'In Progress'), ('completed', 'Completed'), ('archived', 'Archived')], db_index=True, default='new', help_text='Current status of the message', max_length=20)),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High'), ('urgent', 'Urgent')], db_index=True, default='medium', max_length=10)),
                ('notes', models.TextField(blank=True, default='', help_text='Internal notes from the admin', max_length=500)),
                ('ip_address', models.GenericIPAddressField(blank=True, help_text='IP address of the submitter (for spam prevention)', null=True)),
                ('user_agent', models.TextField(blank=True, default='', help_text='Browser user agent (for spam prevention)')),
                ('source', models.CharField(choices=[('website', 'Website'), ('linkedin', 'LinkedIn'), ('email', 'Email'), ('referral', 'Referral'), ('other', 'Other')], default='website', max_length=20)),
                ('is_spam', models.BooleanField(db_index=True, default=False)),
                ('replied_at', models.DateTimeField(blank=True, help_text='When the last reply was sent', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When the message was submitted')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='When the message was last updated')),
            ],
            options={
                'verbose_name': 'Contact Message',
                'verbose_name_plural': 'Contact Messages',
                'db_table': 'contact_messages',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='contact_status_created_idx'),
                    models.Index(fields=['email'], name='contact_email_idx'),
                    models.Index(fields=['is_spam', 'status'], name='contact_spam_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ContactReply',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('message', models.TextField(help_text='The reply message content')),
                ('sent_at', models.DateTimeField(default=django.utils.timezone.now, help_text='When the reply email was sent')),
                ('contact', models.ForeignKey(help_text='The contact message being replied to', on_delete=django.db.models.deletion.CASCADE, related_name='replies', to='contact.contactmessage')),
                ('sent_by', models.ForeignKey(help_text='Admin who sent the reply', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='contact_replies', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Contact Reply',
                'verbose_name_plural': 'Contact Replies',
                'db_table': 'contact_message_replies',
                'ordering': ['sent_at'],
            },
        ),
    ]
