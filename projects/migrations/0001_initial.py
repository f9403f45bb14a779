import django.core.validators
import django.db.models.deletion
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
            name='Project',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(3)])),
                ('description', models.TextField(max_length=1000, validators=[django.core.validators.MinLengthValidator(10)])),
                ('short_description', models.CharField(help_text='One-line summary used on cards', max_length=200, validators=[django.core.validators.MinLengthValidator(10)])),
                ('technologies', models.JSONField(default=list, help_text='Technology names, e.g. ["React", "Django"]')),
                ('images', models.JSONField(blank=True, default=list, help_text='List of {url, caption, isMain}')),
                ('demo_url', models.URLField(blank=True, default='')),
                ('github_url', models.URLField(blank=True, default='')),
                ('website_url', models.URLField(blank=True, default='')),
                ('category', models.CharField(choices=[('web', 'Web'), ('mobile', 'Mobile'), ('desktop', 'Desktop'), ('api', 'API'), ('other', 'Other')], db_index=True, max_length=20)),
                ('status', models.CharField(choices=[('completed', 'Completed'), ('in-progress', 'In Progress'), ('planned', 'Planned')], default='completed', max_length=20)),
                ('featured', models.BooleanField(default=False)),
                ('priority', models.IntegerField(default=0, help_text='Higher values are listed first')),
                ('tags', models.JSONField(blank=True, default=list)),
                ('challenges', models.TextField(blank=True, default='', max_length=500)),
                ('solutions', models.TextField(blank=True, default='', max_length=500)),
                ('duration', models.CharField(blank=True, default='', max_length=50)),
                ('team_size', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('is_public', models.BooleanField(default=True, help_text='Private projects are only visible to admins')),
                ('views', models.PositiveIntegerField(default=0)),
                ('likes', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('author', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='projects', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Project',
                'verbose_name_plural': 'Projects',
                'db_table': 'projects',
                'ordering': ['-priority', '-created_at'],
                'indexes': [
                    models.Index(fields=['category', 'featured', 'priority'], name='project_cat_feat_prio_idx'),
                    models.Index(fields=['is_public', 'featured'], name='project_public_featured_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Skill',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=50, unique=True, validators=[django.core.validators.MinLengthValidator(2)])),
                ('category', models.CharField(choices=[('frontend', 'Frontend'), ('backend', 'Backend'), ('database', 'Database'), ('mobile', 'Mobile'), ('devops', 'DevOps'), ('design', 'Design'), ('other', 'Other')], db_index=True, max_length=20)),
                ('proficiency', models.PositiveSmallIntegerField(help_text='1-100', validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(100)])),
                ('experience', models.CharField(choices=[('beginner', 'Beginner'), ('intermediate', 'Intermediate'), ('advanced', 'Advanced'), ('expert', 'Expert')], max_length=20)),
                ('years_of_experience', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(50)])),
                ('icon', models.CharField(blank=True, default='', help_text='Icon URL or icon class name', max_length=255)),
                ('color', models.CharField(default='#3498db', max_length=20)),
                ('description', models.CharField(blank=True, default='', max_length=200)),
                ('certifications', models.JSONField(blank=True, default=list, help_text='List of {name, issuer, date, url}')),
                ('is_visible', models.BooleanField(db_index=True, default=True)),
                ('order', models.IntegerField(db_index=True, default=0)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('projects', models.ManyToManyField(blank=True, related_name='skills', to='projects.project')),
            ],
            options={
                'verbose_name': 'Skill',
                'verbose_name_plural': 'Skills',
                'db_table': 'skills',
                'ordering': ['order', '-proficiency'],
                'indexes': [
                    models.Index(fields=['category', 'proficiency'], name='skill_cat_prof_idx'),
                ],
            },
        ),
    ]
