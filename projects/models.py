"""
Portfolio Content Models

Projects shown on the portfolio and the skills they are built with.
"""
import uuid
from django.db import models
from django.core.validators import MinLengthValidator, MinValueValidator, MaxValueValidator
from accounts.models import User


class Project(models.Model):
    """
    A portfolio project.

    List-valued fields (technologies, tags, images) are stored as JSON so
    the schema works unchanged on SQLite and PostgreSQL.
    """

    CATEGORY_CHOICES = [
        ('web', 'Web'),
        ('mobile', 'Mobile'),
        ('desktop', 'Desktop'),
        ('api', 'API'),
        ('other', 'Other'),
    ]

    STATUS_CHOICES = [
        ('completed', 'Completed'),
        ('in-progress', 'In Progress'),
        ('planned', 'Planned'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    title = models.CharField(
        max_length=100,
        validators=[MinLengthValidator(3)]
    )

    description = models.TextField(
        max_length=1000,
        validators=[MinLengthValidator(10)]
    )

    short_description = models.CharField(
        max_length=200,
        validators=[MinLengthValidator(10)],
        help_text="One-line summary used on cards"
    )

    technologies = models.JSONField(
        default=list,
        help_text="Technology names, e.g. [\"React\", \"Django\"]"
    )

    images = models.JSONField(
        default=list,
        blank=True,
        help_text="List of {url, caption, isMain}"
    )

    # Links
    demo_url = models.URLField(blank=True, default='')
    github_url = models.URLField(blank=True, default='')
    website_url = models.URLField(blank=True, default='')

    category = models.CharField(
        max_length=20,
        choices=CATEGORY_CHOICES,
        db_index=True
    )

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default='completed'
    )

    featured = models.BooleanField(default=False)

    priority = models.IntegerField(
        default=0,
        help_text="Higher values are listed first"
    )

    tags = models.JSONField(default=list, blank=True)

    challenges = models.TextField(max_length=500, blank=True, default='')
    solutions = models.TextField(max_length=500, blank=True, default='')
    duration = models.CharField(max_length=50, blank=True, default='')

    team_size = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)]
    )

    is_public = models.BooleanField(
        default=True,
        help_text="Private projects are only visible to admins"
    )

    views = models.PositiveIntegerField(default=0)
    likes = models.PositiveIntegerField(default=0)

    author = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='projects'
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-priority', '-created_at']
        verbose_name = 'Project'
        verbose_name_plural = 'Projects'
        indexes = [
            models.Index(fields=['category', 'featured', 'priority'], name='project_cat_feat_prio_idx'),
            models.Index(fields=['is_public', 'featured'], name='project_public_featured_idx'),
        ]

    def __str__(self):
        return self.title

    def register_view(self):
        """Count one detail view."""
        Project.objects.filter(pk=self.pk).update(views=models.F('views') + 1)
        self.refresh_from_db(fields=['views'])

    def register_like(self):
        """Count one like and return the new total."""
        Project.objects.filter(pk=self.pk).update(likes=models.F('likes') + 1)
        self.refresh_from_db(fields=['likes'])
        return self.likes


class Skill(models.Model):
    """
    A skill with a self-assessed proficiency, grouped by category.
    """

    CATEGORY_CHOICES = [
        ('frontend', 'Frontend'),
        ('backend', 'Backend'),
        ('database', 'Database'),
        ('mobile', 'Mobile'),
        ('devops', 'DevOps'),
        ('design', 'Design'),
        ('other', 'Other'),
    ]

    EXPERIENCE_CHOICES = [
        ('beginner', 'Beginner'),
        ('intermediate', 'Intermediate'),
        ('advanced', 'Advanced'),
        ('expert', 'Expert'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    name = models.CharField(
        max_length=50,
        unique=True,
        validators=[MinLengthValidator(2)]
    )

    category = models.CharField(
        max_length=20,
        choices=CATEGORY_CHOICES,
        db_index=True
    )

    proficiency = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(100)],
        help_text="1-100"
    )

    experience = models.CharField(
        max_length=20,
        choices=EXPERIENCE_CHOICES
    )

    years_of_experience = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(50)]
    )

    icon = models.CharField(
        max_length=255,
        blank=True,
        default='',
        help_text="Icon URL or icon class name"
    )

    color = models.CharField(max_length=20, default='#3498db')

    description = models.CharField(max_length=200, blank=True, default='')

    certifications = models.JSONField(
        default=list,
        blank=True,
        help_text="List of {name, issuer, date, url}"
    )

    projects = models.ManyToManyField(
        Project,
        blank=True,
        related_name='skills'
    )

    is_visible = models.BooleanField(default=True, db_index=True)

    order = models.IntegerField(default=0, db_index=True)

    tags = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'skills'
        ordering = ['order', '-proficiency']
        verbose_name = 'Skill'
        verbose_name_plural = 'Skills'
        indexes = [
            models.Index(fields=['category', 'proficiency'], name='skill_cat_prof_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.category})"
