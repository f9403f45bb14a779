"""
Blog Models

Posts written by the site owner and the likes they collect.
"""
import math
import re
import uuid
from django.db import models
from django.core.validators import MinLengthValidator
from django.utils import timezone
from django.utils.text import slugify
from accounts.models import User

WORDS_PER_MINUTE = 200


def calculate_read_time(content):
    """Minutes to read ``content`` at 200 words per minute, at least 1."""
    words = len(re.split(r'\s+', content.strip())) if content and content.strip() else 0
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


class BlogPost(models.Model):
    """
    A blog post.

    The slug is derived from the title when not given and made unique with
    a numeric suffix. Publishing stamps ``published_at`` once.
    """

    CATEGORY_CHOICES = [
        ('technology', 'Technology'),
        ('tutorial', 'Tutorial'),
        ('career', 'Career'),
        ('personal', 'Personal'),
        ('review', 'Review'),
        ('other', 'Other'),
    ]

    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('published', 'Published'),
        ('archived', 'Archived'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    title = models.CharField(
        max_length=150,
        validators=[MinLengthValidator(5)]
    )

    slug = models.SlugField(
        max_length=170,
        unique=True,
        blank=True
    )

    excerpt = models.CharField(
        max_length=300,
        validators=[MinLengthValidator(10)]
    )

    content = models.TextField(
        validators=[MinLengthValidator(100)]
    )

    author = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        related_name='blog_posts'
    )

    featured_image = models.JSONField(
        default=dict,
        blank=True,
        help_text="{url, caption, alt}"
    )

    category = models.CharField(
        max_length=20,
        choices=CATEGORY_CHOICES,
        db_index=True
    )

    tags = models.JSONField(default=list, blank=True)

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default='draft',
        db_index=True
    )

    published_at = models.DateTimeField(null=True, blank=True, db_index=True)

    views = models.PositiveIntegerField(default=0)

    read_time = models.PositiveIntegerField(
        default=1,
        help_text="Estimated reading time in minutes"
    )

    seo = models.JSONField(
        default=dict,
        blank=True,
        help_text="{metaTitle, metaDescription, keywords}"
    )

    featured = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'blog_posts'
        ordering = ['-published_at', '-created_at']
        verbose_name = 'Blog Post'
        verbose_name_plural = 'Blog Posts'
        indexes = [
            models.Index(fields=['status', 'published_at'], name='blog_status_published_idx'),
            models.Index(fields=['category', 'featured'], name='blog_category_featured_idx'),
        ]

    def __str__(self):
        return self.title

    def _unique_slug(self):
        base = slugify(self.title)[:160] or 'post'
        slug = base
        suffix = 2
        while BlogPost.objects.filter(slug=slug).exclude(pk=self.pk).exists():
            slug = f'{base}-{suffix}'
            suffix += 1
        return slug

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self._unique_slug()
        self.read_time = calculate_read_time(self.content)
        if self.status == 'published' and not self.published_at:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)

    @property
    def like_count(self):
        return self.likes.count()

    def register_view(self):
        """Count one read."""
        BlogPost.objects.filter(pk=self.pk).update(views=models.F('views') + 1)
        self.refresh_from_db(fields=['views'])

    def related_posts(self, limit=3):
        """Other published posts sharing the category or a tag, newest first."""
        tags = set(self.tags or [])
        related = []
        candidates = (
            BlogPost.objects
            .filter(status='published')
            .exclude(pk=self.pk)
            .select_related('author')
            .order_by('-published_at')
        )
        for post in candidates:
            if post.category == self.category or tags & set(post.tags or []):
                related.append(post)
                if len(related) == limit:
                    break
        return related


class BlogLike(models.Model):
    """One like on a post; anonymous likes have no user."""

    post = models.ForeignKey(
        BlogPost,
        on_delete=models.CASCADE,
        related_name='likes'
    )

    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='blog_likes'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'blog_likes'
        ordering = ['-created_at']
        verbose_name = 'Blog Like'
        verbose_name_plural = 'Blog Likes'

    def __str__(self):
        return f"Like on {self.post_id}"
