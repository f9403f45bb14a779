"""
Blog Serializers
"""
from rest_framework import serializers

from accounts.validators import strip_script_tags
from projects.serializers import clean_string_list
from .models import BlogPost


class BlogPostSerializer(serializers.ModelSerializer):
    """
    Full blog post, used for the detail endpoint and for admin writes.

    ``slug``, ``readTime`` and ``publishedAt`` are derived on save.
    """

    title = serializers.CharField(min_length=5, max_length=150)
    excerpt = serializers.CharField(min_length=10, max_length=300)
    content = serializers.CharField(min_length=100)
    slug = serializers.SlugField(max_length=170, required=False)
    featuredImage = serializers.DictField(source='featured_image', required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    seo = serializers.DictField(required=False)
    author = serializers.SerializerMethodField()
    likes = serializers.IntegerField(source='like_count', read_only=True)
    readTime = serializers.IntegerField(source='read_time', read_only=True)
    publishedAt = serializers.DateTimeField(source='published_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = BlogPost
        fields = [
            'id', 'title', 'slug', 'excerpt', 'content', 'author',
            'featuredImage', 'category', 'tags', 'status', 'publishedAt',
            'views', 'likes', 'readTime', 'seo', 'featured', 'createdAt',
            'updatedAt'
        ]
        read_only_fields = ['id', 'views']

    def get_author(self, obj):
        if not obj.author:
            return None
        return {
            'id': str(obj.author.id),
            'name': obj.author.get_full_name(),
            'avatar': obj.author.avatar,
            'bio': obj.author.bio,
        }

    def validate_title(self, value):
        return strip_script_tags(value)

    def validate_excerpt(self, value):
        return strip_script_tags(value)

    def validate_content(self, value):
        return strip_script_tags(value)

    def validate_tags(self, value):
        return clean_string_list(value, lower=True)

    def validate_slug(self, value):
        queryset = BlogPost.objects.filter(slug=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError('A post with this slug already exists')
        return value


class BlogPostListSerializer(BlogPostSerializer):
    """List form: everything but the content body."""

    def get_author(self, obj):
        if not obj.author:
            return None
        return {
            'id': str(obj.author.id),
            'name': obj.author.get_full_name(),
            'avatar': obj.author.avatar,
        }

    class Meta(BlogPostSerializer.Meta):
        fields = [field for field in BlogPostSerializer.Meta.fields if field != 'content']
