"""
Project and Skill Serializers

The API speaks camelCase; the models use snake_case.
"""
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from accounts.validators import strip_script_tags
from .models import Project, Skill


def clean_string_list(values, lower=False):
    """Strip, drop empties and de-duplicate while keeping order."""
    cleaned = []
    for value in values:
        value = strip_script_tags(value)
        if lower:
            value = value.lower()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


class ProjectLinksSerializer(serializers.Serializer):
    """``links: {demo, github, website}`` mapped onto the three URL columns."""
    demo = serializers.URLField(source='demo_url', required=False, allow_blank=True)
    github = serializers.URLField(source='github_url', required=False, allow_blank=True)
    website = serializers.URLField(source='website_url', required=False, allow_blank=True)


class ProjectSerializer(serializers.ModelSerializer):
    """
    Read and write model for projects.

    Used for the public and admin endpoints alike; views, likes and author
    are never writable.
    """

    title = serializers.CharField(min_length=3, max_length=100)
    description = serializers.CharField(min_length=10, max_length=1000)
    shortDescription = serializers.CharField(source='short_description', min_length=10, max_length=200)
    technologies = serializers.ListField(
        child=serializers.CharField(max_length=50),
        allow_empty=False,
        error_messages={'empty': 'At least one technology must be specified'}
    )
    images = serializers.ListField(child=serializers.DictField(), required=False)
    links = ProjectLinksSerializer(source='*', required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    teamSize = serializers.IntegerField(source='team_size', min_value=1, required=False)
    isPublic = serializers.BooleanField(source='is_public', required=False)
    author = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Project
        fields = [
            'id', 'title', 'description', 'shortDescription', 'technologies',
            'images', 'links', 'category', 'status', 'featured', 'priority',
            'tags', 'challenges', 'solutions', 'duration', 'teamSize',
            'isPublic', 'views', 'likes', 'author', 'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id', 'views', 'likes']

    def get_author(self, obj):
        if obj.author:
            return {'id': str(obj.author.id), 'name': obj.author.get_full_name()}
        return None

    def validate_title(self, value):
        return strip_script_tags(value)

    def validate_description(self, value):
        return strip_script_tags(value)

    def validate_technologies(self, value):
        technologies = clean_string_list(value)
        if not technologies:
            raise serializers.ValidationError('At least one technology must be specified')
        return technologies

    def validate_tags(self, value):
        return clean_string_list(value)

    def validate_images(self, value):
        images = []
        for image in value:
            if not image.get('url'):
                raise serializers.ValidationError('Every image needs a url')
            images.append({
                'url': image['url'],
                'caption': image.get('caption', ''),
                'isMain': bool(image.get('isMain', False)),
            })
        return images


class ProjectSummarySerializer(serializers.ModelSerializer):
    """Short form used where projects are embedded in other resources."""

    shortDescription = serializers.CharField(source='short_description', read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'title', 'shortDescription']
        read_only_fields = fields


class SkillSerializer(serializers.ModelSerializer):
    """
    Read and write model for skills.

    ``projectIds`` links projects on write; ``projects`` lists them on read.
    """

    name = serializers.CharField(
        min_length=2,
        max_length=50,
        validators=[UniqueValidator(
            queryset=Skill.objects.all(),
            message='Skill with this name already exists'
        )]
    )
    proficiency = serializers.IntegerField(min_value=1, max_value=100)
    yearsOfExperience = serializers.IntegerField(
        source='years_of_experience',
        min_value=0,
        max_value=50,
        required=False,
        allow_null=True
    )
    certifications = serializers.ListField(child=serializers.DictField(), required=False)
    projects = ProjectSummarySerializer(many=True, read_only=True)
    projectIds = serializers.PrimaryKeyRelatedField(
        source='projects',
        queryset=Project.objects.all(),
        many=True,
        write_only=True,
        required=False
    )
    isVisible = serializers.BooleanField(source='is_visible', required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Skill
        fields = [
            'id', 'name', 'category', 'proficiency', 'experience',
            'yearsOfExperience', 'icon', 'color', 'description',
            'certifications', 'projects', 'projectIds', 'isVisible', 'order',
            'tags', 'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id']

    def validate_name(self, value):
        return strip_script_tags(value)

    def validate_description(self, value):
        return strip_script_tags(value)

    def validate_tags(self, value):
        return clean_string_list(value, lower=True)


class SkillOrderSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    order = serializers.IntegerField()


class SkillReorderSerializer(serializers.Serializer):
    """``{skills: [{id, order}, ...]}``"""

    skills = serializers.ListField(
        child=SkillOrderSerializer(),
        error_messages={
            'required': 'Skills array is required',
            'not_a_list': 'Skills array is required',
        }
    )
