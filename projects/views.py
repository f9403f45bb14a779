"""
Project and Skill Views

Public portfolio endpoints plus admin management.
"""
import logging

from django.db import transaction
from rest_framework import generics, status, filters
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend

from accounts.permissions import IsAdminRole
from core.pagination import PagePagination
from .filters import ProjectAdminFilter, ProjectFilter, SkillFilter
from .models import Project, Skill
from .serializers import ProjectSerializer, SkillReorderSerializer, SkillSerializer

logger = logging.getLogger(__name__)

FEATURED_PROJECT_LIMIT = 6


def get_project_or_404(pk):
    try:
        return Project.objects.select_related('author').get(pk=pk)
    except Project.DoesNotExist:
        raise NotFound('Project not found')


def get_skill_or_404(pk):
    try:
        return Skill.objects.prefetch_related('projects').get(pk=pk)
    except Skill.DoesNotExist:
        raise NotFound('Skill not found')


def is_admin(user):
    return bool(user and user.is_authenticated and user.role == 'admin')


class AnonymousReadMixin:
    """
    Reads are public and skip authentication, so a stale token never
    blocks them. Every other method requires the admin role.
    """

    public_methods = ('GET', 'HEAD', 'OPTIONS')

    def get_authenticators(self):
        if self.request is not None and self.request.method in self.public_methods:
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method in self.public_methods:
            return [AllowAny()]
        return [IsAdminRole()]


class ProjectPagination(PagePagination):
    page_size = 12
    results_key = 'projects'


class ProjectAdminPagination(PagePagination):
    page_size = 10
    results_key = 'projects'


class ProjectListView(AnonymousReadMixin, generics.ListCreateAPIView):
    """
    Project collection.

    GET  /api/projects  public projects (filters: category, featured, status,
                        search, tech, sort; page/limit, default limit 12)
    POST /api/projects  admin create
    """

    serializer_class = ProjectSerializer
    pagination_class = ProjectPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_class = ProjectFilter
    search_fields = ['title', 'description', 'short_description']

    def get_queryset(self):
        return Project.objects.filter(is_public=True).select_related('author')

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        response.data['filters'] = {
            'categories': [value for value, _ in Project.CATEGORY_CHOICES],
            'statuses': [value for value, _ in Project.STATUS_CHOICES],
        }
        return response

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = serializer.save(author=request.user)

        logger.info(f"Project {project.id} created by {request.user.email}")

        return Response(
            {
                'success': True,
                'message': 'Project created successfully',
                'project': ProjectSerializer(project).data
            },
            status=status.HTTP_201_CREATED
        )


class FeaturedProjectsView(APIView):
    """
    Featured public projects, highest priority first.

    GET /api/projects/featured
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        projects = (
            Project.objects
            .filter(featured=True, is_public=True)
            .select_related('author')
            .order_by('-priority', '-created_at')[:FEATURED_PROJECT_LIMIT]
        )
        return Response({
            'success': True,
            'projects': ProjectSerializer(projects, many=True).data
        })


class ProjectAdminListView(generics.ListAPIView):
    """
    Every project including private ones (admin only).

    GET /api/projects/admin/all  (filters: category, status, search)
    """

    permission_classes = [IsAdminRole]
    serializer_class = ProjectSerializer
    pagination_class = ProjectAdminPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_class = ProjectAdminFilter
    search_fields = ['title', 'description', 'short_description']

    def get_queryset(self):
        return Project.objects.select_related('author').order_by('-created_at')


class ProjectDetailView(APIView):
    """
    A single project.

    GET    /api/projects/:id  public, counts a view; private projects are
                              admin only
    PUT    /api/projects/:id  admin partial update
    DELETE /api/projects/:id  admin
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAdminRole()]

    def get(self, request, pk):
        project = get_project_or_404(pk)

        if not project.is_public and not is_admin(request.user):
            raise PermissionDenied('Access denied to this project')

        project.register_view()
        return Response({
            'success': True,
            'project': ProjectSerializer(project).data
        })

    def put(self, request, pk):
        project = get_project_or_404(pk)
        serializer = ProjectSerializer(project, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        project = serializer.save()

        return Response({
            'success': True,
            'message': 'Project updated successfully',
            'project': ProjectSerializer(project).data
        })

    def delete(self, request, pk):
        project = get_project_or_404(pk)
        project.delete()
        logger.info(f"Project {pk} deleted by {request.user.email}")
        return Response({
            'success': True,
            'message': 'Project deleted successfully'
        })


class ProjectLikeView(APIView):
    """
    Like a project. Anyone may like, any number of times.

    POST /api/projects/:id/like
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request, pk):
        project = get_project_or_404(pk)
        return Response({
            'success': True,
            'likes': project.register_like()
        })


# =============================================================================
# SKILLS
# =============================================================================

class SkillListView(AnonymousReadMixin, APIView):
    """
    Skill collection.

    GET  /api/skills  visible skills, ordered by position then proficiency,
                      also grouped by category (filter: category)
    POST /api/skills  admin create
    """

    def get(self, request):
        queryset = SkillFilter(
            request.query_params,
            queryset=Skill.objects.filter(is_visible=True).prefetch_related('projects')
        ).qs
        skills = SkillSerializer(queryset, many=True).data

        by_category = {}
        for skill in skills:
            by_category.setdefault(skill['category'], []).append(skill)

        return Response({
            'success': True,
            'skills': skills,
            'skillsByCategory': by_category,
            'categories': [value for value, _ in Skill.CATEGORY_CHOICES]
        })

    def post(self, request):
        serializer = SkillSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        skill = serializer.save()

        return Response(
            {
                'success': True,
                'message': 'Skill created successfully',
                'skill': SkillSerializer(skill).data
            },
            status=status.HTTP_201_CREATED
        )


class SkillAdminListView(APIView):
    """
    Every skill including hidden ones (admin only).

    GET /api/skills/admin/all
    """

    permission_classes = [IsAdminRole]

    def get(self, request):
        skills = Skill.objects.prefetch_related('projects').order_by('category', 'order')
        return Response({
            'success': True,
            'skills': SkillSerializer(skills, many=True).data
        })


class SkillReorderView(APIView):
    """
    Set the display position of several skills at once.

    PUT /api/skills/reorder  {skills: [{id, order}, ...]}

    Unknown ids are ignored.
    """

    permission_classes = [IsAdminRole]

    def put(self, request):
        serializer = SkillReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            for item in serializer.validated_data['skills']:
                Skill.objects.filter(pk=item['id']).update(order=item['order'])

        return Response({
            'success': True,
            'message': 'Skills reordered successfully'
        })


class SkillDetailView(AnonymousReadMixin, APIView):
    """
    A single skill.

    GET    /api/skills/:id  public; hidden skills are not found
    PUT    /api/skills/:id  admin partial update
    DELETE /api/skills/:id  admin
    """

    def get(self, request, pk):
        skill = get_skill_or_404(pk)
        if not skill.is_visible:
            raise NotFound('Skill not found')
        return Response({
            'success': True,
            'skill': SkillSerializer(skill).data
        })

    def put(self, request, pk):
        skill = get_skill_or_404(pk)
        serializer = SkillSerializer(skill, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        skill = serializer.save()

        return Response({
            'success': True,
            'message': 'Skill updated successfully',
            'skill': SkillSerializer(skill).data
        })

    def delete(self, request, pk):
        skill = get_skill_or_404(pk)
        skill.delete()
        return Response({
            'success': True,
            'message': 'Skill deleted successfully'
        })
