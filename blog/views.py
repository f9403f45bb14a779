"""
Blog Views

Published posts for visitors; drafts and editing for the admin.
"""
import logging

from rest_framework import generics, status, filters
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend

from accounts.permissions import IsAdminRole
from core.pagination import PagePagination
from projects.views import AnonymousReadMixin
from .filters import BlogPostAdminFilter, BlogPostFilter
from .models import BlogLike, BlogPost
from .serializers import BlogPostListSerializer, BlogPostSerializer

logger = logging.getLogger(__name__)

FEATURED_POST_LIMIT = 3


def get_post_or_404(**lookup):
    try:
        return BlogPost.objects.select_related('author').get(**lookup)
    except BlogPost.DoesNotExist:
        raise NotFound('Blog post not found')


class BlogPagination(PagePagination):
    page_size = 10
    results_key = 'blogs'


class BlogPostListView(AnonymousReadMixin, generics.ListCreateAPIView):
    """
    Blog collection.

    GET  /api/blog  published posts without their content (filters:
                    category, search, tags, sort; page/limit, default 10)
    POST /api/blog  admin create; the author is the requesting admin
    """

    pagination_class = BlogPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_class = BlogPostFilter
    search_fields = ['title', 'excerpt', 'content']

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return BlogPostSerializer
        return BlogPostListSerializer

    def get_queryset(self):
        return (
            BlogPost.objects
            .filter(status='published')
            .select_related('author')
            .order_by('-published_at')
        )

    def create(self, request, *args, **kwargs):
        serializer = BlogPostSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        post = serializer.save(author=request.user)

        logger.info(f"Blog post {post.id} ({post.status}) created by {request.user.email}")

        return Response(
            {
                'success': True,
                'message': 'Blog post created successfully',
                'blog': BlogPostSerializer(post).data
            },
            status=status.HTTP_201_CREATED
        )


class FeaturedBlogPostsView(APIView):
    """
    Latest featured published posts.

    GET /api/blog/featured
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        posts = (
            BlogPost.objects
            .filter(featured=True, status='published')
            .select_related('author')
            .order_by('-published_at')[:FEATURED_POST_LIMIT]
        )
        return Response({
            'success': True,
            'blogs': BlogPostListSerializer(posts, many=True).data
        })


class BlogPostAdminListView(generics.ListAPIView):
    """
    Every post including drafts (admin only).

    GET /api/blog/admin/all  (filters: status, category, search)
    """

    permission_classes = [IsAdminRole]
    serializer_class = BlogPostListSerializer
    pagination_class = BlogPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_class = BlogPostAdminFilter
    search_fields = ['title', 'excerpt', 'content']

    def get_queryset(self):
        return BlogPost.objects.select_related('author').order_by('-created_at')


class BlogPostBySlugView(APIView):
    """
    Read a published post and count the view.

    GET /api/blog/:slug  -> {blog, relatedPosts}
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request, slug):
        post = get_post_or_404(slug=slug, status='published')
        post.register_view()

        return Response({
            'success': True,
            'blog': BlogPostSerializer(post).data,
            'relatedPosts': BlogPostListSerializer(post.related_posts(), many=True).data
        })


class BlogPostDetailView(APIView):
    """
    Edit or remove a post (admin only).

    PUT    /api/blog/:id
    DELETE /api/blog/:id
    """

    permission_classes = [IsAdminRole]

    def put(self, request, pk):
        post = get_post_or_404(pk=pk)
        serializer = BlogPostSerializer(post, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        post = serializer.save()

        return Response({
            'success': True,
            'message': 'Blog post updated successfully',
            'blog': BlogPostSerializer(post).data
        })

    def delete(self, request, pk):
        post = get_post_or_404(pk=pk)
        post.delete()
        logger.info(f"Blog post {pk} deleted by {request.user.email}")
        return Response({
            'success': True,
            'message': 'Blog post deleted successfully'
        })


class BlogPostLikeView(APIView):
    """
    Like a post. Signed-in likes record the user; anonymous likes are allowed.

    POST /api/blog/:id/like
    """

    permission_classes = [AllowAny]

    def post(self, request, pk):
        post = get_post_or_404(pk=pk)
        user = request.user if request.user.is_authenticated else None
        BlogLike.objects.create(post=post, user=user)

        return Response({
            'success': True,
            'likes': post.like_count
        })
