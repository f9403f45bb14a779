"""
Tests for the blog endpoints.
"""
import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework import status

from blog.models import BlogLike, BlogPost, calculate_read_time

BODY = 'Django makes it easy to build a small portfolio backend quickly. ' * 5


def make_post(**overrides):
    fields = {
        'title': 'Building a portfolio',
        'excerpt': 'Notes on building this site.',
        'content': BODY,
        'category': 'technology',
        'status': 'published',
    }
    fields.update(overrides)
    return BlogPost.objects.create(**fields)


def days_ago(days):
    return timezone.now() - timedelta(days=days)


@pytest.fixture
def post_data():
    return {
        'title': 'Hello World Again',
        'excerpt': 'A short introduction post.',
        'content': BODY,
        'category': 'personal',
        'tags': ['Intro', 'intro', 'Life'],
    }


class TestReadTime:
    """Test the reading time estimate."""

    @pytest.mark.parametrize('words, minutes', [
        (0, 1),
        (1, 1),
        (200, 1),
        (201, 2),
        (1000, 5),
    ])
    def test_read_time(self, words, minutes):
        assert calculate_read_time(' '.join(['word'] * words)) == minutes


@pytest.mark.django_db
class TestBlogPostModel:
    """Test slugs and publish stamping."""

    def test_slug_from_title_is_unique(self):
        first = make_post(title='Hello World!')
        second = make_post(title='Hello World?')
        third = make_post(title='Hello, World')

        assert (first.slug, second.slug, third.slug) == ('hello-world', 'hello-world-2', 'hello-world-3')

    def test_published_at_stamped_once(self):
        post = make_post(status='draft')
        assert post.published_at is None

        post.status = 'published'
        post.save()
        stamped = post.published_at
        assert stamped is not None

        post.title = 'Building a portfolio, revised'
        post.save()
        assert post.published_at == stamped
        assert post.slug == 'building-a-portfolio'

    def test_read_time_recomputed_on_save(self):
        post = make_post()
        assert post.read_time == 1

        post.content = 'word ' * 450
        post.save()
        assert post.read_time == 3


@pytest.mark.django_db
class TestBlogList:
    """Test the public blog list."""

    def test_lists_published_posts_without_content(self, api_client):
        make_post(title='Old post', published_at=days_ago(3))
        make_post(title='New post', published_at=days_ago(1))
        make_post(title='Draft post', status='draft')

        response = api_client.get('/api/blog')

        assert response.status_code == status.HTTP_200_OK
        assert [p['title'] for p in response.data['blogs']] == ['New post', 'Old post']
        assert 'content' not in response.data['blogs'][0]
        assert response.data['pagination']['limit'] == 10

    def test_sort_oldest_and_popular(self, api_client):
        make_post(title='Old post', published_at=days_ago(3), views=10)
        make_post(title='New post', published_at=days_ago(1), views=2)

        oldest = api_client.get('/api/blog', {'sort': 'oldest'}).data['blogs']
        popular = api_client.get('/api/blog', {'sort': 'popular'}).data['blogs']

        assert [p['title'] for p in oldest] == ['Old post', 'New post']
        assert [p['title'] for p in popular] == ['Old post', 'New post']

    def test_category_and_tag_filters(self, api_client):
        make_post(title='Django tips', category='tutorial', tags=['django', 'python'])
        make_post(title='Career notes', category='career', tags=['jobs'])

        def titles(params):
            return [p['title'] for p in api_client.get('/api/blog', params).data['blogs']]

        assert titles({'category': 'career'}) == ['Career notes']
        assert len(titles({'category': 'all'})) == 2
        assert titles({'tags': 'rust,python'}) == ['Django tips']

    def test_featured_posts(self, api_client):
        for index in range(4):
            make_post(title=f'Featured post {index}', featured=True, published_at=days_ago(index))
        make_post(title='Featured draft', featured=True, status='draft')

        response = api_client.get('/api/blog/featured')

        assert [p['title'] for p in response.data['blogs']] == [
            'Featured post 0', 'Featured post 1', 'Featured post 2'
        ]


@pytest.mark.django_db
class TestBlogRead:
    """Test reading a post by slug."""

    def test_read_counts_view_and_returns_related(self, api_client):
        post = make_post(title='Django tips', category='tutorial', tags=['django'])
        make_post(title='More Django', category='technology', tags=['django'])
        make_post(title='Another tutorial', category='tutorial')
        make_post(title='Unrelated career', category='career')

        response = api_client.get(f'/api/blog/{post.slug}')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['blog']['content'] == post.content
        assert response.data['blog']['views'] == 1
        assert {p['title'] for p in response.data['relatedPosts']} == {'More Django', 'Another tutorial'}

    def test_draft_is_hidden(self, api_client):
        post = make_post(status='draft')

        response = api_client.get(f'/api/blog/{post.slug}')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == 'Blog post not found'

    def test_like(self, api_client, user_client, regular_user):
        post = make_post()

        api_client.post(f'/api/blog/{post.id}/like')
        response = user_client.post(f'/api/blog/{post.id}/like')

        assert response.data == {'success': True, 'likes': 2}
        assert BlogLike.objects.filter(post=post, user=regular_user).count() == 1

    def test_like_unknown_post(self, api_client):
        response = api_client.post(f'/api/blog/{uuid.uuid4()}/like')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestBlogManagement:
    """Test admin create, update, delete and the admin list."""

    def test_create_post(self, admin_client, site_admin, post_data):
        response = admin_client.post('/api/blog', post_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        blog = response.data['blog']
        assert blog['slug'] == 'hello-world-again'
        assert blog['status'] == 'draft'
        assert blog['publishedAt'] is None
        assert blog['tags'] == ['intro', 'life']
        assert blog['readTime'] == 1
        assert blog['author']['id'] == str(site_admin.id)

    def test_create_validation(self, admin_client, post_data):
        post_data.update({'title': 'Hi', 'content': 'Too short', 'category': 'gossip'})

        response = admin_client.post('/api/blog', post_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = {error['field'] for error in response.data['errors']}
        assert {'title', 'content', 'category'} <= fields

    def test_duplicate_slug_rejected(self, admin_client, post_data):
        make_post(slug='taken')
        post_data['slug'] = 'taken'

        response = admin_client.post('/api/blog', post_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert {'field': 'slug', 'message': 'A post with this slug already exists'} in response.data['errors']

    def test_publish_through_update(self, admin_client):
        post = make_post(status='draft')

        response = admin_client.put(f'/api/blog/{post.id}', {'status': 'published'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['blog']['publishedAt'] is not None

    def test_delete(self, admin_client):
        post = make_post()

        response = admin_client.delete(f'/api/blog/{post.id}')

        assert response.status_code == status.HTTP_200_OK
        assert not BlogPost.objects.exists()

    def test_admin_list_includes_drafts(self, admin_client):
        make_post(title='Published post')
        make_post(title='Draft post', status='draft')

        response = admin_client.get('/api/blog/admin/all')
        assert len(response.data['blogs']) == 2

        response = admin_client.get('/api/blog/admin/all', {'status': 'draft'})
        assert [p['title'] for p in response.data['blogs']] == ['Draft post']

    def test_visitors_cannot_write(self, api_client, user_client, post_data):
        post = make_post()

        assert api_client.post('/api/blog', post_data, format='json').status_code == status.HTTP_401_UNAUTHORIZED
        assert user_client.post('/api/blog', post_data, format='json').status_code == status.HTTP_403_FORBIDDEN
        assert user_client.put(f'/api/blog/{post.id}', {'featured': True}, format='json').status_code == status.HTTP_403_FORBIDDEN
        assert user_client.delete(f'/api/blog/{post.id}').status_code == status.HTTP_403_FORBIDDEN
        assert user_client.get('/api/blog/admin/all').status_code == status.HTTP_403_FORBIDDEN
