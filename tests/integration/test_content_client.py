"""
Projects, skills and blog posts through the client: admin authoring and
public reading.

Run with: pytest tests/integration/test_content_client.py -v
"""
import pytest

from portfolio_client import (
    AuthError,
    BlogService,
    NotFoundError,
    PermissionDeniedError,
    ProjectService,
    SkillService,
    ValidationError,
    format_blog_for_display,
)

PROJECT = {
    'title': 'Farm tracker',
    'description': 'Tracks flocks, feed and sales for small farms.',
    'shortDescription': 'Flock and feed tracking',
    'technologies': ['Django', 'React'],
    'category': 'web',
    'featured': True,
}

POST = {
    'title': 'Shipping a Django API',
    'excerpt': 'What went into this backend.',
    'content': 'Serializers, filters and permissions all play a part here. ' * 4,
    'category': 'tutorial',
    'tags': ['django'],
}


@pytest.fixture
def admin_projects(admin_api):
    return ProjectService(admin_api)


@pytest.fixture
def public_projects(api):
    return ProjectService(api)


@pytest.fixture
def admin_skills(admin_api):
    return SkillService(admin_api)


@pytest.fixture
def admin_blog(admin_api):
    return BlogService(admin_api)


@pytest.fixture
def public_blog(api):
    return BlogService(api)


@pytest.mark.django_db
class TestProjects:

    def test_create_then_browse(self, admin_projects, public_projects):
        created = admin_projects.create_project(PROJECT)
        admin_projects.create_project(dict(PROJECT, title='Hidden tool', isPublic=False, technologies=['Go']))

        listing = public_projects.get_projects(tech=['django'])
        assert [p['id'] for p in listing['projects']] == [created['id']]
        assert listing['filters']['statuses'] == ['completed', 'in-progress', 'planned']

        assert [p['id'] for p in public_projects.get_featured_projects()] == [created['id']]
        assert public_projects.get_project(created['id'])['views'] == 1
        assert public_projects.like_project(created['id']) == 1

    def test_private_project(self, admin_projects, public_projects):
        created = admin_projects.create_project(dict(PROJECT, isPublic=False))

        with pytest.raises(PermissionDeniedError) as excinfo:
            public_projects.get_project(created['id'])
        assert excinfo.value.message == 'Access denied to this project'

        assert admin_projects.get_all_projects()['pagination']['total'] == 1

    def test_update_and_delete(self, admin_projects, public_projects):
        created = admin_projects.create_project(PROJECT)

        updated = admin_projects.update_project(created['id'], {'status': 'planned'})
        assert updated['status'] == 'planned'

        admin_projects.delete_project(created['id'])
        with pytest.raises(NotFoundError):
            public_projects.get_project(created['id'])

    def test_invalid_project(self, admin_projects):
        with pytest.raises(ValidationError) as excinfo:
            admin_projects.create_project(dict(PROJECT, technologies=[]))

        assert excinfo.value.field_errors['technologies'] == ['At least one technology must be specified']

    def test_anonymous_cannot_create(self, public_projects):
        with pytest.raises(AuthError):
            public_projects.create_project(PROJECT)


@pytest.mark.django_db
class TestSkills:

    def test_create_link_and_reorder(self, admin_projects, admin_skills, api):
        project = admin_projects.create_project(PROJECT)
        django = admin_skills.create_skill({
            'name': 'Django',
            'category': 'backend',
            'proficiency': 90,
            'experience': 'expert',
            'projectIds': [project['id']],
        })
        react = admin_skills.create_skill({
            'name': 'React',
            'category': 'frontend',
            'proficiency': 70,
            'experience': 'advanced',
        })

        admin_skills.reorder_skills([react['id'], django['id']])

        skills = SkillService(api).get_skills()
        assert [s['name'] for s in skills['skills']] == ['React', 'Django']
        assert skills['skillsByCategory']['backend'][0]['projects'][0]['title'] == 'Farm tracker'

    def test_hidden_skill(self, admin_skills, api):
        skill = admin_skills.create_skill({
            'name': 'COBOL',
            'category': 'other',
            'proficiency': 10,
            'experience': 'beginner',
            'isVisible': False,
        })

        with pytest.raises(NotFoundError):
            SkillService(api).get_skill(skill['id'])
        assert [s['name'] for s in admin_skills.get_all_skills()] == ['COBOL']


@pytest.mark.django_db
class TestBlog:

    def test_draft_then_publish(self, admin_blog, public_blog):
        draft = admin_blog.create_blog(POST)
        assert draft['slug'] == 'shipping-a-django-api'

        with pytest.raises(NotFoundError):
            public_blog.get_blog(draft['slug'])
        assert public_blog.get_blogs()['blogs'] == []

        admin_blog.update_blog(draft['id'], {'status': 'published', 'featured': True})

        read = public_blog.get_blog(draft['slug'])
        assert read['blog']['views'] == 1
        assert read['relatedPosts'] == []
        assert [b['id'] for b in public_blog.get_featured_blogs()] == [draft['id']]
        assert public_blog.like_blog(draft['id']) == 1

        display = format_blog_for_display(read['blog'])
        assert display['statusColor'] == '#27ae60'
        assert display['categoryColor'] == '#9b59b6'
        assert display['readTimeText'] == '1 min read'

    def test_related_posts_and_tag_filter(self, admin_blog, public_blog):
        first = admin_blog.create_blog(dict(POST, status='published'))
        admin_blog.create_blog(dict(POST, title='Another Django post', status='published', category='review'))
        admin_blog.create_blog(dict(POST, title='Career thoughts', status='published', category='career', tags=['jobs']))

        read = public_blog.get_blog(first['slug'])

        assert [p['title'] for p in read['relatedPosts']] == ['Another Django post']
        assert [b['title'] for b in public_blog.get_blogs(tags=['jobs'])['blogs']] == ['Career thoughts']

    def test_admin_list_and_delete(self, admin_blog):
        draft = admin_blog.create_blog(POST)

        assert admin_blog.get_all_blogs(status='draft')['pagination']['total'] == 1

        admin_blog.delete_blog(draft['id'])
        assert admin_blog.get_all_blogs()['blogs'] == []
