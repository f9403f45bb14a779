"""
Tests for the project and skill endpoints.
"""
import uuid

import pytest
from rest_framework import status

from projects.models import Project, Skill


def make_project(**overrides):
    fields = {
        'title': 'Portfolio site',
        'description': 'A personal site with a blog and a contact form.',
        'short_description': 'Personal site and blog',
        'technologies': ['React', 'Django'],
        'category': 'web',
    }
    fields.update(overrides)
    return Project.objects.create(**fields)


def make_skill(**overrides):
    fields = {
        'name': 'Python',
        'category': 'backend',
        'proficiency': 90,
        'experience': 'expert',
    }
    fields.update(overrides)
    return Skill.objects.create(**fields)


@pytest.fixture
def project_data():
    return {
        'title': 'Farm tracker',
        'description': 'Tracks flocks, feed and sales for small farms.',
        'shortDescription': 'Flock and feed tracking',
        'technologies': ['Django', ' React ', 'Django'],
        'category': 'web',
        'links': {'github': 'https://github.com/example/farm'},
        'tags': ['agri'],
    }


def error_fields(response):
    return {error['field'] for error in response.data['errors']}


@pytest.mark.django_db
class TestProjectList:
    """Test the public project list."""

    def test_lists_public_projects_only(self, api_client):
        make_project(title='Visible project')
        make_project(title='Secret project', is_public=False)

        response = api_client.get('/api/projects')

        assert response.status_code == status.HTTP_200_OK
        assert [p['title'] for p in response.data['projects']] == ['Visible project']
        assert response.data['pagination']['limit'] == 12
        assert response.data['filters']['categories'] == ['web', 'mobile', 'desktop', 'api', 'other']
        assert response.data['filters']['statuses'] == ['completed', 'in-progress', 'planned']

    def test_default_order_is_priority(self, api_client):
        make_project(title='Low priority', priority=1)
        make_project(title='High priority', priority=5)

        response = api_client.get('/api/projects')

        assert [p['title'] for p in response.data['projects']] == ['High priority', 'Low priority']

    def test_category_featured_and_status_filters(self, api_client):
        make_project(title='Web app', category='web', featured=True)
        make_project(title='Mobile app', category='mobile', status='planned')

        def titles(params):
            return [p['title'] for p in api_client.get('/api/projects', params).data['projects']]

        assert titles({'category': 'mobile'}) == ['Mobile app']
        assert len(titles({'category': 'all'})) == 2
        assert titles({'featured': 'true'}) == ['Web app']
        assert titles({'status': 'planned'}) == ['Mobile app']

    def test_tech_filter_matches_any_listed_technology(self, api_client):
        make_project(title='Django site', technologies=['React', 'Django'])
        make_project(title='Vue site', technologies=['Vue'])

        response = api_client.get('/api/projects', {'tech': 'django,flask'})

        assert [p['title'] for p in response.data['projects']] == ['Django site']

    def test_search(self, api_client):
        make_project(title='Weather dashboard')
        make_project(title='Chess engine', description='Plays chess with alpha-beta search.')

        response = api_client.get('/api/projects', {'search': 'alpha-beta'})

        assert [p['title'] for p in response.data['projects']] == ['Chess engine']

    def test_sort_popular(self, api_client):
        make_project(title='Quiet project', views=1)
        make_project(title='Busy project', views=50)

        response = api_client.get('/api/projects', {'sort': 'popular'})

        assert [p['title'] for p in response.data['projects']] == ['Busy project', 'Quiet project']

    def test_stale_token_does_not_block_reads(self, api_client):
        make_project()
        api_client.credentials(HTTP_AUTHORIZATION='Bearer expired')

        response = api_client.get('/api/projects')

        assert response.status_code == status.HTTP_200_OK

    def test_featured_projects(self, api_client):
        for index in range(7):
            make_project(title=f'Featured {index}', featured=True, priority=index)
        make_project(title='Private featured', featured=True, is_public=False, priority=99)

        response = api_client.get('/api/projects/featured')

        titles = [p['title'] for p in response.data['projects']]
        assert len(titles) == 6
        assert titles[0] == 'Featured 6'
        assert 'Private featured' not in titles


@pytest.mark.django_db
class TestProjectManagement:
    """Test admin create, update, delete and the admin list."""

    def test_create_project(self, admin_client, site_admin, project_data):
        response = admin_client.post('/api/projects', project_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        project = response.data['project']
        assert project['technologies'] == ['Django', 'React']
        assert project['links'] == {
            'demo': '',
            'github': 'https://github.com/example/farm',
            'website': '',
        }
        assert project['author']['id'] == str(site_admin.id)
        assert project['views'] == 0
        assert Project.objects.get(pk=project['id']).github_url == 'https://github.com/example/farm'

    def test_create_validation(self, admin_client, project_data):
        project_data.update({
            'technologies': [],
            'category': 'spaceship',
            'links': {'demo': 'not a url'},
        })

        response = admin_client.post('/api/projects', project_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert {'technologies', 'category', 'links.demo'} <= error_fields(response)

    def test_create_requires_admin(self, api_client, user_client, project_data):
        assert api_client.post('/api/projects', project_data, format='json').status_code == status.HTTP_401_UNAUTHORIZED
        assert user_client.post('/api/projects', project_data, format='json').status_code == status.HTTP_403_FORBIDDEN
        assert not Project.objects.exists()

    def test_partial_update(self, admin_client):
        project = make_project()

        response = admin_client.put(
            f'/api/projects/{project.id}',
            {'featured': True, 'links': {'demo': 'https://demo.example.com'}},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        project.refresh_from_db()
        assert project.featured is True
        assert project.demo_url == 'https://demo.example.com'
        assert project.title == 'Portfolio site'

    def test_delete(self, admin_client):
        project = make_project()

        response = admin_client.delete(f'/api/projects/{project.id}')

        assert response.status_code == status.HTTP_200_OK
        assert not Project.objects.exists()

    def test_admin_list_includes_private(self, admin_client):
        make_project(title='Public one')
        make_project(title='Private one', is_public=False, status='planned')

        response = admin_client.get('/api/projects/admin/all')
        assert len(response.data['projects']) == 2
        assert response.data['pagination']['limit'] == 10

        response = admin_client.get('/api/projects/admin/all', {'status': 'planned'})
        assert [p['title'] for p in response.data['projects']] == ['Private one']

    def test_admin_list_forbidden_for_visitors(self, user_client):
        response = user_client.get('/api/projects/admin/all')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestProjectDetail:
    """Test reading and liking a single project."""

    def test_detail_counts_view(self, api_client):
        project = make_project()

        first = api_client.get(f'/api/projects/{project.id}')
        second = api_client.get(f'/api/projects/{project.id}')

        assert first.status_code == status.HTTP_200_OK
        assert first.data['project']['views'] == 1
        assert second.data['project']['views'] == 2

    def test_private_project_is_admin_only(self, api_client, admin_client):
        project = make_project(is_public=False)

        response = api_client.get(f'/api/projects/{project.id}')
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['message'] == 'Access denied to this project'

        assert admin_client.get(f'/api/projects/{project.id}').status_code == status.HTTP_200_OK

    def test_unknown_project(self, api_client):
        response = api_client.get(f'/api/projects/{uuid.uuid4()}')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == 'Project not found'

    def test_like(self, api_client):
        project = make_project()

        api_client.post(f'/api/projects/{project.id}/like')
        response = api_client.post(f'/api/projects/{project.id}/like')

        assert response.data == {'success': True, 'likes': 2}


@pytest.mark.django_db
class TestSkills:
    """Test the skill endpoints."""

    def test_list_visible_skills_grouped(self, api_client):
        make_skill(name='Python', order=1)
        make_skill(name='React', category='frontend', order=0)
        make_skill(name='COBOL', is_visible=False)

        response = api_client.get('/api/skills')

        assert response.status_code == status.HTTP_200_OK
        assert [s['name'] for s in response.data['skills']] == ['React', 'Python']
        assert [s['name'] for s in response.data['skillsByCategory']['backend']] == ['Python']
        assert 'devops' in response.data['categories']

    def test_same_order_sorts_by_proficiency(self, api_client):
        make_skill(name='Go', proficiency=40)
        make_skill(name='Python', proficiency=90)

        response = api_client.get('/api/skills')

        assert [s['name'] for s in response.data['skills']] == ['Python', 'Go']

    def test_category_filter(self, api_client):
        make_skill(name='Python')
        make_skill(name='Figma', category='design')

        response = api_client.get('/api/skills', {'category': 'design'})

        assert [s['name'] for s in response.data['skills']] == ['Figma']

    def test_hidden_skill_not_found(self, api_client):
        skill = make_skill(is_visible=False)

        response = api_client.get(f'/api/skills/{skill.id}')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_with_projects(self, admin_client):
        project = make_project()

        response = admin_client.post('/api/skills', {
            'name': 'Django',
            'category': 'backend',
            'proficiency': 85,
            'experience': 'advanced',
            'tags': ['Web', 'web', 'ORM'],
            'projectIds': [str(project.id)],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        skill = response.data['skill']
        assert skill['tags'] == ['web', 'orm']
        assert skill['color'] == '#3498db'
        assert [p['title'] for p in skill['projects']] == ['Portfolio site']

    def test_create_duplicate_name(self, admin_client):
        make_skill(name='Python')

        response = admin_client.post('/api/skills', {
            'name': 'Python',
            'category': 'backend',
            'proficiency': 50,
            'experience': 'advanced',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert {'field': 'name', 'message': 'Skill with this name already exists'} in response.data['errors']

    def test_create_validation(self, admin_client):
        response = admin_client.post('/api/skills', {
            'name': 'X',
            'category': 'cooking',
            'proficiency': 101,
            'experience': 'guru',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert {'name', 'category', 'proficiency', 'experience'} <= error_fields(response)

    def test_update_and_delete(self, admin_client):
        skill = make_skill()

        response = admin_client.put(f'/api/skills/{skill.id}', {'proficiency': 95}, format='json')
        assert response.data['skill']['proficiency'] == 95

        assert admin_client.delete(f'/api/skills/{skill.id}').status_code == status.HTTP_200_OK
        assert not Skill.objects.exists()

    def test_reorder(self, admin_client):
        python = make_skill(name='Python', order=0)
        react = make_skill(name='React', order=1)

        response = admin_client.put('/api/skills/reorder', {'skills': [
            {'id': str(python.id), 'order': 5},
            {'id': str(react.id), 'order': 2},
            {'id': str(uuid.uuid4()), 'order': 9},
        ]}, format='json')

        assert response.status_code == status.HTTP_200_OK
        python.refresh_from_db()
        react.refresh_from_db()
        assert (python.order, react.order) == (5, 2)

    def test_reorder_requires_list(self, admin_client):
        response = admin_client.put('/api/skills/reorder', {'skills': {'id': 'x'}}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert {'field': 'skills', 'message': 'Skills array is required'} in response.data['errors']

    def test_admin_list_includes_hidden(self, admin_client):
        make_skill(name='Python')
        make_skill(name='COBOL', is_visible=False)

        response = admin_client.get('/api/skills/admin/all')

        assert {s['name'] for s in response.data['skills']} == {'Python', 'COBOL'}

    def test_visitors_cannot_manage_skills(self, user_client):
        skill = make_skill()

        assert user_client.post('/api/skills', {}, format='json').status_code == status.HTTP_403_FORBIDDEN
        assert user_client.delete(f'/api/skills/{skill.id}').status_code == status.HTTP_403_FORBIDDEN
        assert user_client.put('/api/skills/reorder', {'skills': []}, format='json').status_code == status.HTTP_403_FORBIDDEN
