"""
Tests for project-level views, the error envelope and the media host wrapper.
"""
import cloudinary.exceptions
import pytest
from rest_framework import exceptions, status

from core import media_service
from core.exceptions import api_exception_handler, flatten_errors
from core.media_service import MediaService, MediaServiceError


class FakeSearch:
    """Stands in for cloudinary.Search and records the query it builds."""

    def __init__(self, response):
        self.response = response
        self.query = {}

    def expression(self, value):
        self.query['expression'] = value
        return self

    def sort_by(self, field, direction='desc'):
        self.query['sort_by'] = (field, direction)
        return self

    def max_results(self, value):
        self.query['max_results'] = value
        return self

    def execute(self):
        return self.response


@pytest.fixture
def sdk_calls(monkeypatch):
    """Replace the uploader calls in the media service with a recorder."""
    calls = []
    results = []

    def recorder(name):
        def call(*args, **kwargs):
            calls.append((name, args, kwargs))
            result = results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return call

    monkeypatch.setattr(media_service.cloudinary.uploader, 'upload', recorder('upload'))
    monkeypatch.setattr(media_service.cloudinary.uploader, 'destroy', recorder('destroy'))
    return calls, results




class TestHealthCheck:

    def test_health(self, api_client):
        response = api_client.get('/api/health')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['status'] == 'OK'
        assert response.data['timestamp']

    def test_health_ignores_bad_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer expired')

        response = api_client.get('/api/health')

        assert response.status_code == status.HTTP_200_OK


class TestSpaFallback:

    def test_serves_index_for_client_routes(self, client, settings, tmp_path):
        (tmp_path / 'index.html').write_text('<html>portfolio</html>')
        settings.FRONTEND_BUILD_DIR = tmp_path

        response = client.get('/projects/42')

        assert response.status_code == 200
        assert b''.join(response.streaming_content) == b'<html>portfolio</html>'

    def test_missing_build(self, client, settings, tmp_path):
        settings.FRONTEND_BUILD_DIR = tmp_path / 'missing'

        response = client.get('/about')

        assert response.status_code == 404
        assert response.json() == {'success': False, 'message': 'Frontend build not found'}


class TestExceptionHandler:

    def test_flatten_nested_errors(self):
        errors = flatten_errors({'email': ['Enter a valid email address.'], 'meta': {'tags': ['Too many']}})

        assert errors == [
            {'field': 'email', 'message': 'Enter a valid email address.'},
            {'field': 'meta.tags', 'message': 'Too many'},
        ]

    def test_validation_error_envelope(self):
        response = api_exception_handler(
            exceptions.ValidationError({'non_field_errors': ['Passwords do not match']}),
            {}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            'success': False,
            'message': 'Validation failed',
            'errors': [{'field': None, 'message': 'Passwords do not match'}],
        }

    def test_detail_becomes_message(self):
        response = api_exception_handler(exceptions.NotFound('Contact not found'), {})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'success': False, 'message': 'Contact not found'}

    def test_unhandled_error_is_500(self):
        response = api_exception_handler(RuntimeError('boom'), {})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['success'] is False



class TestMediaService:

    def test_to_data_uri(self):
        assert MediaService.to_data_uri(b'abc', 'image/png') == 'data:image/png;base64,YWJj'

    def test_configures_sdk_from_settings(self):
        MediaService()

        config = media_service.cloudinary.config()
        assert config.cloud_name == 'demo'
        assert config.api_key == 'test-key'
        assert config.api_secret == 'test-secret'

    def test_build_url(self):
        service = MediaService()

        original = service.build_url('portfolio/a')
        transformed = service.build_url('portfolio/a', {'w': 300, 'height': 200, 'crop': 'fill'})

        assert original.startswith('https://res.cloudinary.com/demo/image/upload/')
        assert original.endswith('/portfolio/a')
        assert 'c_fill,h_200,w_300' in transformed
        assert transformed.endswith('/portfolio/a')

    def test_upload(self, sdk_calls):
        calls, results = sdk_calls
        results.append({
            'secure_url': 'https://res.cloudinary.com/demo/image/upload/v1/portfolio/projects/x.png',
            'public_id': 'portfolio/projects/x',
            'width': 800,
            'height': 600,
            'format': 'png',
            'bytes': 1234,
        })

        image = MediaService().upload('data:image/png;base64,AAAA', folder='projects')

        assert image == {
            'url': 'https://res.cloudinary.com/demo/image/upload/v1/portfolio/projects/x.png',
            'publicId': 'portfolio/projects/x',
            'width': 800,
            'height': 600,
            'format': 'png',
            'size': 1234,
        }
        name, args, options = calls[0]
        assert name == 'upload'
        assert args == ('data:image/png;base64,AAAA',)
        assert options['folder'] == 'portfolio/projects'
        assert options['quality'] == 'auto'
        assert options['transformation'] == [{'quality': 'auto:best'}, {'fetch_format': 'auto'}]
        assert 'format' not in options

    def test_upload_passes_explicit_format(self, sdk_calls):
        calls, results = sdk_calls
        results.append({'public_id': 'portfolio/portfolio/x'})

        MediaService().upload('data:image/png;base64,AAAA', quality='80', format='webp')

        options = calls[0][2]
        assert options['quality'] == '80'
        assert options['format'] == 'webp'

    def test_api_error(self, sdk_calls):
        calls, results = sdk_calls
        results.append(cloudinary.exceptions.BadRequest('Invalid image file'))

        with pytest.raises(MediaServiceError) as excinfo:
            MediaService().upload('data:image/png;base64,AAAA')

        assert excinfo.value.code == 'API_ERROR'
        assert excinfo.value.message == 'Invalid image file'

    @pytest.mark.parametrize('result', [['unexpected'], 'error', None])
    def test_malformed_response(self, sdk_calls, result):
        calls, results = sdk_calls
        results.append(result)

        with pytest.raises(MediaServiceError) as excinfo:
            MediaService().destroy('portfolio/a')

        assert excinfo.value.code == 'INVALID_RESPONSE'

    @pytest.mark.parametrize('result, deleted', [('ok', True), ('not found', False)])
    def test_destroy(self, sdk_calls, result, deleted):
        calls, results = sdk_calls
        results.append({'result': result})

        assert MediaService().destroy('portfolio/a') is deleted
        assert calls[0] == ('destroy', ('portfolio/a',), {})

    def test_search(self, monkeypatch):
        search = FakeSearch({
            'resources': [{
                'secure_url': 'https://cdn/x.png',
                'public_id': 'portfolio/blog/x',
                'created_at': '2024-01-01T00:00:00Z',
            }],
            'total_count': 1,
        })
        monkeypatch.setattr(media_service.cloudinary, 'Search', lambda: search)

        result = MediaService().search('portfolio/blog', max_results=10)

        assert result['total'] == 1
        assert result['images'][0]['publicId'] == 'portfolio/blog/x'
        assert result['images'][0]['createdAt'] == '2024-01-01T00:00:00Z'
        assert search.query == {
            'expression': 'folder:portfolio/blog/*',
            'sort_by': ('created_at', 'desc'),
            'max_results': 10,
        }

    def test_upload_many_keeps_order(self, monkeypatch):
        service = MediaService()
        monkeypatch.setattr(service, 'upload', lambda data_uri, **kwargs: {'publicId': data_uri})

        images = service.upload_many([
            {'data_uri': 'one', 'name': 'a.png'},
            {'data_uri': 'two', 'name': 'b.png'},
        ])

        assert images == [
            {'publicId': 'one', 'originalName': 'a.png'},
            {'publicId': 'two', 'originalName': 'b.png'},
        ]

    def test_upload_many_fails_on_first_error(self, monkeypatch):
        service = MediaService()

        def upload(data_uri, **kwargs):
            if data_uri == 'bad':
                raise MediaServiceError('Upload failed', code='API_ERROR')
            return {'publicId': data_uri}

        monkeypatch.setattr(service, 'upload', upload)

        with pytest.raises(MediaServiceError):
            service.upload_many([
                {'data_uri': 'one', 'name': 'a.png'},
                {'data_uri': 'bad', 'name': 'b.png'},
                {'data_uri': 'three', 'name': 'c.png'},
            ])
