"""
Image uploads through the client, with the media host replaced by a fake.

Run with: pytest tests/integration/test_upload_client.py -v
"""
import pytest

from portfolio_client import AuthService, PermissionDeniedError, ServerError, UploadFile, UploadService
from uploads.tests import FakeMediaService
from uploads.views import MediaHostView


@pytest.fixture
def media(monkeypatch):
    service = FakeMediaService()
    monkeypatch.setattr(MediaHostView, 'get_media_service', lambda self: service)
    return service


def image(name='photo.png'):
    return UploadFile(name, b'\x89PNG\r\n\x1a\n' + b'\x00' * 32)


@pytest.mark.django_db
class TestUploadClient:

    def test_upload_image(self, admin_uploads, media):
        result = admin_uploads.upload_image(image(), folder='projects')

        assert result['publicId'] == 'portfolio/projects/img0'
        assert media.uploads[0]['folder'] == 'projects'
        assert media.uploads[0]['data_uri'].startswith('data:image/png;base64,')

    def test_upload_batch(self, admin_uploads, media):
        results = admin_uploads.upload_images([image('a.png'), image('b.png'), image('c.png')])

        assert [result['originalName'] for result in results] == ['a.png', 'b.png', 'c.png']

    def test_batch_host_failure(self, admin_uploads, media, notices):
        media.fail_on = 1

        with pytest.raises(ServerError) as excinfo:
            admin_uploads.upload_images([image('a.png'), image('b.png'), image('c.png')])

        assert excinfo.value.status_code == 502
        assert notices[-1][0] == 'Upload rejected by host'

    def test_delete_encodes_public_id(self, admin_uploads, media):
        response = admin_uploads.delete_image('portfolio/projects/img0')

        assert response['success'] is True
        assert media.destroyed == ['portfolio/projects/img0']

    def test_get_images_and_transform(self, admin_uploads, media):
        assert admin_uploads.get_images(folder='portfolio/blog', max_results=5)['total'] == 1
        assert media.searched == ('portfolio/blog', 5)

        response = admin_uploads.transform_image('portfolio/a', {'w': 300})
        assert response['transformedUrl'] == 'https://cdn.test/w_300/portfolio/a'

    def test_visitor_cannot_upload(self, make_api, regular_user, media):
        api = make_api()
        AuthService(api).login(regular_user.email, 'Password123')

        with pytest.raises(PermissionDeniedError):
            UploadService(api).upload_image(image())

        assert media.uploads == []
