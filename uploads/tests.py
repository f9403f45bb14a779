"""
Tests for the admin upload endpoints.
"""
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status

from core.media_service import MediaServiceError
from uploads.views import MediaHostView


PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


class FakeMediaService:
    """Records calls instead of talking to the media host."""

    def __init__(self, fail_on=None, destroy_result=True):
        self.uploads = []
        self.destroyed = []
        self.fail_on = fail_on
        self.destroy_result = destroy_result

    def upload(self, data_uri, folder='portfolio', quality='auto', format='auto'):
        index = len(self.uploads)
        self.uploads.append({'data_uri': data_uri, 'folder': folder, 'quality': quality, 'format': format})
        if self.fail_on is not None and index == self.fail_on:
            raise MediaServiceError('Upload rejected by host', code='API_ERROR')
        return {
            'url': f'https://res.cloudinary.com/demo/image/upload/v1/portfolio/{folder}/img{index}.png',
            'publicId': f'portfolio/{folder}/img{index}',
            'width': 10,
            'height': 10,
            'format': 'png',
            'size': 72,
        }

    def upload_many(self, files, folder='portfolio', quality='auto', format='auto'):
        results = []
        for item in files:
            image = self.upload(item['data_uri'], folder=folder, quality=quality, format=format)
            image['originalName'] = item['name']
            results.append(image)
        return results

    def destroy(self, public_id):
        self.destroyed.append(public_id)
        return self.destroy_result

    def search(self, folder='portfolio', max_results=50):
        self.searched = (folder, max_results)
        return {'images': [{'publicId': f'{folder}/a'}], 'total': 1}

    def build_url(self, public_id, transformations=None):
        suffix = ','.join(f'{k}_{v}' for k, v in (transformations or {}).items())
        return f'https://cdn.test/{suffix + "/" if suffix else ""}{public_id}'


@pytest.fixture
def media(monkeypatch):
    service = FakeMediaService()
    monkeypatch.setattr(MediaHostView, 'get_media_service', lambda self: service)
    return service


def png(name='photo.png', size=None, content_type='image/png'):
    content = PNG_BYTES if size is None else b'\x00' * size
    return SimpleUploadedFile(name, content, content_type=content_type)


@pytest.mark.django_db
class TestImageUpload:
    """Test POST /api/upload/image."""

    def test_upload_image(self, admin_client, media):
        response = admin_client.post('/api/upload/image', {
            'image': png(),
            'folder': 'projects',
        }, format='multipart')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['image']['publicId'] == 'portfolio/projects/img0'
        assert media.uploads[0]['folder'] == 'projects'
        assert media.uploads[0]['data_uri'].startswith('data:image/png;base64,')

    def test_upload_requires_admin(self, user_client, media):
        response = user_client.post('/api/upload/image', {'image': png()}, format='multipart')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert media.uploads == []

    def test_upload_requires_file(self, admin_client, media):
        response = admin_client.post('/api/upload/image', {'folder': 'x'}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'No image file provided'

    def test_upload_rejects_non_image(self, admin_client, media):
        response = admin_client.post('/api/upload/image', {
            'image': png('cv.pdf', content_type='application/pdf'),
        }, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Only image files are allowed'
        assert media.uploads == []

    def test_upload_rejects_large_file(self, admin_client, media, settings):
        settings.MAX_UPLOAD_SIZE = 1024

        response = admin_client.post('/api/upload/image', {'image': png(size=1025)}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert media.uploads == []

    def test_host_failure_returns_502(self, admin_client, media):
        media.fail_on = 0

        response = admin_client.post('/api/upload/image', {'image': png()}, format='multipart')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data == {'success': False, 'message': 'Upload rejected by host'}


@pytest.mark.django_db
class TestMultipleUpload:
    """Test POST /api/upload/multiple."""

    def test_upload_multiple(self, admin_client, media):
        response = admin_client.post('/api/upload/multiple', {
            'images': [png('a.png'), png('b.png')],
        }, format='multipart')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == '2 images uploaded successfully'
        assert [image['originalName'] for image in response.data['images']] == ['a.png', 'b.png']

    def test_invalid_file_rejects_whole_batch(self, admin_client, media):
        response = admin_client.post('/api/upload/multiple', {
            'images': [png('a.png'), png('b.txt', content_type='text/plain'), png('c.png')],
        }, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert media.uploads == []

    def test_too_many_files(self, admin_client, media, settings):
        settings.MAX_UPLOAD_FILES = 2

        response = admin_client.post('/api/upload/multiple', {
            'images': [png('a.png'), png('b.png'), png('c.png')],
        }, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert media.uploads == []

    def test_host_failure_fails_batch(self, admin_client, media):
        media.fail_on = 1

        response = admin_client.post('/api/upload/multiple', {
            'images': [png('a.png'), png('b.png'), png('c.png')],
        }, format='multipart')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert 'images' not in response.data


@pytest.mark.django_db
class TestImageManagement:
    """Test delete, listing and transform endpoints."""

    def test_delete_image_with_encoded_public_id(self, admin_client, media):
        response = admin_client.delete('/api/upload/portfolio%2Fprojects%2Fimg0')

        assert response.status_code == status.HTTP_200_OK
        assert media.destroyed == ['portfolio/projects/img0']

    def test_delete_missing_image(self, admin_client, media):
        media.destroy_result = False

        response = admin_client.delete('/api/upload/portfolio%2Fgone')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['success'] is False

    def test_list_images(self, admin_client, media):
        response = admin_client.get('/api/upload/images', {'folder': 'portfolio/blog', 'max_results': 10})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 1
        assert media.searched == ('portfolio/blog', 10)

    def test_list_images_rejects_bad_max_results(self, admin_client, media):
        response = admin_client.get('/api/upload/images', {'max_results': 'lots'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_transform(self, admin_client, media):
        response = admin_client.post('/api/upload/transform', {
            'publicId': 'portfolio/a',
            'transformations': {'w': 300},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['transformedUrl'] == 'https://cdn.test/w_300/portfolio/a'
        assert response.data['originalUrl'] == 'https://cdn.test/portfolio/a'

    def test_transform_requires_fields(self, admin_client, media):
        response = admin_client.post('/api/upload/transform', {'publicId': 'x'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
