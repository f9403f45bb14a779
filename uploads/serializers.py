"""
Upload Serializers

Validation for upload options and media-host requests.
"""
from django.conf import settings
from rest_framework import serializers
from rest_framework.exceptions import APIException
from rest_framework import status


class UploadRejected(APIException):
    """A file was refused before reaching the media host."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid upload'
    default_code = 'upload_rejected'


def validate_image_file(file):
    """
    Reject non-image MIME types and files over MAX_UPLOAD_SIZE.

    Raises:
        UploadRejected
    """
    content_type = getattr(file, 'content_type', '') or ''
    if not content_type.startswith('image/'):
        raise UploadRejected('Only image files are allowed')

    max_size = settings.MAX_UPLOAD_SIZE
    if file.size > max_size:
        raise UploadRejected(
            f'File size too large. Maximum size is {max_size // (1024 * 1024)}MB.'
        )
    return file


class UploadOptionsSerializer(serializers.Serializer):
    """Optional form fields sent along with uploaded images."""
    folder = serializers.CharField(max_length=100, required=False, default='portfolio')
    quality = serializers.CharField(max_length=20, required=False, default='auto')
    format = serializers.CharField(max_length=10, required=False, default='auto')

    def validate_folder(self, value):
        folder = value.strip().strip('/')
        if '..' in folder:
            raise serializers.ValidationError("Invalid folder name")
        return folder or 'portfolio'


class ImageListQuerySerializer(serializers.Serializer):
    """Query parameters for the image listing."""
    folder = serializers.CharField(max_length=100, required=False, default='portfolio')
    max_results = serializers.IntegerField(min_value=1, max_value=500, required=False, default=50)


class TransformSerializer(serializers.Serializer):
    """Request body for generating a transformed delivery URL."""
    publicId = serializers.CharField(max_length=255)
    transformations = serializers.DictField()
