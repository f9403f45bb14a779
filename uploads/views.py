"""
Upload Views

Admin-only endpoints wrapping the hosted media API.
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminRole
from core.media_service import MediaService, MediaServiceError
from .serializers import (
    UploadRejected,
    validate_image_file,
    UploadOptionsSerializer,
    ImageListQuerySerializer,
    TransformSerializer,
)

logger = logging.getLogger(__name__)


class MediaHostView(APIView):
    """
    Base view for media-host endpoints.

    Media host failures are answered with 502.
    """
    permission_classes = [IsAdminRole]

    def get_media_service(self):
        return MediaService()

    def handle_exception(self, exc):
        if isinstance(exc, MediaServiceError):
            logger.error(f"Media host error ({exc.code}): {exc.message}")
            return Response(
                {'success': False, 'message': exc.message},
                status=status.HTTP_502_BAD_GATEWAY
            )
        return super().handle_exception(exc)


class ImageUploadView(MediaHostView):
    """
    Upload a single image.

    POST /api/upload/image  (multipart: image, folder?, quality?, format?)
    """
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        image = request.FILES.get('image')
        if image is None:
            raise UploadRejected('No image file provided')
        validate_image_file(image)

        options = UploadOptionsSerializer(data=request.data)
        options.is_valid(raise_exception=True)

        result = self.get_media_service().upload(
            MediaService.to_data_uri(image.read(), image.content_type),
            **options.validated_data
        )

        return Response({
            'success': True,
            'message': 'Image uploaded successfully',
            'image': result
        })


class MultipleImageUploadView(MediaHostView):
    """
    Upload several images at once. All-or-nothing.

    POST /api/upload/multiple  (multipart: images[], folder?, quality?, format?)
    """
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        images = request.FILES.getlist('images')
        if not images:
            raise UploadRejected('No image files provided')
        if len(images) > settings.MAX_UPLOAD_FILES:
            raise UploadRejected(f'Too many files. Maximum is {settings.MAX_UPLOAD_FILES} files.')

        # Every file is checked before anything is sent
        for image in images:
            validate_image_file(image)

        options = UploadOptionsSerializer(data=request.data)
        options.is_valid(raise_exception=True)

        files = [
            {
                'data_uri': MediaService.to_data_uri(image.read(), image.content_type),
                'name': image.name,
            }
            for image in images
        ]
        results = self.get_media_service().upload_many(files, **options.validated_data)

        return Response({
            'success': True,
            'message': f'{len(results)} images uploaded successfully',
            'images': results
        })


class ImageDeleteView(MediaHostView):
    """
    Delete an image by public ID.

    DELETE /api/upload/:publicId  (URL-encoded)
    """

    def delete(self, request, public_id):
        deleted = self.get_media_service().destroy(public_id)
        if not deleted:
            return Response(
                {'success': False, 'message': 'Image not found or already deleted'},
                status=status.HTTP_404_NOT_FOUND
            )

        logger.info(f"Image {public_id} deleted by {request.user.email}")
        return Response({
            'success': True,
            'message': 'Image deleted successfully'
        })


class ImageListView(MediaHostView):
    """
    List images in a folder, newest first.

    GET /api/upload/images?folder=&max_results=
    """

    def get(self, request):
        query = ImageListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = self.get_media_service().search(**query.validated_data)

        return Response({
            'success': True,
            'images': result['images'],
            'total': result['total']
        })


class ImageTransformView(MediaHostView):
    """
    Build a transformed delivery URL for an existing image.

    POST /api/upload/transform  {publicId, transformations}
    """

    def post(self, request):
        serializer = TransformSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        public_id = serializer.validated_data['publicId']
        service = self.get_media_service()

        return Response({
            'success': True,
            'message': 'Image transformation URL generated',
            'transformedUrl': service.build_url(public_id, serializer.validated_data['transformations']),
            'originalUrl': service.build_url(public_id)
        })
