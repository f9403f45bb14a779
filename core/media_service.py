"""
Media Host Service (Cloudinary)

Handles all hosted-media API interactions for:
- Image upload (data URI re-encoding, folder and quality passthrough)
- Batch upload
- Deletion by public ID
- Folder search
- Delivery URL generation for on-the-fly transformations

Documentation: https://cloudinary.com/documentation/django_integration
"""

import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
import cloudinary.utils
from django.conf import settings

logger = logging.getLogger(__name__)


class MediaServiceError(Exception):
    """Base exception for media host errors"""
    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or 'MEDIA_ERROR'
        self.details = details or {}


class MediaService:
    """
    Hosted media API wrapper.

    Usage:
        from core.media_service import MediaService

        service = MediaService()
        data_uri = MediaService.to_data_uri(content, 'image/png')
        image = service.upload(data_uri, folder='projects')
        # {'url': ..., 'publicId': ..., 'width': ..., 'height': ..., 'format': ..., 'size': ...}
    """

    ROOT_FOLDER = 'portfolio'
    MAX_PARALLEL_UPLOADS = 5

    # URL shorthand -> SDK option names
    TRANSFORMATION_ALIASES = {
        'w': 'width',
        'h': 'height',
        'c': 'crop',
        'g': 'gravity',
        'q': 'quality',
        'f': 'fetch_format',
        'r': 'radius',
        'e': 'effect',
        'a': 'angle',
    }

    def __init__(self):
        self.cloud_name = settings.CLOUDINARY_CLOUD_NAME

        if not (settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_API_KEY
                and settings.CLOUDINARY_API_SECRET):
            logger.warning(
                "Media host credentials are not fully configured. "
                "Uploads will fail until CLOUDINARY_* settings are set."
            )

        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True
        )

    @staticmethod
    def to_data_uri(content: bytes, content_type: str) -> str:
        """Re-encode raw bytes as a base64 data URI."""
        encoded = base64.b64encode(content).decode('ascii')
        return f'data:{content_type};base64,{encoded}'

    def _call(self, operation: str, func, *args, **kwargs) -> Dict[str, Any]:
        """
        Run an SDK call and translate its failures.

        Raises:
            MediaServiceError: On API errors or malformed responses
        """
        try:
            result = func(*args, **kwargs)
        except cloudinary.exceptions.Error as e:
            logger.error(f"Media host API error during {operation}: {e}")
            raise MediaServiceError(
                message=str(e) or 'Unknown media host error',
                code='API_ERROR',
                details={'operation': operation}
            )

        if not isinstance(result, dict):
            logger.error(f"Media host returned an unexpected response during {operation}")
            raise MediaServiceError(
                message="Unexpected response from media host.",
                code='INVALID_RESPONSE'
            )
        return result

    @staticmethod
    def _image_payload(result: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'url': result.get('secure_url'),
            'publicId': result.get('public_id'),
            'width': result.get('width'),
            'height': result.get('height'),
            'format': result.get('format'),
            'size': result.get('bytes'),
        }

    def upload(
        self,
        data_uri: str,
        folder: str = 'portfolio',
        quality: str = 'auto',
        format: str = 'auto'
    ) -> Dict[str, Any]:
        """
        Upload a data URI into ``portfolio/<folder>``.

        Returns:
            Dict with url, publicId, width, height, format, size
        """
        options = {
            'folder': f'{self.ROOT_FOLDER}/{folder or "portfolio"}',
            'quality': quality or 'auto',
            'transformation': [
                {'quality': 'auto:best'},
                {'fetch_format': 'auto'},
            ],
        }
        if format not in (None, '', 'auto'):
            options['format'] = format

        logger.info(f"Uploading image to media folder {options['folder']}")

        result = self._call('upload', cloudinary.uploader.upload, data_uri, **options)
        return self._image_payload(result)

    def upload_many(
        self,
        files: List[Dict[str, Any]],
        folder: str = 'portfolio',
        quality: str = 'auto',
        format: str = 'auto'
    ) -> List[Dict[str, Any]]:
        """
        Upload several files concurrently and wait for all of them.

        Args:
            files: dicts with ``data_uri`` and ``name``

        The first failing upload fails the whole batch; uploads that already
        finished are not rolled back.
        """
        def _upload_one(item):
            image = self.upload(item['data_uri'], folder=folder, quality=quality, format=format)
            image['originalName'] = item.get('name')
            return image

        if not files:
            return []

        workers = min(len(files), self.MAX_PARALLEL_UPLOADS)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(_upload_one, files))

    def destroy(self, public_id: str) -> bool:
        """Delete an image; True when the host reports it as deleted."""
        result = self._call('destroy', cloudinary.uploader.destroy, public_id)
        logger.info(f"Media destroy {public_id}: {result.get('result')}")
        return result.get('result') == 'ok'

    def search(self, folder: str = 'portfolio', max_results: int = 50) -> Dict[str, Any]:
        """List images in a folder, newest first."""
        query = (
            cloudinary.Search()
            .expression(f'folder:{folder}/*')
            .sort_by('created_at', 'desc')
            .max_results(max_results)
        )
        result = self._call('search', query.execute)

        images = []
        for resource in result.get('resources') or []:
            image = self._image_payload(resource)
            image['createdAt'] = resource.get('created_at')
            images.append(image)
        return {'images': images, 'total': result.get('total_count', len(images))}

    def build_url(self, public_id: str, transformations: Optional[Dict[str, Any]] = None) -> str:
        """Delivery URL for ``public_id`` with optional transformations."""
        options = {
            self.TRANSFORMATION_ALIASES.get(key, key): value
            for key, value in (transformations or {}).items()
            if value not in (None, '')
        }
        url, _ = cloudinary.utils.cloudinary_url(public_id, secure=True, **options)
        return url
