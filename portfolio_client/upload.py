"""
Image upload service.

Files are checked locally before anything is sent: a batch with one bad file
is rejected without issuing a request.
"""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

from .api import ApiClient
from .exceptions import ValidationError

DEFAULT_MAX_SIZE_MB = 10
DEFAULT_IMAGE_TYPES = ('image/jpeg', 'image/jpg', 'image/png', 'image/gif', 'image/webp')

HOST_MARKER = 'cloudinary.com'
UPLOAD_SEGMENT = '/upload/'


@dataclass
class UploadFile:
    name: str
    content: bytes
    content_type: Optional[str] = None

    def __post_init__(self):
        if self.content_type is None:
            self.content_type = mimetypes.guess_type(self.name)[0] or 'application/octet-stream'

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path, content_type: Optional[str] = None) -> 'UploadFile':
        path = Path(path)
        return cls(path.name, path.read_bytes(), content_type)

    def as_multipart(self):
        return (self.name, self.content, self.content_type)


def validate_file(
    file: UploadFile,
    max_size: float = DEFAULT_MAX_SIZE_MB,
    allowed_types: Iterable[str] = DEFAULT_IMAGE_TYPES,
) -> UploadFile:
    """
    Check size (``max_size`` in MB) and MIME type.

    Raises:
        ValidationError
    """
    allowed_types = list(allowed_types)

    if file.size > max_size * 1024 * 1024:
        message = f'File size must be less than {max_size}MB'
        raise ValidationError(message, field_errors={file.name: [message]})

    if file.content_type not in allowed_types:
        message = f"File type {file.content_type} is not allowed. Allowed types: {', '.join(allowed_types)}"
        raise ValidationError(message, field_errors={file.name: [message]})

    return file


def generate_thumbnail_url(url: str, width: int = 300, height: int = 200) -> str:
    """Cropped thumbnail URL for a hosted image. Other URLs are returned unchanged."""
    if not url or HOST_MARKER not in url or UPLOAD_SEGMENT not in url:
        return url
    base, path = url.split(UPLOAD_SEGMENT, 1)
    return f'{base}{UPLOAD_SEGMENT}w_{width},h_{height},c_fill,q_auto,f_auto/{path}'


def optimize_image_url(
    url: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    quality: Optional[str] = None,
    format: Optional[str] = None,
) -> str:
    """Resized and recompressed URL for a hosted image. Other URLs are returned unchanged."""
    if not url or HOST_MARKER not in url or UPLOAD_SEGMENT not in url:
        return url

    transformations = []
    if width:
        transformations.append(f'w_{width}')
    if height:
        transformations.append(f'h_{height}')
    transformations.append(f'q_{quality}' if quality else 'q_auto')
    transformations.append(f'f_{format}' if format else 'f_auto')

    base, path = url.split(UPLOAD_SEGMENT, 1)
    return f"{base}{UPLOAD_SEGMENT}{','.join(transformations)}/{path}"


class UploadService:
    """Admin image management against ``/upload``."""

    def __init__(
        self,
        api: ApiClient,
        max_size: float = DEFAULT_MAX_SIZE_MB,
        allowed_types: Iterable[str] = DEFAULT_IMAGE_TYPES,
    ):
        self.api = api
        self.max_size = max_size
        self.allowed_types = tuple(allowed_types)

    def validate_file(self, file: UploadFile) -> UploadFile:
        return validate_file(file, self.max_size, self.allowed_types)

    @staticmethod
    def _options(folder, quality, format) -> Dict[str, str]:
        options = {'folder': folder, 'quality': quality, 'format': format}
        return {key: value for key, value in options.items() if value}

    def upload_image(
        self,
        file: UploadFile,
        folder: Optional[str] = None,
        quality: Optional[str] = None,
        format: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Returns ``{url, publicId, width, height, format, size}``."""
        self.validate_file(file)
        response = self.api.upload(
            '/upload/image',
            files={'image': file.as_multipart()},
            data=self._options(folder, quality, format),
        )
        return response['image']

    def upload_images(
        self,
        files: List[UploadFile],
        folder: Optional[str] = None,
        quality: Optional[str] = None,
        format: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Upload a batch in one request.

        Every file is validated first; the server either stores all of them
        or fails the call.
        """
        for file in files:
            self.validate_file(file)

        response = self.api.upload(
            '/upload/multiple',
            files=[('images', file.as_multipart()) for file in files],
            data=self._options(folder, quality, format),
        )
        return response['images']

    def delete_image(self, public_id: str) -> Dict[str, Any]:
        return self.api.delete(f"/upload/{quote(public_id, safe='')}")

    def get_images(self, folder: Optional[str] = None, max_results: Optional[int] = None) -> Dict[str, Any]:
        params = {}
        if folder:
            params['folder'] = folder
        if max_results:
            params['max_results'] = max_results
        return self.api.get('/upload/images', params=params)

    def transform_image(self, public_id: str, transformations: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post('/upload/transform', {
            'publicId': public_id,
            'transformations': transformations,
        })
