"""
Project-level views: health check and the single-page app fallback.
"""

import logging

from django.conf import settings
from django.http import FileResponse, JsonResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class HealthCheckView(APIView):
    """
    GET /api/health

    Liveness check used by load balancers and the frontend.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({
            'success': True,
            'status': 'OK',
            'timestamp': timezone.now().isoformat(),
        }, status=status.HTTP_200_OK)


def spa_index(request, path=''):
    """Serve the built frontend's index.html for client-side routes."""
    index_file = settings.FRONTEND_BUILD_DIR / 'index.html'
    if not index_file.exists():
        logger.warning(f"Frontend build not found at {index_file}")
        return JsonResponse(
            {'success': False, 'message': 'Frontend build not found'},
            status=404
        )
    return FileResponse(open(index_file, 'rb'), content_type='text/html')
