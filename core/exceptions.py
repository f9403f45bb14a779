"""
API Error Handling

Renders every DRF error as the envelope the frontend expects:

    {"success": false, "message": "...", "errors": [{"field": ..., "message": ...}]}
"""
import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


DEFAULT_MESSAGES = {
    status.HTTP_400_BAD_REQUEST: 'Validation failed',
    status.HTTP_401_UNAUTHORIZED: 'Not authorized to access this route',
    status.HTTP_403_FORBIDDEN: 'You do not have permission to perform this action',
    status.HTTP_404_NOT_FOUND: 'Resource not found',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'Method not allowed',
    status.HTTP_429_TOO_MANY_REQUESTS: 'Too many requests. Please try again later.',
}


def flatten_errors(detail, prefix=''):
    """
    Flatten a DRF error detail into a list of {field, message} dicts.

    Nested serializer errors are joined with dots (``replies.0.message``).
    """
    errors = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            field = f'{prefix}.{key}' if prefix else str(key)
            errors.extend(flatten_errors(value, field))
    elif isinstance(detail, list):
        for index, item in enumerate(detail):
            if isinstance(item, (dict, list)):
                errors.extend(flatten_errors(item, f'{prefix}.{index}' if prefix else str(index)))
            else:
                errors.append({'field': prefix or None, 'message': str(item)})
    else:
        errors.append({'field': prefix or None, 'message': str(detail)})
    return errors


def api_exception_handler(exc, context):
    """Project-wide DRF exception handler."""
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            f"Unhandled API error in {view.__class__.__name__ if view else 'unknown view'}: {exc}"
        )
        return Response(
            {'success': False, 'message': 'Server error. Please try again later.'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    payload = {'success': False}

    if isinstance(exc, exceptions.ValidationError):
        errors = flatten_errors(exc.detail)
        payload['message'] = DEFAULT_MESSAGES[status.HTTP_400_BAD_REQUEST]
        payload['errors'] = [
            {'field': error['field'] if error['field'] != 'non_field_errors' else None,
             'message': error['message']}
            for error in errors
        ]
    else:
        detail = getattr(exc, 'detail', None)
        if isinstance(detail, (dict, list)):
            payload['message'] = DEFAULT_MESSAGES.get(response.status_code, 'Request failed')
            payload['errors'] = flatten_errors(detail)
        elif detail:
            payload['message'] = str(detail)
        else:
            payload['message'] = DEFAULT_MESSAGES.get(response.status_code, 'Request failed')

    if isinstance(exc, exceptions.Throttled) and exc.wait is not None:
        payload['retry_after'] = int(exc.wait)

    response.data = payload
    return response
