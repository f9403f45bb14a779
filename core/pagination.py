"""
Pagination matching the frontend's page/limit query parameters.
"""
import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class PagePagination(PageNumberPagination):
    """
    ``?page=2&limit=20`` pagination.

    Responses carry ``pagination: {page, limit, total, pages}`` next to the
    results key, which subclasses rename via ``results_key``.
    """

    page_size = 20
    page_size_query_param = 'limit'
    max_page_size = 100
    results_key = 'data'

    def get_pagination_meta(self):
        total = self.page.paginator.count
        limit = self.get_page_size(self.request)
        return {
            'page': self.page.number,
            'limit': limit,
            'total': total,
            'pages': math.ceil(total / limit) if limit else 0,
        }

    def get_paginated_response(self, data):
        return Response({
            'success': True,
            self.results_key: data,
            'pagination': self.get_pagination_meta(),
        })
