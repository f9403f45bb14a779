"""
Blog service plus the helpers used when writing and rendering posts.
"""

import math
import re
from typing import Any, Dict, Iterable, List, Optional

from dateutil import parser as date_parser

from .api import ApiClient

BLOG_CATEGORIES = ['technology', 'tutorial', 'career', 'personal', 'review', 'other']
BLOG_STATUSES = ['draft', 'published', 'archived']
BLOG_SORTS = ['newest', 'oldest', 'popular', 'featured']

WORDS_PER_MINUTE = 200
DEFAULT_COLOR = '#95a5a6'

STATUS_COLORS = {
    'draft': '#f39c12',
    'published': '#27ae60',
    'archived': '#95a5a6',
}

CATEGORY_COLORS = {
    'technology': '#3498db',
    'tutorial': '#9b59b6',
    'career': '#e67e22',
    'personal': '#e74c3c',
    'review': '#2ecc71',
    'other': '#95a5a6',
}

TAG_REGEX = re.compile(r'<[^>]+>')


def generate_slug(title: str) -> str:
    """``'Hello, World!'`` -> ``'hello-world'``"""
    slug = re.sub(r'[^\w\s-]', '', title.lower())
    slug = re.sub(r'[\s_]+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def calculate_read_time(content: str) -> int:
    """Minutes to read ``content`` at 200 words per minute, at least 1."""
    words = len(content.split()) if content else 0
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def extract_excerpt(content: str, max_length: int = 200) -> str:
    """Plain-text start of ``content``, cut at a word boundary."""
    text = ' '.join(TAG_REGEX.sub('', content or '').split())
    if len(text) <= max_length:
        return text
    cut = text[:max_length]
    if ' ' in cut:
        cut = cut[:cut.rindex(' ')]
    return cut.rstrip(' .,;:') + '...'


def format_blog_for_display(blog: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``blog`` with colors, a display date and a read time label."""
    formatted = dict(blog)
    formatted['statusColor'] = STATUS_COLORS.get(blog.get('status'), DEFAULT_COLOR)
    formatted['categoryColor'] = CATEGORY_COLORS.get(blog.get('category'), DEFAULT_COLOR)

    date = blog.get('publishedAt') or blog.get('createdAt')
    formatted['formattedDate'] = date_parser.isoparse(date).strftime('%Y-%m-%d') if date else None

    read_time = blog.get('readTime') or 1
    formatted['readTimeText'] = f'{read_time} min read'
    return formatted


class BlogService:
    """
    Calls against ``/blog``.

    Readers address posts by slug; likes and admin edits use the post id.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    def get_blogs(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Public. Returns ``{success, blogs, pagination}``; posts carry no content."""
        params = {}
        if page:
            params['page'] = page
        if limit:
            params['limit'] = limit
        if category:
            params['category'] = category
        if search:
            params['search'] = search
        if tags:
            params['tags'] = ','.join(tags)
        if sort:
            params['sort'] = sort
        return self.api.get('/blog', params=params)

    def get_featured_blogs(self) -> List[Dict[str, Any]]:
        return self.api.get('/blog/featured')['blogs']

    def get_blog(self, slug: str) -> Dict[str, Any]:
        """Returns ``{success, blog, relatedPosts}`` and counts a view."""
        return self.api.get(f'/blog/{slug}')

    def like_blog(self, blog_id: str) -> int:
        """Returns the new like count."""
        return self.api.post(f'/blog/{blog_id}/like')['likes']

    def get_all_blogs(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Admin only, drafts included."""
        params = {}
        if page:
            params['page'] = page
        if limit:
            params['limit'] = limit
        if status:
            params['status'] = status
        if category:
            params['category'] = category
        if search:
            params['search'] = search
        return self.api.get('/blog/admin/all', params=params)

    def create_blog(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post('/blog', data)['blog']

    def update_blog(self, blog_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(f'/blog/{blog_id}', data)['blog']

    def delete_blog(self, blog_id: str) -> Dict[str, Any]:
        return self.api.delete(f'/blog/{blog_id}')
