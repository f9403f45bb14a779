"""
Project and skill services.
"""

from typing import Any, Dict, Iterable, List, Optional

from .api import ApiClient

PROJECT_CATEGORIES = ['web', 'mobile', 'desktop', 'api', 'other']
PROJECT_STATUSES = ['completed', 'in-progress', 'planned']
PROJECT_SORTS = ['newest', 'oldest', 'popular', 'featured']

SKILL_CATEGORIES = ['frontend', 'backend', 'database', 'mobile', 'devops', 'design', 'other']
SKILL_LEVELS = ['beginner', 'intermediate', 'advanced', 'expert']


def _params(**values) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value not in (None, '')}


class ProjectService:
    """Calls against ``/projects``."""

    def __init__(self, api: ApiClient):
        self.api = api

    def get_projects(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        featured: bool = False,
        status: Optional[str] = None,
        search: Optional[str] = None,
        tech: Optional[Iterable[str]] = None,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Public. Returns ``{success, projects, pagination, filters}``."""
        params = _params(
            page=page,
            limit=limit,
            category=category,
            status=status,
            search=search,
            sort=sort,
            tech=','.join(tech) if tech else None,
        )
        if featured:
            params['featured'] = 'true'
        return self.api.get('/projects', params=params)

    def get_featured_projects(self) -> List[Dict[str, Any]]:
        return self.api.get('/projects/featured')['projects']

    def get_project(self, project_id: str) -> Dict[str, Any]:
        """Public projects for anyone; private ones for the admin only."""
        return self.api.get(f'/projects/{project_id}')['project']

    def like_project(self, project_id: str) -> int:
        """Returns the new like count."""
        return self.api.post(f'/projects/{project_id}/like')['likes']

    def get_all_projects(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Admin only, private projects included."""
        params = _params(page=page, limit=limit, category=category, status=status, search=search)
        return self.api.get('/projects/admin/all', params=params)

    def create_project(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post('/projects', data)['project']

    def update_project(self, project_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(f'/projects/{project_id}', data)['project']

    def delete_project(self, project_id: str) -> Dict[str, Any]:
        return self.api.delete(f'/projects/{project_id}')


class SkillService:
    """Calls against ``/skills``."""

    def __init__(self, api: ApiClient):
        self.api = api

    def get_skills(self, category: Optional[str] = None) -> Dict[str, Any]:
        """Public. Returns ``{success, skills, skillsByCategory, categories}``."""
        return self.api.get('/skills', params=_params(category=category))

    def get_skill(self, skill_id: str) -> Dict[str, Any]:
        return self.api.get(f'/skills/{skill_id}')['skill']

    def get_all_skills(self) -> List[Dict[str, Any]]:
        """Admin only, hidden skills included."""
        return self.api.get('/skills/admin/all')['skills']

    def create_skill(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post('/skills', data)['skill']

    def update_skill(self, skill_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(f'/skills/{skill_id}', data)['skill']

    def delete_skill(self, skill_id: str) -> Dict[str, Any]:
        return self.api.delete(f'/skills/{skill_id}')

    def reorder_skills(self, order: Iterable[str]) -> Dict[str, Any]:
        """Give the skills in ``order`` the positions 0, 1, 2, ..."""
        skills = [{'id': skill_id, 'order': position} for position, skill_id in enumerate(order)]
        return self.api.put('/skills/reorder', {'skills': skills})
