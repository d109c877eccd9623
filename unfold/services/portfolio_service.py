"""Service for managing portfolio projects."""

import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ValidationError
from unfold.models.cv_models import CVSectionType
from unfold.models.portfolio_models import PortfolioData, Project, SortOrder
from unfold.services.datastore import DataStore
from unfold.services.item_dispatch import item_kind
from unfold.utils.errors import InvalidDataError, NotFoundError

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "project"


def generate_slug(title: str) -> str:
    """
    Turn a title into a URL-safe slug.

    Example: "My  App (v2)!" -> "my-app-v2"
    """
    slug = title.lower()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip().strip("-")


def ensure_unique_slug(base_slug: str, existing_projects: List[Project]) -> str:
    """Append ``-1``, ``-2`` ... to ``base_slug`` until no project uses it."""
    base_slug = base_slug or FALLBACK_SLUG
    taken = {project.slug for project in existing_projects}
    slug = base_slug
    counter = 1
    while slug in taken:
        slug = f"{base_slug}-{counter}"
        counter += 1
    return slug


def _date_key(value: str) -> datetime:
    for fmt in ("%Y-%m-%d", "%Y-%m", "%Y"):
        try:
            return datetime.strptime(value, fmt)
        except (TypeError, ValueError):
            continue
    return datetime.min


def sort_projects(projects: List[Project], sort_order: Optional[SortOrder]) -> List[Project]:
    """Sort projects by date or title. Unknown orders keep stored order."""
    if sort_order == SortOrder.DATE_ASC:
        return sorted(projects, key=lambda p: _date_key(p.date))
    if sort_order == SortOrder.DATE_DESC:
        return sorted(projects, key=lambda p: _date_key(p.date), reverse=True)
    if sort_order == SortOrder.TITLE_ASC:
        return sorted(projects, key=lambda p: p.title.lower())
    if sort_order == SortOrder.TITLE_DESC:
        return sorted(projects, key=lambda p: p.title.lower(), reverse=True)
    return list(projects)


def _find_index(data: PortfolioData, slug: str) -> int:
    for index, project in enumerate(data.portfolio.projects):
        if project.slug == slug:
            return index
    raise NotFoundError(f"Project with slug {slug} not found")


class ProjectService:
    """Create, read, update and delete portfolio projects."""

    def __init__(self, store: DataStore):
        """
        Initialize the project service.

        Args:
            store: Datastore holding the site document
        """
        self.store = store

    def list_projects(
        self,
        sort_order: Optional[SortOrder] = None,
        technology: Optional[str] = None,
        role: Optional[str] = None
    ) -> List[Project]:
        """
        List projects, sorted and optionally filtered.

        Args:
            sort_order: Overrides the portfolio's default sort order
            technology: Only projects using this technology (case-insensitive)
            role: Only projects with this role (case-insensitive)

        Returns:
            List[Project]: Matching projects
        """
        portfolio = self.store.read().portfolio
        projects = portfolio.projects
        if technology:
            wanted = technology.lower()
            projects = [p for p in projects if wanted in (t.lower() for t in p.technologies)]
        if role:
            wanted = role.lower()
            projects = [p for p in projects if wanted in (r.lower() for r in p.roles)]

        if sort_order is None and portfolio.displaySettings is not None:
            sort_order = portfolio.displaySettings.defaultSortOrder
        return sort_projects(projects, sort_order)

    def find_project(self, slug: str) -> Optional[Project]:
        """Return the project with this slug, or None."""
        for project in self.store.read().portfolio.projects:
            if project.slug == slug:
                return project
        return None

    def get_project(self, slug: str) -> Project:
        """
        Return the project with this slug.

        Raises:
            NotFoundError: If no project has this slug
        """
        project = self.find_project(slug)
        if project is None:
            raise NotFoundError(f"Project with slug {slug} not found")
        return project

    def create_project(self, project_data: Dict[str, Any]) -> str:
        """
        Add a project, deriving a unique slug from its title.

        Args:
            project_data: Project fields; any ``slug`` given is ignored

        Returns:
            str: The new project's slug

        Raises:
            InvalidDataError: If the project data is invalid
        """
        title = project_data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise InvalidDataError("Project title is required")

        with self.store.transaction() as data:
            slug = ensure_unique_slug(generate_slug(title), data.portfolio.projects)
            payload = dict(project_data)
            payload["slug"] = slug
            try:
                project = Project.model_validate(payload)
            except ValidationError as e:
                raise InvalidDataError(f"Invalid project data: {e}") from e
            data.portfolio.projects.append(project)

        logger.info("Created project %s", slug)
        return slug

    def update_project(self, slug: str, patch: Dict[str, Any]) -> Project:
        """
        Shallow-merge ``patch`` into a project. The slug can't be changed.

        Raises:
            NotFoundError: If no project has this slug
            InvalidDataError: If the merged project is invalid
        """
        with self.store.transaction() as data:
            index = _find_index(data, slug)
            merged = data.portfolio.projects[index].model_dump(mode="json", exclude_none=True)
            merged.update({k: v for k, v in patch.items() if k != "slug"})
            try:
                project = Project.model_validate(merged)
            except ValidationError as e:
                raise InvalidDataError(f"Invalid project data: {e}") from e
            data.portfolio.projects[index] = project

        logger.info("Updated project %s", slug)
        return project

    def delete_project(self, slug: str) -> None:
        """
        Delete a project and every reference to it.

        The slug is removed from the landing page's featured projects and
        project references to it are removed from the CV.

        Raises:
            NotFoundError: If no project has this slug
        """
        with self.store.transaction() as data:
            index = _find_index(data, slug)
            del data.portfolio.projects[index]

            landing = data.landingPage
            landing.featuredProjectIds = [s for s in landing.featuredProjectIds if s != slug]

            for section in data.cv.sections:
                section.items = [
                    item for item in section.items
                    if not (item_kind(item) == CVSectionType.PROJECTS and item.get("slug") == slug)
                ]

        logger.info("Deleted project %s", slug)
