"""Service for rendering the public site pages."""

from pathlib import Path
from typing import Any, List, Optional
from unfold.models.portfolio_models import PortfolioData, Project, SortOrder
from unfold.utils.template_helpers import create_environment


class PageGenerator:
    """Render the landing, portfolio, project and not-found pages."""

    def __init__(self, template_dir: Path = None):
        self.env = create_environment(template_dir)

    def _render(self, template_name: str, **context: Any) -> str:
        return self.env.get_template(template_name).render(**context)

    def landing_page(self, data: PortfolioData, **extra: Any) -> str:
        """Render the landing page with its featured projects, in featured order."""
        projects = {project.slug: project for project in data.portfolio.projects}
        featured = [
            projects[slug] for slug in data.landingPage.featuredProjectIds if slug in projects
        ]
        return self._render(
            "landing.html",
            profile=data.userProfile,
            landing=data.landingPage,
            featured_projects=featured,
            **extra,
        )

    def portfolio_page(
        self,
        data: PortfolioData,
        projects: List[Project],
        sort_order: Optional[SortOrder] = None,
        technology: Optional[str] = None,
        role: Optional[str] = None,
        **extra: Any
    ) -> str:
        """Render the project list, with filters when the portfolio enables them."""
        display = data.portfolio.displaySettings
        return self._render(
            "portfolio.html",
            profile=data.userProfile,
            projects=projects,
            show_filters=bool(display and display.showFilters),
            sort_orders=list(SortOrder),
            sort_order=sort_order.value if sort_order else "",
            technologies=data.settings.availableTechnologies,
            roles=data.settings.availableRoles,
            technology=technology or "",
            role=role or "",
            **extra,
        )

    def project_page(self, data: PortfolioData, project: Project, **extra: Any) -> str:
        return self._render("project.html", profile=data.userProfile, project=project, **extra)

    def not_found_page(self, message: str, profile: Any = None, **extra: Any) -> str:
        return self._render("not_found.html", message=message, profile=profile, **extra)
