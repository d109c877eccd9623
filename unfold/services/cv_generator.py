"""Service for generating CV HTML from templates."""

from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from unfold.models.cv_models import CVSectionType
from unfold.models.portfolio_models import PortfolioData, Project
from unfold.services.item_dispatch import item_kind, parse_item
from unfold.utils.template_helpers import create_environment, section_icon

UNKNOWN_KIND = "unknown"


class RenderedItem(BaseModel):
    """An item ready for a template: its variant name and typed model."""

    kind: str
    item: Any
    project: Optional[Project] = None


class RenderedSection(BaseModel):
    """A visible section and its renderable items."""

    id: str
    title: str
    type: str
    icon: str
    entries: List[RenderedItem]


class CVGenerator:
    """Service to generate CV HTML (screen and print) from Jinja2 templates."""

    def __init__(self, template_dir: Path = None):
        """
        Initialize the CV generator.

        Args:
            template_dir: Directory containing Jinja2 templates. Defaults to unfold/templates/
        """
        self.env = create_environment(template_dir)

    def build_sections(self, data: PortfolioData, print_mode: bool = False) -> List[RenderedSection]:
        """
        Prepare the visible sections, ordered by sortOrder.

        Every item is dispatched on its variant. On screen, items that match
        no variant are kept as "unknown"; in print they are left out, as are
        sections left with nothing to show.

        Args:
            data: Site document
            print_mode: Prepare for the print/PDF rendering

        Returns:
            List[RenderedSection]: Sections for the templates
        """
        projects = {project.slug: project for project in data.portfolio.projects}
        visible = sorted(
            (s for s in data.cv.sections if s.isVisible),
            key=lambda s: s.sortOrder,
        )

        rendered = []
        for section in visible:
            entries = []
            for raw in section.items:
                entry = self._render_item(raw, projects)
                if entry is None:
                    continue
                if entry.kind == UNKNOWN_KIND and print_mode:
                    continue
                entries.append(entry)
            if not entries:
                continue
            rendered.append(RenderedSection(
                id=section.id,
                title=section.title,
                type=section.type.value,
                icon=section_icon(section.type.value),
                entries=entries,
            ))
        return rendered

    def build_context(self, data: PortfolioData, print_mode: bool = False) -> Dict[str, Any]:
        """Assemble the template data shared by both renderings."""
        sections = self.build_sections(data, print_mode)
        context = {
            "profile": data.userProfile,
            "cv": data.cv,
            "sections": sections,
            "portfolio_projects": [],
        }
        has_projects_section = any(s.type == CVSectionType.PROJECTS.value for s in sections)
        if print_mode and not has_projects_section:
            context["portfolio_projects"] = data.portfolio.projects
        return context

    def generate_html(self, data: PortfolioData, **extra: Any) -> str:
        """
        Render the on-screen CV page.

        Args:
            data: Site document
            **extra: Additional template variables (e.g. ``admin_mode``)

        Returns:
            str: Rendered HTML string
        """
        template = self.env.get_template("cv.html")
        return template.render(**self.build_context(data), **extra)

    def generate_print_html(self, data: PortfolioData) -> str:
        """
        Render the print version of the CV used for the PDF.

        Returns:
            str: Rendered HTML string
        """
        template = self.env.get_template("cv_print.html")
        return template.render(**self.build_context(data, print_mode=True))

    @staticmethod
    def _render_item(raw: Dict[str, Any], projects: Dict[str, Project]) -> Optional[RenderedItem]:
        kind = item_kind(raw)
        model = parse_item(raw)
        if kind is None or model is None:
            return RenderedItem(kind=UNKNOWN_KIND, item=raw)
        if kind == CVSectionType.PROJECTS:
            project = projects.get(model.slug)
            if project is None:
                return None
            return RenderedItem(kind=kind.value, item=model, project=project)
        return RenderedItem(kind=kind.value, item=model)
