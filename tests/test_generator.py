"""Tests for CV and page rendering."""

from io import BytesIO
import pytest
from pypdf import PdfReader
from unfold.models.cv_models import CVSectionType
from unfold.models.portfolio_models import PortfolioData
from unfold.services.cv_generator import CVGenerator
from unfold.services.page_generator import PageGenerator
from unfold.services.pdf_generator import PDFGenerator


@pytest.fixture
def data(sample_document):
    return PortfolioData.model_validate(sample_document)


@pytest.fixture
def generator():
    return CVGenerator()


def test_build_sections_visible_and_ordered(generator, data):
    """Only visible sections, in sortOrder."""
    sections = generator.build_sections(data)

    assert [s.id for s in sections] == ["sec-work", "sec-edu", "sec-skills"]
    assert sections[0].icon == "bank"
    assert [e.kind for e in sections[0].entries] == ["work_experience", "work_experience"]


def test_generate_html(generator, data):
    html = generator.generate_html(data)

    assert "<!DOCTYPE html>" in html
    assert "Jane Doe" in html
    assert "Built the billing system" in html
    assert "2020-01 - Present" in html
    assert "Hidden Prize" not in html
    assert html.index("Experience") < html.index("Education") < html.index("Skills")


def test_unknown_items_on_screen_and_in_print(generator, data):
    data.cv.sections[0].items.append({"mystery": True})

    assert "Unknown item type" in generator.generate_html(data)
    assert "Unknown item type" not in generator.generate_print_html(data)


def test_print_drops_sections_with_nothing_to_render(generator, data):
    data.cv.sections[0].items = [{"mystery": True}]

    screen_ids = [s.id for s in generator.build_sections(data)]
    print_ids = [s.id for s in generator.build_sections(data, print_mode=True)]

    assert "sec-edu" in screen_ids
    assert "sec-edu" not in print_ids


def test_print_lists_portfolio_projects_without_projects_section(generator, data):
    html = generator.generate_print_html(data)

    assert "The first project." in html
    assert "The second project." in html


def test_project_references_resolve_to_projects(generator, data):
    data.cv.sections.append(
        data.cv.sections[0].model_copy(update={
            "id": "sec-projects",
            "title": "Selected Projects",
            "type": CVSectionType.PROJECTS,
            "sortOrder": 5,
            "items": [{"kind": "projects", "slug": "beta"}, {"kind": "projects", "slug": "gone"}],
        })
    )

    context = generator.build_context(data, print_mode=True)
    projects_section = context["sections"][-1]

    assert projects_section.title == "Selected Projects"
    assert [e.project.slug for e in projects_section.entries] == ["beta"]
    assert context["portfolio_projects"] == []


def test_generate_pdf(data):
    pdf_bytes = PDFGenerator().generate_pdf(data)

    assert pdf_bytes.startswith(b"%PDF")
    text = "".join(page.extract_text() for page in PdfReader(BytesIO(pdf_bytes)).pages)
    assert "Jane Doe" in text
    assert "Acme" in text
    assert "Hidden Prize" not in text


def test_landing_page_shows_featured_projects(data):
    html = PageGenerator().landing_page(data)

    assert "Jane builds things" in html
    assert 'href="/portfolio/alpha"' in html
    assert 'href="/portfolio/beta"' not in html
    assert 'id="cta-cta-1"' in html


def test_portfolio_page_filters(data):
    html = PageGenerator().portfolio_page(data, data.portfolio.projects, technology="React")

    assert "Alpha" in html and "Beta" in html
    assert '<option value="React" selected>' in html


def test_project_page_renders_rich_text(data):
    project = data.portfolio.projects[0]
    project.longDescription = {
        "type": "doc",
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Deep dive"}]}],
    }

    html = PageGenerator().project_page(data, project)

    assert "<p>Deep dive</p>" in html
    assert "January 2023" in html


def test_not_found_page():
    html = PageGenerator().not_found_page("No project named 'x'.")
    assert "Page not found" in html
