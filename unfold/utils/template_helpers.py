"""Helper functions for Jinja2 templates."""

from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import quote
from jinja2 import Environment, FileSystemLoader, select_autoescape
from unfold.models.cv_models import CVSectionType
from unfold.utils.rich_text import render_rich_text

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

SECTION_ICONS = {
    CVSectionType.EDUCATION: "book",
    CVSectionType.WORK_EXPERIENCE: "bank",
    CVSectionType.SKILLS: "star",
    CVSectionType.PUBLICATIONS: "file-text",
    CVSectionType.AWARDS: "trophy",
    CVSectionType.CERTIFICATIONS: "safety-certificate",
    CVSectionType.VOLUNTEERING: "heart",
    CVSectionType.LANGUAGES: "translation",
    CVSectionType.PROJECTS: "folder",
}

SOCIAL_ICONS = {
    "LinkedIn": "linkedin",
    "GitHub": "github",
    "X": "twitter",
    "Website": "global",
}

PLACEHOLDER_IMAGE_URL = "/placeholder.svg"


def _parse_date(value: str) -> Optional[datetime]:
    for fmt in ("%Y-%m-%d", "%Y-%m", "%Y-%m-%dT%H:%M:%S", "%B %Y", "%b %Y"):
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    return None


def format_month_year(value: Optional[str]) -> str:
    """
    Turn a date into month and year.

    Example: "2020-03-15" -> "March 2020"

    Args:
        value: Date string

    Returns:
        str: Formatted date, or the input unchanged if it can't be parsed
    """
    if not value:
        return ""
    parsed = _parse_date(str(value))
    if parsed is None:
        return str(value)
    return parsed.strftime("%B %Y")


def format_date_range(start: Optional[str], end: Optional[str], current: Optional[bool] = None) -> str:
    """
    Format a period such as "2019-01 - Present".

    An open period ends with "Present" when ``current`` is set.
    """
    if end:
        finish = end
    elif current:
        finish = "Present"
    else:
        finish = ""
    if start and finish:
        return f"{start} - {finish}"
    return start or finish


def join_list(values: Optional[Iterable[str]], separator: str = ", ") -> str:
    return separator.join(v for v in (values or []) if v)


def is_external_url(url: str) -> bool:
    return url.startswith("http://") or url.startswith("https://")


def normalize_image_url(url: Optional[str]) -> str:
    """
    Normalize an image URL for display.

    External URLs are returned as is, local paths are made absolute, and an
    empty URL yields the placeholder image.
    """
    if not url:
        return PLACEHOLDER_IMAGE_URL
    if is_external_url(url):
        return url
    if not url.startswith("/"):
        return f"/{url}"
    return url


def section_icon(section_type: str) -> str:
    """Return the icon name for a section type; custom and unknown types get a generic one."""
    try:
        return SECTION_ICONS.get(CVSectionType(section_type), "setting")
    except ValueError:
        return "setting"


def social_icon(platform_name: str) -> str:
    return SOCIAL_ICONS.get(platform_name, "link")


def cv_file_name(owner_name: str, today: Optional[date] = None) -> str:
    """
    Return the download name of the CV PDF.

    Example: "Jane Doe - CV - March 2025.pdf"
    """
    today = today or date.today()
    return f"{owner_name} - CV - {today.strftime('%B %Y')}.pdf"


def content_disposition(filename: str) -> str:
    """Build an attachment header that survives non-ASCII file names."""
    ascii_name = filename.encode("ascii", "ignore").decode("ascii").replace('"', "")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def register_jinja_filters(env: Environment) -> None:
    """
    Register helper functions as Jinja2 filters.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters["month_year"] = format_month_year
    env.filters["date_range"] = format_date_range
    env.filters["join_list"] = join_list
    env.filters["image_url"] = normalize_image_url
    env.filters["section_icon"] = section_icon
    env.filters["social_icon"] = social_icon
    env.filters["rich_text"] = render_rich_text


def create_environment(template_dir: Optional[Path] = None) -> Environment:
    """Create the Jinja2 environment used by every page."""
    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"])
    )
    register_jinja_filters(env)
    return env
