"""Tests for template helper functions."""

from datetime import date
from unfold.utils.template_helpers import (
    content_disposition,
    cv_file_name,
    format_date_range,
    format_month_year,
    normalize_image_url,
    section_icon,
)


def test_format_month_year():
    assert format_month_year("2020-03-15") == "March 2020"
    assert format_month_year("2020-03") == "March 2020"
    assert format_month_year("Spring 2020") == "Spring 2020"
    assert format_month_year(None) == ""


def test_format_date_range():
    assert format_date_range("2019-01", None, True) == "2019-01 - Present"
    assert format_date_range("2019-01", "2020-02") == "2019-01 - 2020-02"
    assert format_date_range("2019-01", None) == "2019-01"


def test_normalize_image_url():
    assert normalize_image_url("https://cdn.example.com/a.png") == "https://cdn.example.com/a.png"
    assert normalize_image_url("images/a.png") == "/images/a.png"
    assert normalize_image_url("/images/a.png") == "/images/a.png"
    assert normalize_image_url("") == "/placeholder.svg"


def test_section_icon():
    assert section_icon("education") == "book"
    assert section_icon("custom") == "setting"
    assert section_icon("nonsense") == "setting"


def test_cv_file_name():
    assert cv_file_name("Jane Doe", date(2025, 3, 4)) == "Jane Doe - CV - March 2025.pdf"


def test_content_disposition_handles_non_ascii():
    header = content_disposition("José - CV - March 2025.pdf")

    assert header.startswith('attachment; filename="Jos - CV - March 2025.pdf"')
    assert "filename*=UTF-8''Jos%C3%A9%20-%20CV%20-%20March%202025.pdf" in header
