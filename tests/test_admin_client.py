"""Tests for the admin API client."""

import pytest
from fastapi.testclient import TestClient
from unfold.dependencies import datastore_dependency, settings_dependency
from unfold.main import app
from unfold.services.admin_client import AdminAPIError, AdminClient


@pytest.fixture
def admin(store, settings):
    app.dependency_overrides[datastore_dependency] = lambda: store
    app.dependency_overrides[settings_dependency] = lambda: settings
    test_client = TestClient(app)
    yield AdminClient(client=test_client)
    test_client.close()
    app.dependency_overrides.clear()


def test_health(admin):
    assert admin.health() is True


def test_profile_and_landing_page(admin):
    assert admin.update_profile({"tagline": "Maker"})["tagline"] == "Maker"

    cta_id = admin.create_call_to_action("Contact", "/contact")
    assert cta_id in [c["id"] for c in admin.get_data()["landingPage"]["callToActions"]]
    admin.delete_call_to_action(cta_id)


def test_sections_and_items(admin):
    section_id = admin.create_section("custom", "Talks")
    first = admin.create_item(section_id, {"title": "PyCon"})
    second = admin.create_item(section_id, {"title": "EuroPython"})

    items = admin.reorder_items(section_id, [second])
    assert [item["id"] for item in items] == [second, first]

    assert admin.toggle_section_visibility(section_id) is False
    admin.delete_item(section_id, first)
    admin.delete_section(section_id)


def test_errors_are_raised(admin):
    with pytest.raises(AdminAPIError) as excinfo:
        admin.create_section("skills")
    assert excinfo.value.status_code == 409
    assert excinfo.value.code == "conflict"

    with pytest.raises(AdminAPIError) as excinfo:
        admin.delete_project("missing")
    assert excinfo.value.status_code == 404


def test_vocabularies_and_projects(admin):
    assert admin.add_vocabulary_entry("roles", "Designer") == ["Designer", "Developer"]
    assert admin.rename_vocabulary_entry("roles", "Designer", "UX Designer") == [
        "Developer",
        "UX Designer",
    ]

    slug = admin.create_project({"title": "Alpha", "date": "2025"})
    assert slug == "alpha-1"
    assert [p["slug"] for p in admin.list_projects(sort="title_asc")][:2] == ["alpha", "alpha-1"]


def test_vocabulary_names_with_url_characters(admin, store):
    admin.add_vocabulary_entry("technologies", "C")
    admin.add_vocabulary_entry("technologies", "C#")
    admin.update_project("alpha", {"technologies": ["C", "C#"]})

    assert admin.remove_vocabulary_entry("technologies", "C#") == ["C", "Python", "React"]
    assert store.read().portfolio.projects[0].technologies == ["C"]

    admin.add_vocabulary_entry("roles", "UI/UX")
    assert admin.rename_vocabulary_entry("roles", "UI/UX", "Design") == ["Design", "Developer"]


def test_skill_category_with_url_characters(admin):
    admin.create_item("sec-skills", {"category": "CI/CD #1", "items": ["Jenkins"]})

    item = admin.update_item("sec-skills", "CI/CD #1", {"items": ["Jenkins", "GitHub Actions"]})
    assert item["items"] == ["Jenkins", "GitHub Actions"]

    admin.delete_item("sec-skills", "CI/CD #1")
    categories = [item["category"] for item in admin.get_cv()["sections"][2]["items"]]
    assert categories == ["Languages", "Tools"]


def test_upload_image(admin, settings):
    body = admin.upload_image("logo.svg", b"<svg/>", "image/svg+xml")
    assert (settings.uploads_dir / body["fileName"]).read_bytes() == b"<svg/>"
