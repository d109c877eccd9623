"""Shared fixtures: a temporary datastore holding a small site document."""

import copy
import json
import pytest
from unfold.config import AppSettings
from unfold.services.datastore import DataStore

SAMPLE_DOCUMENT = {
    "schemaVersion": 2,
    "userProfile": {
        "name": "Jane Doe",
        "tagline": "Engineer",
        "email": "jane@example.com",
        "socialLinks": [
            {"id": "s1", "platformName": "GitHub", "url": "https://github.com/jane"}
        ],
    },
    "settings": {
        "availableTechnologies": ["Python", "React"],
        "availableRoles": ["Developer"],
    },
    "landingPage": {
        "greeting": "Hello",
        "mainHeadline": "Jane builds things",
        "introductionParagraphs": ["First paragraph."],
        "callToActions": [{"id": "cta-1", "text": "Portfolio", "url": "/portfolio"}],
        "featuredProjectIds": ["alpha"],
    },
    "portfolio": {
        "displaySettings": {"defaultSortOrder": "date_desc", "showFilters": True},
        "projects": [
            {
                "slug": "alpha",
                "title": "Alpha",
                "date": "2023-01",
                "shortDescription": "The first project.",
                "technologies": ["Python"],
                "roles": ["Developer"],
            },
            {
                "slug": "beta",
                "title": "Beta",
                "date": "2024-06",
                "shortDescription": "The second project.",
                "technologies": ["React", "python"],
                "roles": [],
            },
        ],
    },
    "cv": {
        "title": "Jane Doe - CV",
        "contactInformation": {"email": "jane@example.com"},
        "summary": "Experienced engineer.",
        "sections": [
            {
                "id": "sec-edu",
                "title": "Education",
                "type": "education",
                "isVisible": True,
                "sortOrder": 1,
                "items": [
                    {
                        "kind": "education",
                        "id": "edu-1",
                        "degree": "BSc Physics",
                        "institution": "State University",
                        "location": "Springfield",
                        "graduationDate": "2015-06",
                    }
                ],
            },
            {
                "id": "sec-work",
                "title": "Experience",
                "type": "work_experience",
                "isVisible": True,
                "sortOrder": 0,
                "items": [
                    {
                        "kind": "work_experience",
                        "id": "work-1",
                        "jobTitle": "Engineer",
                        "company": "Acme",
                        "location": "Remote",
                        "startDate": "2020-01",
                        "current": True,
                        "responsibilities": ["Built the billing system"],
                    },
                    {
                        "kind": "work_experience",
                        "id": "work-2",
                        "jobTitle": "Intern",
                        "company": "Initech",
                        "location": "Austin",
                        "startDate": "2018-06",
                        "endDate": "2018-09",
                        "responsibilities": ["Wrote reports"],
                    },
                ],
            },
            {
                "id": "sec-skills",
                "title": "Skills",
                "type": "skills",
                "isVisible": True,
                "sortOrder": 2,
                "items": [
                    {"kind": "skills", "category": "Languages", "items": ["Python", "Go"]},
                    {"kind": "skills", "category": "Tools", "items": ["Docker"]},
                ],
            },
            {
                "id": "sec-awards",
                "title": "Awards",
                "type": "awards",
                "isVisible": False,
                "sortOrder": 3,
                "items": [
                    {
                        "kind": "awards",
                        "id": "award-1",
                        "name": "Hidden Prize",
                        "issuer": "Some Board",
                        "date": "2019",
                    }
                ],
            },
        ],
    },
}


@pytest.fixture
def sample_document():
    """A fresh copy of the sample document."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def data_file(tmp_path, sample_document):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


@pytest.fixture
def store(data_file):
    return DataStore(data_file)


@pytest.fixture
def settings(tmp_path, data_file):
    return AppSettings(
        data_file=data_file,
        seed_file=None,
        uploads_dir=tmp_path / "uploads",
        admin_mode=True,
    )
