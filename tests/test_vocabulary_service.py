"""Tests for the technology and role vocabularies."""

import pytest
from unfold.services.vocabulary_service import VocabularyKind, VocabularyService
from unfold.utils.errors import ConflictError, InvalidDataError, NotFoundError


@pytest.fixture
def vocabularies(store):
    return VocabularyService(store)


def test_add_technology_keeps_list_sorted(vocabularies):
    vocabularies.add_technology("django")
    vocabularies.add_technology("Ansible")

    assert vocabularies.list_technologies() == ["Ansible", "django", "Python", "React"]


def test_add_existing_entry_conflicts(vocabularies):
    with pytest.raises(ConflictError):
        vocabularies.add_technology("python")
    with pytest.raises(ConflictError):
        vocabularies.add_role("DEVELOPER")


def test_blank_names_are_rejected(vocabularies):
    with pytest.raises(InvalidDataError):
        vocabularies.add_role("   ")
    with pytest.raises(InvalidDataError):
        vocabularies.rename_technology("Python", "")


def test_rename_conflict_leaves_everything_unchanged(store, vocabularies):
    """Renaming onto an existing name fails and nothing is touched."""
    vocabularies.add_technology("Reactjs")
    document = store.read()
    document.portfolio.projects[1].technologies = ["Reactjs"]
    store.write(document)

    with pytest.raises(ConflictError):
        vocabularies.rename_technology("Reactjs", "react")

    assert "Reactjs" in vocabularies.list_technologies()
    assert store.read().portfolio.projects[1].technologies == ["Reactjs"]


def test_rename_updates_project_tags(store, vocabularies):
    vocabularies.rename_technology("python", "Python 3")

    assert vocabularies.list_technologies() == ["Python 3", "React"]
    projects = store.read().portfolio.projects
    assert projects[0].technologies == ["Python 3"]
    assert projects[1].technologies == ["React", "Python 3"]


def test_rename_can_change_case(vocabularies):
    vocabularies.rename_role("Developer", "developer")
    assert vocabularies.list_roles() == ["developer"]


def test_rename_missing_entry(vocabularies):
    with pytest.raises(NotFoundError):
        vocabularies.rename_role("Designer", "UX Designer")


def test_remove_entry_is_idempotent(store, vocabularies):
    vocabularies.remove_technology("PYTHON")
    vocabularies.remove_technology("PYTHON")

    assert vocabularies.list_technologies() == ["React"]
    projects = store.read().portfolio.projects
    assert projects[0].technologies == []
    assert projects[1].technologies == ["React"]


def test_generic_entry_methods(vocabularies):
    vocabularies.add_entry(VocabularyKind.ROLE, "Tech Lead")
    assert vocabularies.list_entries(VocabularyKind.ROLE) == ["Developer", "Tech Lead"]
