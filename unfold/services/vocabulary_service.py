"""Service for the technology and role vocabularies used to tag projects."""

import logging
from enum import Enum
from typing import List
from unfold.models.portfolio_models import PortfolioData, Project
from unfold.services.datastore import DataStore
from unfold.utils.errors import ConflictError, InvalidDataError, NotFoundError

logger = logging.getLogger(__name__)


class VocabularyKind(str, Enum):
    """Vocabularies kept in the site settings."""

    TECHNOLOGY = "technology"
    ROLE = "role"


def _vocabulary(data: PortfolioData, kind: VocabularyKind) -> List[str]:
    if kind == VocabularyKind.TECHNOLOGY:
        return data.settings.availableTechnologies
    return data.settings.availableRoles


def _set_vocabulary(data: PortfolioData, kind: VocabularyKind, values: List[str]) -> None:
    values = sorted(values, key=str.lower)
    if kind == VocabularyKind.TECHNOLOGY:
        data.settings.availableTechnologies = values
    else:
        data.settings.availableRoles = values


def _project_tags(project: Project, kind: VocabularyKind) -> List[str]:
    if kind == VocabularyKind.TECHNOLOGY:
        return project.technologies
    return project.roles


def _set_project_tags(project: Project, kind: VocabularyKind, values: List[str]) -> None:
    if kind == VocabularyKind.TECHNOLOGY:
        project.technologies = values
    else:
        project.roles = values


def _clean(name: str, kind: VocabularyKind) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidDataError(f"{kind.value.capitalize()} name can't be empty")
    return cleaned


class VocabularyService:
    """
    Manage the technology and role vocabularies.

    Names are compared case-insensitively. The vocabularies are kept sorted
    alphabetically.
    """

    def __init__(self, store: DataStore):
        """
        Initialize the vocabulary service.

        Args:
            store: Datastore holding the site document
        """
        self.store = store

    def list_entries(self, kind: VocabularyKind) -> List[str]:
        """Return the vocabulary of the given kind."""
        return list(_vocabulary(self.store.read(), kind))

    def add_entry(self, kind: VocabularyKind, name: str) -> None:
        """
        Add a name to a vocabulary.

        Raises:
            ConflictError: If the name already exists (case-insensitive)
            InvalidDataError: If the name is blank
        """
        name = _clean(name, kind)
        with self.store.transaction() as data:
            values = _vocabulary(data, kind)
            if any(value.lower() == name.lower() for value in values):
                raise ConflictError(f'{kind.value.capitalize()} "{name}" already exists')
            _set_vocabulary(data, kind, values + [name])
        logger.info("Added %s %s", kind.value, name)

    def rename_entry(self, kind: VocabularyKind, old_name: str, new_name: str) -> None:
        """
        Rename a vocabulary entry and every project tag using it.

        Raises:
            NotFoundError: If ``old_name`` isn't in the vocabulary
            ConflictError: If ``new_name`` is already used by another entry
            InvalidDataError: If ``new_name`` is blank
        """
        new_name = _clean(new_name, kind)
        old_key = old_name.lower()
        new_key = new_name.lower()

        with self.store.transaction() as data:
            values = _vocabulary(data, kind)
            old_index = next(
                (i for i, value in enumerate(values) if value.lower() == old_key), None
            )
            if old_index is None:
                raise NotFoundError(f'{kind.value.capitalize()} "{old_name}" not found')
            if new_key != old_key and any(value.lower() == new_key for value in values):
                raise ConflictError(f'{kind.value.capitalize()} "{new_name}" already exists')

            values = list(values)
            values[old_index] = new_name
            _set_vocabulary(data, kind, values)

            for project in data.portfolio.projects:
                renamed: List[str] = []
                for tag in _project_tags(project, kind):
                    tag = new_name if tag.lower() == old_key else tag
                    if tag not in renamed:
                        renamed.append(tag)
                _set_project_tags(project, kind, renamed)

        logger.info("Renamed %s %s to %s", kind.value, old_name, new_name)

    def remove_entry(self, kind: VocabularyKind, name: str) -> None:
        """Remove a name from a vocabulary and from every project. Missing names are ignored."""
        key = (name or "").lower()
        with self.store.transaction() as data:
            _set_vocabulary(
                data, kind, [v for v in _vocabulary(data, kind) if v.lower() != key]
            )
            for project in data.portfolio.projects:
                _set_project_tags(
                    project, kind, [t for t in _project_tags(project, kind) if t.lower() != key]
                )
        logger.info("Removed %s %s", kind.value, name)

    def list_technologies(self) -> List[str]:
        return self.list_entries(VocabularyKind.TECHNOLOGY)

    def list_roles(self) -> List[str]:
        return self.list_entries(VocabularyKind.ROLE)

    def add_technology(self, name: str) -> None:
        self.add_entry(VocabularyKind.TECHNOLOGY, name)

    def add_role(self, name: str) -> None:
        self.add_entry(VocabularyKind.ROLE, name)

    def rename_technology(self, old_name: str, new_name: str) -> None:
        self.rename_entry(VocabularyKind.TECHNOLOGY, old_name, new_name)

    def rename_role(self, old_name: str, new_name: str) -> None:
        self.rename_entry(VocabularyKind.ROLE, old_name, new_name)

    def remove_technology(self, name: str) -> None:
        self.remove_entry(VocabularyKind.TECHNOLOGY, name)

    def remove_role(self, name: str) -> None:
        self.remove_entry(VocabularyKind.ROLE, name)
