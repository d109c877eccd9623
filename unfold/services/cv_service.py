"""Service for editing the CV: sections and their items."""

import logging
import uuid
from typing import Any, Dict, List, Optional
from pydantic import ValidationError
from unfold.models.cv_models import (
    CV,
    DEFAULT_SECTION_TITLES,
    ITEM_MODELS,
    CVSection,
    CVSectionType,
)
from unfold.models.portfolio_models import PortfolioData
from unfold.services.datastore import DataStore
from unfold.services.item_dispatch import find_item_index, item_kind, resolve_item_id
from unfold.utils.errors import ConflictError, InvalidDataError, NotFoundError

logger = logging.getLogger(__name__)

# Keys the caller may not overwrite through a patch
PROTECTED_SECTION_KEYS = ("id", "items")
PROTECTED_ITEM_KEYS = ("kind",)


def _find_section(data: PortfolioData, section_id: str) -> CVSection:
    for section in data.cv.sections:
        if section.id == section_id:
            return section
    raise NotFoundError(f"CV section with ID {section_id} not found")


def _ensure_unique_type(
    data: PortfolioData,
    section_type: CVSectionType,
    ignore_id: Optional[str] = None
) -> None:
    if section_type == CVSectionType.CUSTOM:
        return
    for section in data.cv.sections:
        if section.type == section_type and section.id != ignore_id:
            raise ConflictError(
                f"A {section_type.value} section already exists. "
                f"Only one section of this type is allowed."
            )


def _validate_item(kind: CVSectionType, data: Dict[str, Any]) -> Dict[str, Any]:
    payload = {key: value for key, value in data.items() if key not in PROTECTED_ITEM_KEYS}
    payload["kind"] = kind.value
    try:
        model = ITEM_MODELS[kind].model_validate(payload)
    except ValidationError as e:
        raise InvalidDataError(f"Invalid {kind.value} item: {e}") from e
    return model.model_dump(mode="json", exclude_none=True)


def _ensure_unique_key(section: CVSection, key: str, ignore_index: Optional[int] = None) -> None:
    index = find_item_index(section.items, key)
    if index is not None and index != ignore_index:
        raise ConflictError(f"An item with key {key!r} already exists in section {section.id}")


class CVService:
    """Create, update, delete and reorder CV sections and items."""

    def __init__(self, store: DataStore):
        """
        Initialize the CV service.

        Args:
            store: Datastore holding the site document
        """
        self.store = store

    # ------------------------------------------------------------------
    # CV
    # ------------------------------------------------------------------

    def get_cv(self) -> CV:
        """Return the CV with sections ordered by sortOrder."""
        cv = self.store.read().cv
        cv.sections.sort(key=lambda s: s.sortOrder)
        return cv

    def update_cv(self, patch: Dict[str, Any]) -> CV:
        """
        Shallow-merge ``patch`` into the CV.

        Args:
            patch: CV fields to replace (title, contactInformation, summary)

        Returns:
            CV: The updated CV

        Raises:
            InvalidDataError: If the merged CV is invalid
        """
        with self.store.transaction() as data:
            merged = data.cv.model_dump(mode="json", exclude_none=True)
            merged.update(patch)
            try:
                data.cv = CV.model_validate(merged)
            except ValidationError as e:
                raise InvalidDataError(f"Invalid CV data: {e}") from e
            cv = data.cv
        logger.info("Updated CV fields: %s", ", ".join(sorted(patch)))
        return cv

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def list_sections(self, visible_only: bool = False) -> List[CVSection]:
        """Return sections ordered by sortOrder, optionally only visible ones."""
        sections = self.get_cv().sections
        if visible_only:
            sections = [s for s in sections if s.isVisible]
        return sections

    def get_section(self, section_id: str) -> CVSection:
        """
        Return one section.

        Raises:
            NotFoundError: If the section doesn't exist
        """
        return _find_section(self.store.read(), section_id)

    def create_section(
        self,
        title: str,
        section_type: CVSectionType,
        items: Optional[List[Dict[str, Any]]] = None,
        is_visible: bool = True
    ) -> str:
        """
        Create a section at the end of the CV.

        Args:
            title: Section title
            section_type: Section type
            items: Initial items, validated like :meth:`create_item`
            is_visible: Whether the section is shown

        Returns:
            str: ID of the new section

        Raises:
            ConflictError: If a non-custom section of this type already exists
        """
        section_type = CVSectionType(section_type)
        with self.store.transaction() as data:
            _ensure_unique_type(data, section_type)

            max_sort_order = max((s.sortOrder for s in data.cv.sections), default=-1)
            section = CVSection(
                id=str(uuid.uuid4()),
                title=title,
                type=section_type,
                items=[],
                isVisible=is_visible,
                sortOrder=max_sort_order + 1,
            )
            for item in items or []:
                self._append_item(data, section, item)
            data.cv.sections.append(section)

        logger.info("Created %s CV section %s", section_type.value, section.id)
        return section.id

    def create_default_section(
        self,
        section_type: CVSectionType,
        items: Optional[List[Dict[str, Any]]] = None,
        is_visible: bool = True
    ) -> str:
        """
        Create a section of a non-custom type with its stock title.

        Raises:
            InvalidDataError: For custom sections, which need a title
            ConflictError: If a section of this type already exists
        """
        section_type = CVSectionType(section_type)
        if section_type == CVSectionType.CUSTOM:
            raise InvalidDataError("Custom sections need a title")
        return self.create_section(
            DEFAULT_SECTION_TITLES[section_type], section_type, items, is_visible
        )

    def create_custom_section(self, title: str) -> str:
        """Create a custom section. Any number of these may exist."""
        return self.create_section(title, CVSectionType.CUSTOM)

    def update_section(self, section_id: str, patch: Dict[str, Any]) -> CVSection:
        """
        Shallow-merge ``patch`` into a section.

        Items are edited through the item operations, not here. When the type
        changes, the existing items are re-validated and retagged as the new type.

        Raises:
            NotFoundError: If the section doesn't exist
            ConflictError: If the patch changes the type to one already used
            InvalidDataError: If the merged section or a retagged item is invalid
        """
        with self.store.transaction() as data:
            section = _find_section(data, section_id)
            merged = section.model_dump(mode="json", exclude_none=True)
            merged.update(
                {k: v for k, v in patch.items() if k not in PROTECTED_SECTION_KEYS}
            )
            try:
                updated = CVSection.model_validate(merged)
            except ValidationError as e:
                raise InvalidDataError(f"Invalid CV section data: {e}") from e
            if updated.type != section.type:
                _ensure_unique_type(data, updated.type, ignore_id=section_id)
                updated.items = [_validate_item(updated.type, item) for item in section.items]
                if updated.type == CVSectionType.PROJECTS:
                    for item in updated.items:
                        self._ensure_project_exists(data, item["slug"])

            index = data.cv.sections.index(section)
            data.cv.sections[index] = updated

        logger.info("Updated CV section %s", section_id)
        return updated

    def delete_section(self, section_id: str) -> None:
        """
        Delete a section and all its items.

        Raises:
            NotFoundError: If the section doesn't exist
        """
        with self.store.transaction() as data:
            section = _find_section(data, section_id)
            data.cv.sections.remove(section)
        logger.info("Deleted CV section %s", section_id)

    def reorder_sections(self, section_ids: List[str]) -> List[CVSection]:
        """
        Put the listed sections first, in the given order.

        Sections left out of ``section_ids`` follow, keeping their previous
        relative order. sortOrder values are renumbered from 0.

        Raises:
            NotFoundError: If any ID doesn't match a section
        """
        with self.store.transaction() as data:
            by_id = {section.id: section for section in data.cv.sections}
            for section_id in section_ids:
                if section_id not in by_id:
                    raise NotFoundError(f"CV section with ID {section_id} not found")

            listed = list(dict.fromkeys(section_ids))
            omitted = sorted(
                (s for s in data.cv.sections if s.id not in listed),
                key=lambda s: s.sortOrder,
            )
            ordered = [by_id[section_id] for section_id in listed] + omitted
            for position, section in enumerate(ordered):
                section.sortOrder = position
            data.cv.sections = ordered

        logger.info("Reordered CV sections")
        return ordered

    def toggle_section_visibility(self, section_id: str) -> bool:
        """
        Flip a section's visibility.

        Returns:
            bool: The new visibility

        Raises:
            NotFoundError: If the section doesn't exist
        """
        with self.store.transaction() as data:
            section = _find_section(data, section_id)
            section.isVisible = not section.isVisible
            visible = section.isVisible
        logger.info("CV section %s is now %s", section_id, "visible" if visible else "hidden")
        return visible

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def create_item(self, section_id: str, item_data: Dict[str, Any]) -> str:
        """
        Validate an item against its section's variant and append it.

        Items get a fresh ``id``; skill categories are keyed by ``category``
        and project references by ``slug``.

        Args:
            section_id: Owning section
            item_data: Item fields

        Returns:
            str: Key of the new item

        Raises:
            NotFoundError: If the section (or a referenced project) doesn't exist
            ConflictError: If the item's key is already used in the section
            InvalidDataError: If the data doesn't fit the section's variant
        """
        with self.store.transaction() as data:
            section = _find_section(data, section_id)
            item_id = self._append_item(data, section, item_data)
        logger.info("Created item %s in CV section %s", item_id, section_id)
        return item_id

    def update_item(self, section_id: str, item_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Shallow-merge ``patch`` into an item.

        Known variants are re-validated; items of unknown shape are merged as is.

        Raises:
            NotFoundError: If the section or item doesn't exist
            ConflictError: If the patch changes the item's key to one in use
            InvalidDataError: If the merged item is invalid
        """
        with self.store.transaction() as data:
            section = _find_section(data, section_id)
            index = find_item_index(section.items, item_id)
            if index is None:
                raise NotFoundError(f"CV section item with ID {item_id} not found")

            current = section.items[index]
            merged = dict(current)
            merged.update({k: v for k, v in patch.items() if k not in PROTECTED_ITEM_KEYS})

            kind = item_kind(current)
            if kind is not None:
                merged = _validate_item(kind, merged)
                if kind == CVSectionType.PROJECTS:
                    self._ensure_project_exists(data, merged["slug"])

            new_key = resolve_item_id(merged)
            if new_key != item_id:
                _ensure_unique_key(section, new_key, ignore_index=index)
            section.items[index] = merged

        logger.info("Updated item %s in CV section %s", item_id, section_id)
        return merged

    def delete_item(self, section_id: str, item_id: str) -> None:
        """
        Remove an item from a section.

        Raises:
            NotFoundError: If the section or item doesn't exist
        """
        with self.store.transaction() as data:
            section = _find_section(data, section_id)
            index = find_item_index(section.items, item_id)
            if index is None:
                raise NotFoundError(f"CV section item with ID {item_id} not found")
            del section.items[index]
        logger.info("Deleted item %s from CV section %s", item_id, section_id)

    def reorder_items(
        self,
        section_id: str,
        item_ids: List[str],
        drop_omitted: bool = False
    ) -> List[Dict[str, Any]]:
        """
        Reorder a section's items.

        The listed items come first in the given order. Omitted items follow
        in their original relative order, or are removed when
        ``drop_omitted`` is set.

        Raises:
            NotFoundError: If the section doesn't exist or an ID doesn't resolve
        """
        with self.store.transaction() as data:
            section = _find_section(data, section_id)
            keys = [resolve_item_id(item) for item in section.items]
            positions: List[int] = []
            for item_id in item_ids:
                if item_id not in keys:
                    raise NotFoundError(
                        f"CV section item with ID {item_id} not found in section {section_id}"
                    )
                position = keys.index(item_id)
                if position not in positions:
                    positions.append(position)

            reordered = [section.items[p] for p in positions]
            if not drop_omitted:
                reordered.extend(
                    item for p, item in enumerate(section.items) if p not in positions
                )
            section.items = reordered

        logger.info("Reordered items of CV section %s", section_id)
        return reordered

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _append_item(self, data: PortfolioData, section: CVSection, item_data: Dict[str, Any]) -> str:
        kind = section.type
        item = _validate_item(kind, item_data)

        if kind == CVSectionType.SKILLS:
            item.pop("id", None)
            key = item["category"]
        elif kind == CVSectionType.PROJECTS:
            key = item["slug"]
            self._ensure_project_exists(data, key)
        else:
            key = str(uuid.uuid4())
            item["id"] = key
        _ensure_unique_key(section, key)

        section.items.append(item)
        return key

    @staticmethod
    def _ensure_project_exists(data: PortfolioData, slug: str) -> None:
        if not any(project.slug == slug for project in data.portfolio.projects):
            raise NotFoundError(f"Project with slug {slug} not found")
