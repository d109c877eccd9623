"""Versioned migration of the stored site document.

Version history:

- 0: fixed-field CV (``education``, ``workExperience``, ``skills`` ... arrays)
- 1: ``cv.sections`` list of typed sections with untagged items
- 2: every recognised item carries a ``kind`` tag
"""

import copy
import logging
import uuid
from typing import Any, Dict, List, Tuple
from unfold.models.cv_models import DEFAULT_SECTION_TITLES, CVSectionType
from unfold.models.portfolio_models import CURRENT_SCHEMA_VERSION
from unfold.services.item_dispatch import detect_item_kind
from unfold.utils.errors import SchemaVersionError

logger = logging.getLogger(__name__)

# Fixed-field CV arrays, in the order their sections are created
LEGACY_CV_FIELDS: List[Tuple[str, CVSectionType]] = [
    ("education", CVSectionType.EDUCATION),
    ("workExperience", CVSectionType.WORK_EXPERIENCE),
    ("skills", CVSectionType.SKILLS),
    ("publications", CVSectionType.PUBLICATIONS),
    ("awardsAndHonors", CVSectionType.AWARDS),
    ("certifications", CVSectionType.CERTIFICATIONS),
    ("volunteering", CVSectionType.VOLUNTEERING),
    ("languages", CVSectionType.LANGUAGES),
    ("projects", CVSectionType.PROJECTS),
]


def detect_schema_version(document: Dict[str, Any]) -> int:
    """Return the document's schema version, inferring it for unversioned documents."""
    version = document.get("schemaVersion")
    if isinstance(version, int):
        return version
    cv = document.get("cv") or {}
    if isinstance(cv.get("sections"), list):
        return 1
    return 0


def _migrate_v0_to_v1(document: Dict[str, Any]) -> None:
    old_cv = document.get("cv") or {}
    sections = []
    for field, section_type in LEGACY_CV_FIELDS:
        entries = old_cv.get(field) or []
        if not entries:
            continue
        if section_type == CVSectionType.PROJECTS:
            # The legacy CV listed project slugs rather than project records
            entries = [
                {"slug": entry} if isinstance(entry, str) else entry
                for entry in entries
            ]
        sections.append({
            "id": str(uuid.uuid4()),
            "title": DEFAULT_SECTION_TITLES[section_type],
            "type": section_type.value,
            "items": list(entries),
            "isVisible": True,
            "sortOrder": len(sections),
        })

    new_cv = {
        "title": old_cv.get("title") or "Curriculum Vitae",
        "contactInformation": old_cv.get("contactInformation") or {"email": ""},
        "summary": old_cv.get("summary") or "",
        "sections": sections,
    }
    document["cv"] = new_cv
    logger.info("Migrated fixed-field CV into %d sections", len(sections))


def _migrate_v1_to_v2(document: Dict[str, Any]) -> None:
    sections = document["cv"].get("sections") or []
    for position, section in enumerate(sections):
        section.setdefault("items", [])
        section.setdefault("isVisible", True)
        section.setdefault("sortOrder", position)
        try:
            section_type = CVSectionType(section.get("type"))
        except ValueError:
            section_type = CVSectionType.CUSTOM
        for item in section["items"]:
            if not isinstance(item, dict) or "kind" in item:
                continue
            if section_type != CVSectionType.CUSTOM:
                item["kind"] = section_type.value
            else:
                detected = detect_item_kind(item)
                if detected is not None:
                    item["kind"] = detected.value


MIGRATIONS = {
    0: _migrate_v0_to_v1,
    1: _migrate_v1_to_v2,
}


def migrate_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Bring a stored document up to the current schema version.

    The input is not modified.

    Args:
        document: Raw document as read from storage

    Returns:
        Dict[str, Any]: Document at ``CURRENT_SCHEMA_VERSION``

    Raises:
        SchemaVersionError: If the document is newer than this code supports
    """
    migrated = copy.deepcopy(document)
    version = detect_schema_version(migrated)
    if version > CURRENT_SCHEMA_VERSION:
        raise SchemaVersionError(
            f"Stored document has schema version {version}, "
            f"newest supported is {CURRENT_SCHEMA_VERSION}"
        )
    while version < CURRENT_SCHEMA_VERSION:
        MIGRATIONS[version](migrated)
        version += 1
    migrated["schemaVersion"] = CURRENT_SCHEMA_VERSION
    return migrated
