"""Classification and identification of CV section items.

Items are stored as plain mappings. Items written by this code carry a
``kind`` tag naming their variant; older items do not, so their variant is
inferred from which keys are present. The structural rules are checked in a
fixed order because several variants share key names (``title``, ``name``,
``date``):

1. ``degree`` + ``institution``                         -> education
2. ``jobTitle`` + ``company`` + ``responsibilities``    -> work_experience
3. ``category`` + ``items``                             -> skills
4. ``title`` + ``authors``                              -> publications
5. ``name`` + ``issuer`` + ``date`` + a credential key  -> certifications
6. ``name`` + ``issuer``                                -> awards
7. ``language`` + ``proficiency``                       -> languages
8. ``organization`` + ``role`` + ``description``        -> volunteering
9. ``slug``                                             -> projects
10. ``title`` without ``degree``/``jobTitle``           -> custom

A certification is only told apart from an award by its credential keys
(``expirationDate``, ``credentialId``, ``credentialUrl``). Tagged items never
hit that ambiguity.
"""

import uuid
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple
from pydantic import ValidationError
from unfold.models.cv_models import ITEM_MODELS, CVItem, CVSectionType

CERTIFICATION_ONLY_KEYS = ("expirationDate", "credentialId", "credentialUrl")


def _has(item: Mapping[str, Any], *keys: str) -> bool:
    return all(key in item for key in keys)


def is_education_item(item: Mapping[str, Any]) -> bool:
    return _has(item, "degree", "institution")


def is_work_experience_item(item: Mapping[str, Any]) -> bool:
    return _has(item, "jobTitle", "company", "responsibilities")


def is_skill_category_item(item: Mapping[str, Any]) -> bool:
    return _has(item, "category", "items")


def is_publication_item(item: Mapping[str, Any]) -> bool:
    return _has(item, "title", "authors")


def is_certification_item(item: Mapping[str, Any]) -> bool:
    return _has(item, "name", "issuer", "date") and any(
        key in item for key in CERTIFICATION_ONLY_KEYS
    )


def is_award_item(item: Mapping[str, Any]) -> bool:
    return _has(item, "name", "issuer")


def is_language_item(item: Mapping[str, Any]) -> bool:
    return _has(item, "language", "proficiency")


def is_volunteer_experience_item(item: Mapping[str, Any]) -> bool:
    return _has(item, "organization", "role", "description")


def is_project_reference_item(item: Mapping[str, Any]) -> bool:
    return "slug" in item


def is_custom_item(item: Mapping[str, Any]) -> bool:
    return "title" in item and "degree" not in item and "jobTitle" not in item


STRUCTURAL_RULES: Sequence[Tuple[CVSectionType, Callable[[Mapping[str, Any]], bool]]] = (
    (CVSectionType.EDUCATION, is_education_item),
    (CVSectionType.WORK_EXPERIENCE, is_work_experience_item),
    (CVSectionType.SKILLS, is_skill_category_item),
    (CVSectionType.PUBLICATIONS, is_publication_item),
    (CVSectionType.CERTIFICATIONS, is_certification_item),
    (CVSectionType.AWARDS, is_award_item),
    (CVSectionType.LANGUAGES, is_language_item),
    (CVSectionType.VOLUNTEERING, is_volunteer_experience_item),
    (CVSectionType.PROJECTS, is_project_reference_item),
    (CVSectionType.CUSTOM, is_custom_item),
)


def detect_item_kind(item: Any) -> Optional[CVSectionType]:
    """
    Infer an item's variant from the keys it carries.

    Ignores any ``kind`` tag and never looks at the owning section.

    Args:
        item: Stored item

    Returns:
        Optional[CVSectionType]: The variant, or None if no rule matches
    """
    if not isinstance(item, Mapping):
        return None
    for kind, predicate in STRUCTURAL_RULES:
        if predicate(item):
            return kind
    return None


def item_kind(item: Any) -> Optional[CVSectionType]:
    """
    Return an item's variant, preferring its ``kind`` tag.

    Args:
        item: Stored item

    Returns:
        Optional[CVSectionType]: The variant, or None for unknown items
    """
    if not isinstance(item, Mapping):
        return None
    tag = item.get("kind")
    if tag is not None:
        try:
            return CVSectionType(tag)
        except ValueError:
            pass
    return detect_item_kind(item)


def parse_item(item: Any) -> Optional[CVItem]:
    """
    Build the typed model for an item.

    Returns:
        Optional[CVItem]: The model, or None if the item is unknown or does
        not satisfy its variant's required fields
    """
    kind = item_kind(item)
    if kind is None:
        return None
    data = dict(item)
    data["kind"] = kind.value
    try:
        return ITEM_MODELS[kind].model_validate(data)
    except ValidationError:
        return None


def resolve_item_id(item: Mapping[str, Any]) -> str:
    """
    Return the key used to target an item: ``id``, then ``slug``, then
    ``category``. Items with none of these get a fresh random key, so they
    cannot be targeted across reloads.
    """
    for key in ("id", "slug", "category"):
        value = item.get(key)
        if value:
            return str(value)
    return str(uuid.uuid4())


def find_item_index(items: List[Mapping[str, Any]], item_id: str) -> Optional[int]:
    """Return the index of the first item whose key resolves to ``item_id``."""
    for index, item in enumerate(items):
        if resolve_item_id(item) == item_id:
            return index
    return None
