"""Tests for item classification and identification."""

from unfold.models.cv_models import CVSectionType, Certification, Education
from unfold.services.item_dispatch import (
    detect_item_kind,
    find_item_index,
    item_kind,
    parse_item,
    resolve_item_id,
)


def test_detect_education_and_work_experience():
    """Structural rules recognise the main variants."""
    education = {"degree": "BSc", "institution": "Uni", "location": "Town"}
    work = {"jobTitle": "Dev", "company": "Acme", "responsibilities": []}

    assert detect_item_kind(education) == CVSectionType.EDUCATION
    assert detect_item_kind(work) == CVSectionType.WORK_EXPERIENCE


def test_certification_is_told_apart_from_award_by_credential_keys():
    """Untagged awards and certifications differ only by credential keys."""
    award = {"name": "Best Paper", "issuer": "ACM", "date": "2020"}
    certification = dict(award, credentialId="ABC-123")

    assert detect_item_kind(award) == CVSectionType.AWARDS
    assert detect_item_kind(certification) == CVSectionType.CERTIFICATIONS


def test_tag_takes_precedence_over_structure():
    """A stored kind tag wins over the structural guess."""
    tagged_award = {
        "kind": "awards",
        "name": "Prize",
        "issuer": "Board",
        "date": "2021",
        "credentialUrl": "https://example.com/c",
    }

    assert detect_item_kind(tagged_award) == CVSectionType.CERTIFICATIONS
    assert item_kind(tagged_award) == CVSectionType.AWARDS


def test_unknown_tag_falls_back_to_structure():
    item = {"kind": "mystery", "language": "French", "proficiency": "Basic"}
    assert item_kind(item) == CVSectionType.LANGUAGES


def test_publication_wins_over_custom():
    """Publications and custom items both have a title; rule order decides."""
    assert detect_item_kind({"title": "Paper", "authors": "A. B."}) == CVSectionType.PUBLICATIONS
    assert detect_item_kind({"title": "Side note"}) == CVSectionType.CUSTOM


def test_unrecognised_items():
    assert detect_item_kind({}) is None
    assert detect_item_kind({"foo": "bar"}) is None
    assert item_kind("not a mapping") is None


def test_parse_item_builds_typed_model():
    item = {"degree": "BSc", "institution": "Uni", "location": "Town"}
    model = parse_item(item)

    assert isinstance(model, Education)
    assert model.kind == "education"
    assert model.degree == "BSc"


def test_parse_item_keeps_extra_fields():
    item = {
        "kind": "certifications",
        "name": "CKA",
        "issuer": "CNCF",
        "date": "2022",
        "badgeColor": "blue",
    }
    model = parse_item(item)

    assert isinstance(model, Certification)
    assert model.model_dump()["badgeColor"] == "blue"


def test_parse_item_returns_none_when_required_fields_missing():
    assert parse_item({"kind": "education", "degree": "BSc"}) is None
    assert parse_item({"unknown": True}) is None


def test_resolve_item_id_order():
    """id wins over slug, slug over category."""
    assert resolve_item_id({"id": "a", "slug": "b", "category": "c"}) == "a"
    assert resolve_item_id({"slug": "b", "category": "c"}) == "b"
    assert resolve_item_id({"category": "c"}) == "c"


def test_resolve_item_id_generates_random_key():
    first = resolve_item_id({"title": "x"})
    second = resolve_item_id({"title": "x"})

    assert len(first) == 36
    assert first != second


def test_find_item_index():
    items = [{"id": "one"}, {"category": "Tools"}, {"slug": "alpha"}]

    assert find_item_index(items, "Tools") == 1
    assert find_item_index(items, "alpha") == 2
    assert find_item_index(items, "missing") is None
