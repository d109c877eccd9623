"""Request models for API endpoints."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from unfold.models.cv_models import CVSectionType


class SectionCreateRequest(BaseModel):
    """Request model for creating a CV section."""

    type: CVSectionType = Field(
        ...,
        description="Section type. Every type except custom may appear once per CV.",
        example="education"
    )
    title: Optional[str] = Field(
        None,
        description="Section title. Defaults to the stock title of the type; required for custom sections.",
        example="Education"
    )
    isVisible: bool = Field(
        True,
        description="Whether the section is shown on the public CV"
    )
    items: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Initial items, validated against the section type"
    )


class OrderRequest(BaseModel):
    """Request model for reordering sections or items."""

    ids: List[str] = Field(
        ...,
        description="IDs in the desired order. Omitted entries keep their relative order after the listed ones.",
        example=["section-work", "section-education"]
    )
    dropOmitted: bool = Field(
        False,
        description="Remove items left out of `ids` instead of keeping them (items only)"
    )


class VocabularyEntryRequest(BaseModel):
    """Request model for adding a technology or role."""

    name: str = Field(
        ...,
        description="Entry name; compared case-insensitively",
        example="Python"
    )


class VocabularyRenameRequest(BaseModel):
    """Request model for renaming a technology or role."""

    name: str = Field(
        ...,
        description="Current entry name",
        example="Python"
    )
    newName: str = Field(
        ...,
        description="New entry name. Projects tagged with the old name are retagged.",
        example="Python 3"
    )


class CallToActionRequest(BaseModel):
    """Request model for adding a landing page call to action."""

    text: str = Field(..., description="Button label", example="See my work")
    url: str = Field(..., description="Button target", example="/portfolio")
    style: Optional[str] = Field(None, description="Button style", example="primary")
