"""Pydantic models for the site document stored in the datastore."""

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from unfold.models.cv_models import CV

CURRENT_SCHEMA_VERSION = 2


class SortOrder(str, Enum):
    """Portfolio sort orders."""

    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"


PROJECT_STATUSES = ["Completed", "In Progress", "Planned", "On Hold"]


class SocialLink(BaseModel):
    """Social link shown in the site header."""

    id: str
    platformName: str
    url: str
    iconSlug: str = ""


class UserProfile(BaseModel):
    """Owner profile."""

    name: str
    tagline: str = ""
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    websiteUrl: str = ""
    profilePictureUrl: str = ""
    socialLinks: List[SocialLink] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "allow"


class SiteSettings(BaseModel):
    """Site settings, including the technology and role vocabularies."""

    publicResumeId: Optional[str] = None
    availableTechnologies: List[str] = Field(default_factory=list)
    availableRoles: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "allow"


class CallToAction(BaseModel):
    """Landing page button."""

    id: str
    text: str
    url: str
    style: Optional[str] = None


class LandingPage(BaseModel):
    """Landing page content."""

    greeting: str = ""
    mainHeadline: str = ""
    introductionParagraphs: List[str] = Field(default_factory=list)
    callToActions: List[CallToAction] = Field(default_factory=list)
    featuredProjectIds: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "allow"


class PortfolioDisplaySettings(BaseModel):
    """Portfolio page display options."""

    defaultSortOrder: Optional[SortOrder] = None
    showFilters: Optional[bool] = None


class Project(BaseModel):
    """Portfolio project, identified by its slug."""

    slug: str
    title: str
    subtitle: Optional[str] = None
    date: str
    status: str = "Completed"
    thumbnailImageUrl: str = ""
    headerImageUrl: str = ""
    shortDescription: str = ""
    longDescription: Any = Field(default_factory=dict)  # Rich-text JSON document
    technologies: List[str] = Field(default_factory=list)
    roles: List[str] = Field(default_factory=list)
    liveProjectUrl: Optional[str] = None
    sourceCodeUrl: Optional[str] = None
    keyFeatures: Optional[List[str]] = None
    galleryImageUrls: Optional[List[str]] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class Portfolio(BaseModel):
    """Portfolio model."""

    displaySettings: Optional[PortfolioDisplaySettings] = None
    projects: List[Project] = Field(default_factory=list)


class PortfolioData(BaseModel):
    """Complete site document."""

    schemaVersion: int = CURRENT_SCHEMA_VERSION
    userProfile: UserProfile
    settings: SiteSettings = Field(default_factory=SiteSettings)
    landingPage: LandingPage = Field(default_factory=LandingPage)
    portfolio: Portfolio = Field(default_factory=Portfolio)
    cv: CV

    class Config:
        populate_by_name = True
        extra = "allow"

    def to_document(self) -> Dict[str, Any]:
        """Return the JSON-ready document written to storage."""
        return self.model_dump(mode="json", exclude_none=True)
