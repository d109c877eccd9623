"""Pydantic models for the CV aggregate and its section item variants."""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Type
from pydantic import BaseModel, Field


class CVSectionType(str, Enum):
    """Section types. Every type except CUSTOM may appear at most once in a CV."""

    EDUCATION = "education"
    WORK_EXPERIENCE = "work_experience"
    SKILLS = "skills"
    PROJECTS = "projects"
    PUBLICATIONS = "publications"
    AWARDS = "awards"
    CERTIFICATIONS = "certifications"
    VOLUNTEERING = "volunteering"
    LANGUAGES = "languages"
    CUSTOM = "custom"


DEFAULT_SECTION_TITLES: Dict[CVSectionType, str] = {
    CVSectionType.EDUCATION: "Education",
    CVSectionType.WORK_EXPERIENCE: "Professional Experience",
    CVSectionType.SKILLS: "Skills & Expertise",
    CVSectionType.PROJECTS: "Projects",
    CVSectionType.PUBLICATIONS: "Publications",
    CVSectionType.AWARDS: "Awards & Honors",
    CVSectionType.CERTIFICATIONS: "Certifications",
    CVSectionType.VOLUNTEERING: "Volunteer Experience",
    CVSectionType.LANGUAGES: "Languages",
}


class CVItem(BaseModel):
    """Base for section items. ``kind`` is the discriminant stored with every item."""

    class Config:
        populate_by_name = True
        extra = "allow"


class Education(CVItem):
    """Education entry."""

    kind: Literal["education"] = "education"
    id: Optional[str] = None
    degree: str
    institution: str
    location: str
    graduationDate: Optional[str] = None
    current: Optional[bool] = None
    details: List[str] = Field(default_factory=list)


class WorkExperience(CVItem):
    """Work experience entry."""

    kind: Literal["work_experience"] = "work_experience"
    id: Optional[str] = None
    jobTitle: str
    company: str
    companyUrl: Optional[str] = None
    location: str
    startDate: str
    endDate: Optional[str] = None
    current: Optional[bool] = None
    responsibilities: List[str]
    technologiesUsed: Optional[List[str]] = None


class SkillCategory(CVItem):
    """Skill category. Has no id, ``category`` is its key."""

    kind: Literal["skills"] = "skills"
    category: str
    items: List[str]


class Publication(CVItem):
    """Publication entry."""

    kind: Literal["publications"] = "publications"
    id: Optional[str] = None
    title: str
    authors: Optional[str] = None
    conferenceOrJournal: Optional[str] = None
    date: str
    url: Optional[str] = None


class Award(CVItem):
    """Award or honor."""

    kind: Literal["awards"] = "awards"
    id: Optional[str] = None
    name: str
    issuer: Optional[str] = None
    date: str
    description: Optional[str] = None


class Certification(CVItem):
    """Certification entry."""

    kind: Literal["certifications"] = "certifications"
    id: Optional[str] = None
    name: str
    issuer: str
    date: str
    expirationDate: Optional[str] = None
    credentialId: Optional[str] = None
    credentialUrl: Optional[str] = None


class VolunteerExperience(CVItem):
    """Volunteer experience entry."""

    kind: Literal["volunteering"] = "volunteering"
    id: Optional[str] = None
    organization: str
    role: str
    startDate: str
    endDate: str
    description: str
    location: Optional[str] = None


class Language(CVItem):
    """Spoken language and proficiency."""

    kind: Literal["languages"] = "languages"
    id: Optional[str] = None
    language: str
    proficiency: Literal["Native", "Fluent", "Intermediate", "Basic"]
    proofUrl: Optional[str] = None


class ProjectReference(CVItem):
    """Reference to a portfolio project by slug."""

    kind: Literal["projects"] = "projects"
    slug: str


class CustomCVItem(CVItem):
    """Free-form entry of a custom section."""

    kind: Literal["custom"] = "custom"
    id: Optional[str] = None
    title: str
    subtitle: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    details: Optional[List[str]] = None


ITEM_MODELS: Dict[CVSectionType, Type[CVItem]] = {
    CVSectionType.EDUCATION: Education,
    CVSectionType.WORK_EXPERIENCE: WorkExperience,
    CVSectionType.SKILLS: SkillCategory,
    CVSectionType.PROJECTS: ProjectReference,
    CVSectionType.PUBLICATIONS: Publication,
    CVSectionType.AWARDS: Award,
    CVSectionType.CERTIFICATIONS: Certification,
    CVSectionType.VOLUNTEERING: VolunteerExperience,
    CVSectionType.LANGUAGES: Language,
    CVSectionType.CUSTOM: CustomCVItem,
}


class ContactInformation(BaseModel):
    """CV contact block."""

    email: str
    phone: Optional[str] = None
    linkedinUrl: Optional[str] = None
    portfolioUrl: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class CVSection(BaseModel):
    """A titled, typed, orderable container of items.

    Items are kept as plain mappings so that shapes this code does not
    recognise survive a load/save cycle untouched.
    """

    id: str
    title: str
    type: CVSectionType
    items: List[Dict[str, Any]] = Field(default_factory=list)
    isVisible: bool = True
    sortOrder: int = 0

    class Config:
        populate_by_name = True
        extra = "allow"


class CV(BaseModel):
    """Complete CV model."""

    title: Optional[str] = None
    contactInformation: ContactInformation
    summary: str = ""
    sections: List[CVSection] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "allow"
