"""Admin API: editing the site document."""

from enum import Enum
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Body, Depends, Query, Response, status
from unfold.dependencies import (
    get_cv_service,
    get_project_service,
    get_site_service,
    get_vocabulary_service,
    require_admin,
)
from unfold.models.cv_models import CV, CVSection
from unfold.models.portfolio_models import (
    LandingPage,
    Project,
    SiteSettings,
    SortOrder,
    UserProfile,
)
from unfold.models.request_models import (
    CallToActionRequest,
    OrderRequest,
    SectionCreateRequest,
    VocabularyEntryRequest,
    VocabularyRenameRequest,
)
from unfold.models.response_models import (
    ErrorResponse,
    IdResponse,
    SlugResponse,
    VisibilityResponse,
)
from unfold.services.cv_service import CVService
from unfold.services.portfolio_service import ProjectService
from unfold.services.site_service import SiteService
from unfold.services.vocabulary_service import VocabularyKind, VocabularyService

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
    responses={
        403: {"description": "Admin mode is disabled", "model": ErrorResponse},
        500: {"description": "The datastore could not be read or written", "model": ErrorResponse},
    },
)

NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}
CONFLICT = {409: {"description": "Uniqueness rule broken", "model": ErrorResponse}}
INVALID = {422: {"description": "Invalid data", "model": ErrorResponse}}


class VocabularyPath(str, Enum):
    """URL names of the vocabularies."""

    TECHNOLOGIES = "technologies"
    ROLES = "roles"


VOCABULARY_KINDS = {
    VocabularyPath.TECHNOLOGIES: VocabularyKind.TECHNOLOGY,
    VocabularyPath.ROLES: VocabularyKind.ROLE,
}


# ----------------------------------------------------------------------
# Site document
# ----------------------------------------------------------------------

@router.get("/data", summary="Whole site document")
async def get_data(site: SiteService = Depends(get_site_service)) -> Dict[str, Any]:
    """Return the stored document, as written to the data file."""
    return site.get_all().to_document()


@router.get("/profile", response_model=UserProfile, summary="Owner profile")
async def get_profile(site: SiteService = Depends(get_site_service)):
    return site.get_user_profile()


@router.patch("/profile", response_model=UserProfile, summary="Update owner profile", responses=INVALID)
async def update_profile(
    patch: Dict[str, Any] = Body(...),
    site: SiteService = Depends(get_site_service)
):
    return site.update_user_profile(patch)


@router.get("/settings", response_model=SiteSettings, summary="Site settings")
async def get_site_settings(site: SiteService = Depends(get_site_service)):
    return site.get_settings()


@router.patch("/settings", response_model=SiteSettings, summary="Update site settings", responses=INVALID)
async def update_site_settings(
    patch: Dict[str, Any] = Body(...),
    site: SiteService = Depends(get_site_service)
):
    return site.update_settings(patch)


@router.get("/landing-page", response_model=LandingPage, summary="Landing page content")
async def get_landing_page(site: SiteService = Depends(get_site_service)):
    return site.get_landing_page()


@router.patch("/landing-page", response_model=LandingPage, summary="Update landing page", responses=INVALID)
async def update_landing_page(
    patch: Dict[str, Any] = Body(...),
    site: SiteService = Depends(get_site_service)
):
    return site.update_landing_page(patch)


@router.post(
    "/landing-page/call-to-actions",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a call to action",
)
async def create_call_to_action(
    request: CallToActionRequest,
    site: SiteService = Depends(get_site_service)
):
    cta_id = site.create_call_to_action(request.text, request.url, request.style)
    return IdResponse(id=cta_id)


@router.delete(
    "/landing-page/call-to-actions/{cta_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a call to action",
    responses=NOT_FOUND,
)
async def delete_call_to_action(cta_id: str, site: SiteService = Depends(get_site_service)):
    site.delete_call_to_action(cta_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Projects
# ----------------------------------------------------------------------

@router.get("/projects", response_model=List[Project], summary="List projects")
async def list_projects(
    sort: Optional[SortOrder] = Query(None, description="Sort order; defaults to the portfolio setting"),
    technology: Optional[str] = Query(None, description="Only projects using this technology"),
    role: Optional[str] = Query(None, description="Only projects with this role"),
    projects: ProjectService = Depends(get_project_service)
):
    return projects.list_projects(sort, technology, role)


@router.post(
    "/projects",
    response_model=SlugResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    description="The slug is derived from the title and made unique with a numeric suffix.",
    responses=INVALID,
)
async def create_project(
    project: Dict[str, Any] = Body(...),
    projects: ProjectService = Depends(get_project_service)
):
    return SlugResponse(slug=projects.create_project(project))


@router.get("/projects/{slug}", response_model=Project, summary="Get a project", responses=NOT_FOUND)
async def get_project(slug: str, projects: ProjectService = Depends(get_project_service)):
    return projects.get_project(slug)


@router.patch(
    "/projects/{slug}",
    response_model=Project,
    summary="Update a project",
    responses={**NOT_FOUND, **INVALID},
)
async def update_project(
    slug: str,
    patch: Dict[str, Any] = Body(...),
    projects: ProjectService = Depends(get_project_service)
):
    return projects.update_project(slug, patch)


@router.delete(
    "/projects/{slug}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project",
    description="Also removes the project from featured projects and from the CV.",
    responses=NOT_FOUND,
)
async def delete_project(slug: str, projects: ProjectService = Depends(get_project_service)):
    projects.delete_project(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# CV
# ----------------------------------------------------------------------

@router.get("/cv", response_model=CV, summary="CV with sections in display order")
async def get_cv(cv: CVService = Depends(get_cv_service)):
    return cv.get_cv()


@router.patch("/cv", response_model=CV, summary="Update CV fields", responses=INVALID)
async def update_cv(patch: Dict[str, Any] = Body(...), cv: CVService = Depends(get_cv_service)):
    return cv.update_cv(patch)


@router.get("/cv/sections", response_model=List[CVSection], summary="List CV sections")
async def list_sections(
    visible_only: bool = Query(False, description="Only visible sections"),
    cv: CVService = Depends(get_cv_service)
):
    return cv.list_sections(visible_only)


@router.post(
    "/cv/sections",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a CV section",
    responses={**CONFLICT, **INVALID},
)
async def create_section(request: SectionCreateRequest, cv: CVService = Depends(get_cv_service)):
    """
    Create a section at the end of the CV.

    Without a title, non-custom sections get the stock title of their type.
    """
    if request.title:
        section_id = cv.create_section(
            request.title, request.type, request.items, request.isVisible
        )
    else:
        section_id = cv.create_default_section(request.type, request.items, request.isVisible)
    return IdResponse(id=section_id)


@router.put(
    "/cv/sections/order",
    response_model=List[CVSection],
    summary="Reorder CV sections",
    responses=NOT_FOUND,
)
async def reorder_sections(request: OrderRequest, cv: CVService = Depends(get_cv_service)):
    return cv.reorder_sections(request.ids)


@router.get(
    "/cv/sections/{section_id}",
    response_model=CVSection,
    summary="Get a CV section",
    responses=NOT_FOUND,
)
async def get_section(section_id: str, cv: CVService = Depends(get_cv_service)):
    return cv.get_section(section_id)


@router.patch(
    "/cv/sections/{section_id}",
    response_model=CVSection,
    summary="Update a CV section",
    responses={**NOT_FOUND, **CONFLICT, **INVALID},
)
async def update_section(
    section_id: str,
    patch: Dict[str, Any] = Body(...),
    cv: CVService = Depends(get_cv_service)
):
    return cv.update_section(section_id, patch)


@router.delete(
    "/cv/sections/{section_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a CV section and its items",
    responses=NOT_FOUND,
)
async def delete_section(section_id: str, cv: CVService = Depends(get_cv_service)):
    cv.delete_section(section_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/cv/sections/{section_id}/visibility",
    response_model=VisibilityResponse,
    summary="Toggle section visibility",
    responses=NOT_FOUND,
)
async def toggle_section_visibility(section_id: str, cv: CVService = Depends(get_cv_service)):
    return VisibilityResponse(isVisible=cv.toggle_section_visibility(section_id))


@router.post(
    "/cv/sections/{section_id}/items",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an item to a section",
    description="Skill categories are keyed by category and project references by slug.",
    responses={**NOT_FOUND, **CONFLICT, **INVALID},
)
async def create_item(
    section_id: str,
    item: Dict[str, Any] = Body(...),
    cv: CVService = Depends(get_cv_service)
):
    return IdResponse(id=cv.create_item(section_id, item))


@router.put(
    "/cv/sections/{section_id}/items/order",
    response_model=List[Dict[str, Any]],
    summary="Reorder the items of a section",
    responses=NOT_FOUND,
)
async def reorder_items(
    section_id: str,
    request: OrderRequest,
    cv: CVService = Depends(get_cv_service)
):
    return cv.reorder_items(section_id, request.ids, drop_omitted=request.dropOmitted)


@router.patch(
    "/cv/sections/{section_id}/items/{item_id:path}",
    response_model=Dict[str, Any],
    summary="Update an item",
    responses={**NOT_FOUND, **CONFLICT, **INVALID},
)
async def update_item(
    section_id: str,
    item_id: str,
    patch: Dict[str, Any] = Body(...),
    cv: CVService = Depends(get_cv_service)
):
    return cv.update_item(section_id, item_id, patch)


@router.delete(
    "/cv/sections/{section_id}/items/{item_id:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an item",
    responses=NOT_FOUND,
)
async def delete_item(section_id: str, item_id: str, cv: CVService = Depends(get_cv_service)):
    cv.delete_item(section_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Vocabularies
# ----------------------------------------------------------------------

@router.get("/{vocabulary}", response_model=List[str], summary="List technologies or roles")
async def list_vocabulary(
    vocabulary: VocabularyPath,
    vocabularies: VocabularyService = Depends(get_vocabulary_service)
):
    return vocabularies.list_entries(VOCABULARY_KINDS[vocabulary])


@router.post(
    "/{vocabulary}",
    response_model=List[str],
    status_code=status.HTTP_201_CREATED,
    summary="Add a technology or role",
    responses={**CONFLICT, **INVALID},
)
async def add_vocabulary_entry(
    vocabulary: VocabularyPath,
    request: VocabularyEntryRequest,
    vocabularies: VocabularyService = Depends(get_vocabulary_service)
):
    kind = VOCABULARY_KINDS[vocabulary]
    vocabularies.add_entry(kind, request.name)
    return vocabularies.list_entries(kind)



@router.put(
    "/{vocabulary}",
    response_model=List[str],
    summary="Rename a technology or role",
    description="Projects tagged with the old name are retagged.",
    responses={**NOT_FOUND, **CONFLICT, **INVALID},
)
async def rename_vocabulary_entry(
    vocabulary: VocabularyPath,
    request: VocabularyRenameRequest,
    vocabularies: VocabularyService = Depends(get_vocabulary_service)
):
    """
    Rename an entry.

    Names are free text (``C#``, ``UI/UX``), so they travel in the body
    rather than as a path segment.
    """
    kind = VOCABULARY_KINDS[vocabulary]
    vocabularies.rename_entry(kind, request.name, request.newName)
    return vocabularies.list_entries(kind)


@router.delete(
    "/{vocabulary}",
    response_model=List[str],
    summary="Remove a technology or role",
    description="Removing an entry that doesn't exist is not an error.",
)
async def remove_vocabulary_entry(
    vocabulary: VocabularyPath,
    name: str = Query(..., description="Entry to remove"),
    vocabularies: VocabularyService = Depends(get_vocabulary_service)
):
    kind = VOCABULARY_KINDS[vocabulary]
    vocabularies.remove_entry(kind, name)
    return vocabularies.list_entries(kind)
