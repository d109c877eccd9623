"""Response models for API endpoints."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str = Field(
        ...,
        description="Error message describing what went wrong",
        example="CV section with ID 123 not found"
    )
    code: str = Field(
        "error",
        description="Machine-readable error kind",
        example="not_found"
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(
        ...,
        description="Service status",
        example="ok"
    )


class IdResponse(BaseModel):
    """ID of a created section, item or call to action."""

    id: str = Field(..., description="Identifier of the new entry", example="section-work")


class SlugResponse(BaseModel):
    """Slug of a created project."""

    slug: str = Field(..., description="Slug of the new project", example="metrics-dashboard")


class VisibilityResponse(BaseModel):
    """Visibility of a section after toggling it."""

    isVisible: bool = Field(..., description="New visibility of the section", example=False)


class UploadResponse(BaseModel):
    """Successful image upload."""

    success: bool = Field(True, description="Always true for a stored upload")
    path: str = Field(
        ...,
        description="Public path of the stored image",
        example="/images/uploads/1718000000000-photo.png"
    )
    fileName: str = Field(
        ...,
        description="Stored file name",
        example="1718000000000-photo.png"
    )
