"""FastAPI application serving the portfolio site, the CV and the admin API."""

import logging
from contextlib import asynccontextmanager
from io import BytesIO
from typing import Optional
from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles
from unfold import __version__
from unfold.config import AppSettings, get_settings
from unfold.dependencies import datastore_dependency, get_project_service, settings_dependency
from unfold.models.portfolio_models import SortOrder
from unfold.models.response_models import ErrorResponse, HealthResponse
from unfold.routes import admin, upload
from unfold.services.cv_generator import CVGenerator
from unfold.services.datastore import DataStore
from unfold.services.page_generator import PageGenerator
from unfold.services.pdf_generator import PDFGenerator
from unfold.services.portfolio_service import ProjectService
from unfold.utils.errors import (
    ConflictError,
    InvalidDataError,
    NotFoundError,
    PortfolioError,
    StorageError,
    UploadValidationError,
)
from unfold.utils.logging import setup_logging
from unfold.utils.template_helpers import cv_file_name, content_disposition

logger = logging.getLogger(__name__)

# Most specific class first
ERROR_STATUS_CODES = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UploadValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidDataError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_code_for(error: PortfolioError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the uploads directory exists."""
    settings = get_settings()
    setup_logging(settings.log_level)
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    logger.info(
        "Serving %s (admin mode %s)",
        settings.data_file,
        "on" if settings.admin_mode else "off",
    )
    yield


app = FastAPI(
    title="Unfold",
    description="""Personal portfolio site with an editable CV.

## Features

* **Landing page and portfolio**: public pages rendered from a single JSON document
* **Curriculum vitae**: on-screen CV and a printable PDF, built from ordered, typed sections
* **Admin API**: edit the profile, projects, vocabularies and every CV section and item
* **Uploads**: images stored under the public uploads directory

## Usage

1. Start with `UNFOLD_ADMIN_MODE=true` to enable the admin API
2. Edit content through `/api/admin/...` or the Streamlit console
3. Browse `/`, `/portfolio` and `/curriculum-vitae`""",
    version=__version__,
    lifespan=lifespan,
    tags_metadata=[
        {
            "name": "health",
            "description": "Health check endpoint"
        },
        {
            "name": "pages",
            "description": "Public HTML pages and the CV PDF"
        },
        {
            "name": "admin",
            "description": "Content editing, available in admin mode only"
        },
        {
            "name": "upload",
            "description": "Image uploads, available in admin mode only"
        }
    ]
)

app.include_router(admin.router)
app.include_router(upload.router)

_settings = get_settings()
app.mount(
    _settings.uploads_url_prefix,
    StaticFiles(directory=str(_settings.uploads_dir), check_dir=False),
    name="uploads",
)

# Initialize services
cv_generator = CVGenerator()
page_generator = PageGenerator()
pdf_generator = PDFGenerator(cv_generator)


@app.exception_handler(PortfolioError)
async def portfolio_error_handler(request: Request, exc: PortfolioError):
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    body = ErrorResponse(detail=exc.message, code=exc.code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    tags=["health"]
)
async def health():
    """
    Health check endpoint.

    Returns the health status of the service.
    """
    return HealthResponse(status="ok")


@app.get("/", response_class=HTMLResponse, summary="Landing page", tags=["pages"])
async def landing_page(
    store: DataStore = Depends(datastore_dependency),
    settings: AppSettings = Depends(settings_dependency)
):
    data = store.read()
    return page_generator.landing_page(data, admin_mode=settings.admin_mode)


@app.get("/portfolio", response_class=HTMLResponse, summary="Project list", tags=["pages"])
async def portfolio_page(
    sort: Optional[str] = Query(None, description="date_asc, date_desc, title_asc or title_desc"),
    technology: Optional[str] = Query(None, description="Only projects using this technology"),
    role: Optional[str] = Query(None, description="Only projects with this role"),
    store: DataStore = Depends(datastore_dependency),
    projects: ProjectService = Depends(get_project_service),
    settings: AppSettings = Depends(settings_dependency)
):
    """
    Render the portfolio.

    An unknown `sort` value falls back to the portfolio's default order.
    """
    try:
        sort_order = SortOrder(sort) if sort else None
    except ValueError:
        sort_order = None
    data = store.read()
    listed = projects.list_projects(sort_order, technology, role)
    return page_generator.portfolio_page(
        data,
        listed,
        sort_order=sort_order,
        technology=technology,
        role=role,
        admin_mode=settings.admin_mode,
    )


@app.get("/portfolio/{slug}", response_class=HTMLResponse, summary="Project page", tags=["pages"])
async def project_page(
    slug: str,
    store: DataStore = Depends(datastore_dependency),
    settings: AppSettings = Depends(settings_dependency)
):
    data = store.read()
    project = next((p for p in data.portfolio.projects if p.slug == slug), None)
    if project is None:
        html = page_generator.not_found_page(
            f"No project named {slug!r}.",
            profile=data.userProfile,
            admin_mode=settings.admin_mode,
        )
        return HTMLResponse(html, status_code=status.HTTP_404_NOT_FOUND)
    return page_generator.project_page(data, project, admin_mode=settings.admin_mode)


@app.get("/curriculum-vitae", response_class=HTMLResponse, summary="CV page", tags=["pages"])
async def cv_page(
    store: DataStore = Depends(datastore_dependency),
    settings: AppSettings = Depends(settings_dependency)
):
    data = store.read()
    return cv_generator.generate_html(data, admin_mode=settings.admin_mode)


@app.get(
    "/curriculum-vitae/pdf",
    response_class=StreamingResponse,
    status_code=status.HTTP_200_OK,
    summary="Download the CV as PDF",
    tags=["pages"],
    responses={
        200: {
            "description": "CV PDF file",
            "content": {
                "application/pdf": {
                    "schema": {
                        "type": "string",
                        "format": "binary"
                    }
                }
            }
        },
        500: {
            "description": "Internal server error",
            "model": ErrorResponse
        }
    }
)
async def cv_pdf(store: DataStore = Depends(datastore_dependency)):
    """
    Generate the CV PDF.

    **Returns:**
    - PDF file named `<name> - CV - <Month YYYY>.pdf`
    """
    data = store.read()
    try:
        pdf_bytes = pdf_generator.generate_pdf(data)
    except Exception as e:
        logger.error("Error generating CV PDF: %s", e)
        raise HTTPException(status_code=500, detail=f"Error generating CV: {str(e)}")

    filename = cv_file_name(data.userProfile.name)
    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(filename)}
    )


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run("unfold.main:app", host="0.0.0.0", port=8000, reload=False)
