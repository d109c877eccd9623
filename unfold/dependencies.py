"""FastAPI dependency providers."""

from fastapi import Depends, HTTPException, status
from unfold.config import AppSettings, get_settings
from unfold.services.cv_service import CVService
from unfold.services.datastore import DataStore, get_datastore
from unfold.services.portfolio_service import ProjectService
from unfold.services.site_service import SiteService
from unfold.services.upload_service import ImageUploadService
from unfold.services.vocabulary_service import VocabularyService


def settings_dependency() -> AppSettings:
    return get_settings()


def datastore_dependency() -> DataStore:
    return get_datastore()


def require_admin(settings: AppSettings = Depends(settings_dependency)) -> None:
    """Reject the request unless the site runs in admin mode."""
    if not settings.admin_mode:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin mode is disabled"
        )


def get_cv_service(store: DataStore = Depends(datastore_dependency)) -> CVService:
    return CVService(store)


def get_project_service(store: DataStore = Depends(datastore_dependency)) -> ProjectService:
    return ProjectService(store)


def get_vocabulary_service(store: DataStore = Depends(datastore_dependency)) -> VocabularyService:
    return VocabularyService(store)


def get_site_service(store: DataStore = Depends(datastore_dependency)) -> SiteService:
    return SiteService(store)


def get_upload_service(settings: AppSettings = Depends(settings_dependency)) -> ImageUploadService:
    return ImageUploadService(
        settings.uploads_dir,
        url_prefix=settings.uploads_url_prefix,
        max_bytes=settings.max_upload_bytes,
    )
