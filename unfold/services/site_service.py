"""Service for site-wide content: profile, settings and landing page."""

import logging
import uuid
from typing import Any, Dict, Optional
from pydantic import BaseModel, ValidationError
from unfold.models.portfolio_models import (
    CallToAction,
    LandingPage,
    PortfolioData,
    SiteSettings,
    UserProfile,
)
from unfold.services.datastore import DataStore
from unfold.utils.errors import InvalidDataError, NotFoundError

logger = logging.getLogger(__name__)


def _merge(current: BaseModel, patch: Dict[str, Any], label: str) -> BaseModel:
    merged = current.model_dump(mode="json", exclude_none=True)
    merged.update(patch)
    try:
        return type(current).model_validate(merged)
    except ValidationError as e:
        raise InvalidDataError(f"Invalid {label}: {e}") from e


class SiteService:
    """Read and update the profile, settings and landing page."""

    def __init__(self, store: DataStore):
        """
        Initialize the site service.

        Args:
            store: Datastore holding the site document
        """
        self.store = store

    def get_all(self) -> PortfolioData:
        """Return the whole site document."""
        return self.store.read()

    def get_user_profile(self) -> UserProfile:
        return self.store.read().userProfile

    def update_user_profile(self, profile_data: Dict[str, Any]) -> UserProfile:
        """
        Shallow-merge ``profile_data`` into the user profile.

        Raises:
            InvalidDataError: If the profile is invalid
        """
        with self.store.transaction() as data:
            profile = _merge(data.userProfile, profile_data, "user profile")
            data.userProfile = profile
        logger.info("Updated user profile")
        return profile

    def get_settings(self) -> SiteSettings:
        return self.store.read().settings

    def update_settings(self, settings_data: Dict[str, Any]) -> SiteSettings:
        """
        Shallow-merge ``settings_data`` into the site settings.

        Raises:
            InvalidDataError: If the settings are invalid
        """
        with self.store.transaction() as data:
            settings = _merge(data.settings, settings_data, "settings")
            data.settings = settings
        logger.info("Updated settings")
        return settings

    def get_landing_page(self) -> LandingPage:
        return self.store.read().landingPage

    def update_landing_page(self, landing_data: Dict[str, Any]) -> LandingPage:
        """
        Shallow-merge ``landing_data`` into the landing page.

        Raises:
            InvalidDataError: If the landing page is invalid
        """
        with self.store.transaction() as data:
            landing = _merge(data.landingPage, landing_data, "landing page")
            data.landingPage = landing
        logger.info("Updated landing page")
        return landing

    def create_call_to_action(self, text: str, url: str, style: Optional[str] = None) -> str:
        """
        Append a call to action to the landing page.

        Returns:
            str: ID of the new call to action
        """
        cta = CallToAction(id=str(uuid.uuid4()), text=text, url=url, style=style)
        with self.store.transaction() as data:
            data.landingPage.callToActions.append(cta)
        logger.info("Created call to action %s", cta.id)
        return cta.id

    def delete_call_to_action(self, cta_id: str) -> None:
        """
        Remove a call to action from the landing page.

        Raises:
            NotFoundError: If no call to action has this ID
        """
        with self.store.transaction() as data:
            ctas = data.landingPage.callToActions
            index = next((i for i, cta in enumerate(ctas) if cta.id == cta_id), None)
            if index is None:
                raise NotFoundError(f"Call to action with ID {cta_id} not found")
            del ctas[index]
        logger.info("Deleted call to action %s", cta_id)
