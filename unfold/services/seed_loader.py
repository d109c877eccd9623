"""Service to load the initial site document from YAML."""

import os
import yaml
from pathlib import Path
from typing import Any, Dict


class SeedLoader:
    """Load the seed document used to initialise an empty datastore."""

    def __init__(self, seed_file: Path):
        """
        Initialize the seed loader.

        Args:
            seed_file: Path to the YAML seed document
        """
        self.seed_file = seed_file

    def load_seed(self) -> Dict[str, Any]:
        """
        Load the seed document.

        Returns:
            Dict[str, Any]: Raw document, not yet migrated or validated

        Raises:
            FileNotFoundError: If the seed file doesn't exist
            ValueError: If the YAML is invalid or empty
        """
        if not self.seed_file.exists():
            raise FileNotFoundError(f"Seed file not found: {self.seed_file}")

        try:
            with open(self.seed_file, "r", encoding="utf-8") as f:
                seed = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in {self.seed_file}: {e}") from e

        if not isinstance(seed, dict):
            raise ValueError(f"Seed file {self.seed_file} is empty")

        # Override contact details from environment variables if provided
        email_from_env = os.getenv("UNFOLD_OWNER_EMAIL")
        if email_from_env:
            seed.setdefault("userProfile", {})["email"] = email_from_env
            seed.setdefault("cv", {}).setdefault("contactInformation", {})["email"] = email_from_env
        phone_from_env = os.getenv("UNFOLD_OWNER_PHONE")
        if phone_from_env:
            seed.setdefault("userProfile", {})["phone"] = phone_from_env
            seed.setdefault("cv", {}).setdefault("contactInformation", {})["phone"] = phone_from_env

        return seed
