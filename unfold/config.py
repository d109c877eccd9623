"""Application settings."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).parent
DEFAULT_SEED_FILE = PACKAGE_DIR / "data" / "seed.yaml"


class AppSettings(BaseSettings):
    """Site configuration, read from ``UNFOLD_*`` environment variables or ``.env``."""

    data_file: Path = Path("data") / "data.json"
    seed_file: Optional[Path] = DEFAULT_SEED_FILE
    uploads_dir: Path = Path("public") / "images" / "uploads"
    uploads_url_prefix: str = "/images/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    admin_mode: bool = False
    log_level: str = "INFO"

    class Config:
        env_prefix = "UNFOLD_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # .env may also carry the console's API_BASE_URL


# Singleton instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """
    Get or create the settings singleton.

    Returns:
        AppSettings: The application settings
    """
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings
