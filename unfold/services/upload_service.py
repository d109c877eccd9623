"""Service for storing uploaded images."""

import logging
import re
import time
from pathlib import Path
from typing import Optional
from pydantic import BaseModel
from unfold.utils.errors import StorageError, UploadValidationError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_EXTENSIONS = ("jpg", "jpeg", "png", "webp", "svg", "gif")


class StoredImage(BaseModel):
    """Result of a successful upload."""

    path: str
    fileName: str


def sanitize_filename(filename: str) -> str:
    """Replace every character other than letters, digits, dots and hyphens with ``_``."""
    return re.sub(r"[^a-zA-Z0-9.-]", "_", filename)


class ImageUploadService:
    """Validate and store images under the public uploads directory."""

    def __init__(
        self,
        uploads_dir: Path,
        url_prefix: str = "/images/uploads",
        max_bytes: int = MAX_UPLOAD_BYTES
    ):
        """
        Initialize the upload service.

        Args:
            uploads_dir: Directory images are written to
            url_prefix: Public URL prefix the directory is served under
            max_bytes: Largest accepted file size
        """
        self.uploads_dir = Path(uploads_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    def validate(self, filename: Optional[str], content_type: Optional[str], size: int) -> None:
        """
        Check an upload before anything is written.

        Raises:
            UploadValidationError: With the message shown to the client
        """
        if not filename:
            raise UploadValidationError("No file provided")
        if not (content_type or "").startswith("image/"):
            raise UploadValidationError("File must be an image")
        if size > self.max_bytes:
            raise UploadValidationError(
                f"File size must be less than {self.max_bytes // (1024 * 1024)}MB"
            )
        extension = filename.rsplit(".", 1)[-1].lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise UploadValidationError("Invalid file format")

    def save_image(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> StoredImage:
        """
        Validate and store an image.

        Args:
            filename: Client-side file name
            content_type: Declared MIME type
            data: File content

        Returns:
            StoredImage: Public path and stored file name

        Raises:
            UploadValidationError: If the upload is rejected
            StorageError: If the file can't be written
        """
        try:
            self.validate(filename, content_type, len(data))
        except UploadValidationError as e:
            logger.warning("Rejected upload %r: %s", filename, e.message)
            raise

        timestamp = int(time.time() * 1000)
        file_name = f"{timestamp}-{sanitize_filename(filename)}"
        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            (self.uploads_dir / file_name).write_bytes(data)
        except OSError as e:
            logger.error("Upload error: %s", e)
            raise StorageError("Failed to store uploaded file") from e

        logger.info("Stored upload %s (%d bytes)", file_name, len(data))
        return StoredImage(path=f"{self.url_prefix}/{file_name}", fileName=file_name)
