"""JSON file datastore holding the whole site document."""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional
from pydantic import ValidationError
from unfold.config import get_settings
from unfold.models.portfolio_models import PortfolioData
from unfold.services.schema_migration import migrate_document
from unfold.services.seed_loader import SeedLoader
from unfold.utils.errors import StorageError

logger = logging.getLogger(__name__)

# One lock per data file, shared by every DataStore pointing at it
_file_locks: Dict[Path, threading.RLock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _file_locks_guard:
        if key not in _file_locks:
            _file_locks[key] = threading.RLock()
        return _file_locks[key]


def _migrate(raw: Dict[str, Any], source: Optional[Path]) -> Dict[str, Any]:
    try:
        return migrate_document(raw)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        logger.error("Malformed portfolio document in %s: %r", source, e)
        raise StorageError(f"Malformed portfolio document: {e!r}") from e


class DataStore:
    """
    Read and write the site document.

    Nothing is cached: every read goes back to the file. Mutations should go
    through :meth:`transaction`, which serializes read-modify-write cycles on
    the same file within this process.
    """

    def __init__(self, data_file: Path, seed_file: Optional[Path] = None):
        """
        Initialize the datastore.

        Args:
            data_file: Path of the JSON document
            seed_file: YAML document used when ``data_file`` does not exist yet
        """
        self.data_file = Path(data_file)
        self.seed_file = Path(seed_file) if seed_file else None
        self._lock = _lock_for(self.data_file)

    def read(self) -> PortfolioData:
        """
        Load, migrate and validate the document.

        Returns:
            PortfolioData: The current site document

        Raises:
            StorageError: If the file can't be read or doesn't hold a valid document
        """
        with self._lock:
            if not self.data_file.exists():
                self._initialize_from_seed()

            try:
                with open(self.data_file, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error("Error reading portfolio data from %s: %s", self.data_file, e)
                raise StorageError("Failed to read portfolio data") from e

            if not isinstance(raw, dict):
                raise StorageError("Failed to read portfolio data: document is not an object")

            migrated = _migrate(raw, self.data_file)
            try:
                return PortfolioData.model_validate(migrated)
            except ValidationError as e:
                logger.error("Invalid portfolio data in %s: %s", self.data_file, e)
                raise StorageError(f"Invalid portfolio data: {e}") from e

    def write(self, data: PortfolioData) -> None:
        """
        Persist the whole document, replacing the file atomically.

        Raises:
            StorageError: If the file can't be written
        """
        content = json.dumps(data.to_document(), indent=2, ensure_ascii=False)
        with self._lock:
            try:
                self.data_file.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(
                    dir=str(self.data_file.parent),
                    prefix=f".{self.data_file.name}.",
                    suffix=".tmp",
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as f:
                        f.write(content)
                    os.replace(tmp_path, self.data_file)
                except BaseException:
                    if os.path.exists(tmp_path):
                        os.unlink(tmp_path)
                    raise
            except OSError as e:
                logger.error("Error writing portfolio data to %s: %s", self.data_file, e)
                raise StorageError("Failed to write portfolio data") from e

    @contextmanager
    def transaction(self) -> Iterator[PortfolioData]:
        """
        Read the document, hand it to the caller, and write it back.

        If the block raises, nothing is written.

        Yields:
            PortfolioData: Mutable site document
        """
        with self._lock:
            data = self.read()
            yield data
            self.write(data)

    def _initialize_from_seed(self) -> None:
        if self.seed_file is None:
            raise StorageError(f"Portfolio data file not found: {self.data_file}")
        try:
            seed = SeedLoader(self.seed_file).load_seed()
        except (FileNotFoundError, ValueError) as e:
            raise StorageError(f"Failed to initialise portfolio data: {e}") from e

        try:
            data = PortfolioData.model_validate(_migrate(seed, self.seed_file))
        except ValidationError as e:
            raise StorageError(f"Invalid seed document {self.seed_file}: {e}") from e
        self.write(data)
        logger.info("Initialised %s from seed %s", self.data_file, self.seed_file)


# Singleton instance
_datastore: Optional[DataStore] = None


def get_datastore() -> DataStore:
    """
    Get or create the datastore singleton for the configured data file.

    Returns:
        DataStore: The datastore instance
    """
    global _datastore
    if _datastore is None:
        settings = get_settings()
        _datastore = DataStore(settings.data_file, settings.seed_file)
    return _datastore
