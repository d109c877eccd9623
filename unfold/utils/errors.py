"""Exception types raised by the portfolio services."""


class PortfolioError(Exception):
    """Base class for errors surfaced to callers of the portfolio services."""

    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PortfolioError):
    """A referenced section, item, project, call to action, technology or role does not exist."""

    code = "not_found"


class ConflictError(PortfolioError):
    """A uniqueness rule would be broken (duplicate section type, vocabulary entry, key)."""

    code = "conflict"


class InvalidDataError(PortfolioError):
    """Input failed validation."""

    code = "validation"


class UploadValidationError(InvalidDataError):
    """An uploaded file was rejected (missing, wrong type, too large, bad extension)."""


class StorageError(PortfolioError):
    """The datastore file could not be read or written."""

    code = "storage"


class SchemaVersionError(StorageError):
    """The stored document was written by a newer schema than this code understands."""
