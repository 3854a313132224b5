"""Error taxonomy for the editor API.

Every failure the service reports to a caller is an ``EditorError``
subclass. Each class carries a stable ``code`` and the HTTP status the
API layer answers with.

Tests:
    - tests/unit/test_errors.py
"""

from __future__ import annotations


class EditorError(Exception):
    """Base exception for editor API errors.

    Attributes:
        message: Human-readable error message
        details: Optional extra context for the caller
        code: Stable machine-readable error code
        status_code: HTTP status code returned by the API
    """

    code = "EditorError"
    status_code = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize editor error.

        Args:
            message: Error message.
            details: Extra context (optional).
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """String representation of the error."""
        if self.details:
            return f"[{self.code}] {self.message}: {self.details}"
        return f"[{self.code}] {self.message}"


class ValidationError(EditorError):
    """Bad input shape: missing fields, malformed payloads, wrong file type."""

    code = "ValidationError"
    status_code = 400


class IncompleteData(ValidationError):
    """Required design fields are missing."""

    code = "IncompleteData"

    def __init__(self, details: str = "text and finalImage are required") -> None:
        super().__init__("Incomplete data", details)


class InvalidImageFormat(ValidationError):
    """Inline image is not a well-formed base64 data URL."""

    code = "InvalidImageFormat"

    def __init__(
        self, details: str = "finalImage must be a valid base64 data URL"
    ) -> None:
        super().__init__("Invalid image format", details)


class UnsupportedFileType(ValidationError):
    """Uploaded file extension is not allowed for its category."""

    code = "UnsupportedFileType"

    def __init__(self, category: str, allowed: tuple[str, ...]) -> None:
        self.category = category
        self.allowed = allowed
        super().__init__(
            f"Unsupported {category} file type",
            f"Use one of: {', '.join(allowed)}",
        )


class NoFileUploaded(ValidationError):
    """Multipart request did not carry the expected file field."""

    code = "NoFileUploaded"

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f"No {field} file was uploaded",
            f'Send multipart form-data with a file in the "{field}" field',
        )


class ResourceExceeded(EditorError):
    """A request exceeded a configured resource limit."""

    code = "ResourceExceeded"
    status_code = 400


class FileTooLarge(ResourceExceeded):
    """Uploaded file is larger than the configured maximum."""

    code = "FileTooLarge"

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        super().__init__(
            "File too large",
            f"Maximum file size: {max_size / 1024 / 1024:g}MB",
        )


class TooManyFiles(ResourceExceeded):
    """More files than allowed accompany one request."""

    code = "TooManyFiles"

    def __init__(self, max_files: int) -> None:
        self.max_files = max_files
        super().__init__("Too many files", f"Maximum files per request: {max_files}")


class NotFound(EditorError):
    """Requested entity does not exist."""

    code = "NotFound"
    status_code = 404


class DesignNotFound(NotFound):
    """No design record with the given id."""

    code = "DesignNotFound"

    def __init__(self, design_id: int) -> None:
        self.design_id = design_id
        super().__init__("Design not found", f"No design with id {design_id}")


class StorageFailure(EditorError):
    """Write or delete I/O failed on the storage tree."""

    code = "StorageFailure"
    status_code = 500


class ImageSaveFailed(StorageFailure):
    """Decoded image could not be written to storage."""

    code = "ImageSaveFailed"

    def __init__(self, cause: str) -> None:
        super().__init__("Failed to save image", cause)
