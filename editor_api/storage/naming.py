"""Collision-resistant file naming for asset storage.

Every stored file gets a name derived from a fresh uuid4, so two writes in
the same category never produce the same name, even for identical input.

Formats:
    uploads: {base}-{uuid4}{ext}
    designs: design-{uuid4}.{ext}

Examples:
    >>> from editor_api.storage.naming import sanitize_basename, generate_upload_filename
    >>> sanitize_basename("../fonts/My Font (Bold).ttf")
    'My-Font-Bold'
    >>> generate_upload_filename("Roboto.ttf")
    'Roboto-1b4e28ba-2fa1-41d2-883f-0016d3cca427.ttf'
"""

from __future__ import annotations

import mimetypes
import re
import uuid
from pathlib import PurePosixPath, PureWindowsPath

DEFAULT_EXTENSION = "png"

# Explicit entries keep the mapping stable across platforms' mime tables.
MIME_EXTENSIONS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/bmp": "bmp",
    "image/svg+xml": "svg",
    "image/x-icon": "ico",
    "image/tiff": "tiff",
    "image/avif": "avif",
}


def _basename(filename: str) -> str:
    # Strip directory components from either path flavour.
    return PurePosixPath(PureWindowsPath(filename).name).name


def original_extension(filename: str) -> str:
    """Return the extension of ``filename`` as sent, including the dot."""
    return PurePosixPath(_basename(filename)).suffix


def file_extension(filename: str) -> str:
    """Return the lowercased extension of ``filename`` including the dot.

    Used for allow-list checks; stored names keep the original case.

    Args:
        filename: Original filename, possibly with directory components.

    Returns:
        Extension such as ``".ttf"``, or ``""`` when there is none.
    """
    return PurePosixPath(_basename(filename)).suffix.lower()


def sanitize_basename(filename: str, max_length: int = 100) -> str:
    """Reduce an uploaded filename to a filesystem-safe base name.

    Rules:
        - Drop directory components and the extension
        - Replace runs of characters outside [A-Za-z0-9._-] with a hyphen
        - Strip leading/trailing hyphens and dots
        - Truncate to max_length
        - Fallback to 'file' if empty

    Args:
        filename: Raw filename from the client.
        max_length: Maximum base name length (default 100).

    Returns:
        Sanitized base name without extension.
    """
    stem = PurePosixPath(_basename(filename)).stem
    base = re.sub(r"[^A-Za-z0-9._-]+", "-", stem)
    base = base.strip("-.")[:max_length].rstrip("-.")
    return base or "file"


def generate_upload_filename(original_name: str, token: str | None = None) -> str:
    """Generate a unique stored name for an uploaded file.

    Args:
        original_name: Filename the client sent.
        token: Override unique token (defaults to a random uuid4).

    Returns:
        Name of the form ``{base}-{uuid4}{ext}``, keeping the extension
        exactly as the client sent it.
    """
    if token is None:
        token = str(uuid.uuid4())
    return f"{sanitize_basename(original_name)}-{token}{original_extension(original_name)}"


def generate_design_filename(extension: str, token: str | None = None) -> str:
    """Generate a unique stored name for a rendered design image.

    Args:
        extension: Extension without the leading dot.
        token: Override unique token (defaults to a random uuid4).

    Returns:
        Name of the form ``design-{uuid4}.{ext}``.
    """
    if token is None:
        token = str(uuid.uuid4())
    return f"design-{token}.{extension.lstrip('.')}"


def extension_for_mime(mime_type: str) -> str:
    """Map a MIME type to a file extension without the dot.

    Falls back to ``png`` when the type is unknown.
    """
    mime_type = mime_type.lower()
    if mime_type in MIME_EXTENSIONS:
        return MIME_EXTENSIONS[mime_type]
    guessed = mimetypes.guess_extension(mime_type, strict=False)
    if guessed:
        return guessed.lstrip(".")
    return DEFAULT_EXTENSION


def guess_mime(filename: str) -> str:
    """Guess a MIME type from a filename."""
    mime, _ = mimetypes.guess_type(_basename(filename), strict=False)
    return mime or "application/octet-stream"
