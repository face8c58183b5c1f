"""Screenshot uploads: validated before any row is written, served from /uploads."""

from __future__ import annotations

import io
import logging
import random
import re
import time
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from garden.errors import UnsupportedUpload, UploadTooLarge

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"
_ALLOWED_TYPES_RE = re.compile(r"jpeg|jpg|png|gif|webp")
# Pillow format names accepted for the allowed extensions.
_ALLOWED_FORMATS = {"JPEG", "PNG", "GIF", "WEBP"}


def _has_file(upload: UploadFile | None) -> bool:
    return upload is not None and bool(upload.filename)


def validate_image(filename: str, content_type: str | None, data: bytes, max_bytes: int) -> str:
    """Check name, declared type, size and actual content. Returns the extension."""
    extension = Path(filename).suffix.lower()
    if not _ALLOWED_TYPES_RE.search(extension) or not _ALLOWED_TYPES_RE.search(content_type or ""):
        raise UnsupportedUpload("Only image files are allowed!")
    if len(data) > max_bytes:
        raise UploadTooLarge(f"Image exceeds the {max_bytes // (1024 * 1024)}MB limit")
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise UnsupportedUpload("Only image files are allowed!", detail=str(e)) from e
    if image_format not in _ALLOWED_FORMATS:
        raise UnsupportedUpload("Only image files are allowed!", detail=f"format {image_format}")
    return extension


def unique_filename(extension: str, rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    return f"project-{int(time.time() * 1000)}-{rng.randrange(10**9)}{extension}"


def save_upload(upload: UploadFile | None, uploads_dir: Path, max_bytes: int) -> str | None:
    """Validate and store an uploaded image. Returns its public path, or None if absent."""
    if not _has_file(upload):
        return None
    data = upload.file.read(max_bytes + 1)
    extension = validate_image(upload.filename, upload.content_type, data, max_bytes)

    uploads_dir.mkdir(parents=True, exist_ok=True)
    name = unique_filename(extension)
    (uploads_dir / name).write_bytes(data)
    logger.info("Stored upload %s (%d bytes)", name, len(data))
    return f"{UPLOADS_URL_PREFIX}/{name}"


def remove_upload(public_path: str | None, uploads_dir: Path) -> bool:
    """Delete a stored upload by its public path. Missing files are not an error."""
    if not public_path or not public_path.startswith(f"{UPLOADS_URL_PREFIX}/"):
        return False
    target = uploads_dir / Path(public_path).name
    try:
        target.unlink()
    except FileNotFoundError:
        return False
    logger.info("Removed upload %s", target.name)
    return True
