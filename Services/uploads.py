# Services/uploads.py
"""Car image uploads, stored under public/uploads and served statically."""
import logging
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

import paths
from config import MAX_IMAGE_SIZE_KB
from errors import InvalidImageError

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/jpg"}


async def read_image(image: Optional[UploadFile]) -> Optional[bytes]:
    """Check an uploaded image and return its bytes, or None when nothing was sent."""
    if image is None or not image.filename:
        return None
    if image.content_type not in ALLOWED_CONTENT_TYPES:
        raise InvalidImageError("Invalid Image. Only images with .png, .jpg are allowed!")
    content = await image.read()
    if len(content) > MAX_IMAGE_SIZE_KB * 1024:
        raise InvalidImageError(f"Image size limit exceeds {MAX_IMAGE_SIZE_KB} KB")
    return content


def save_image(original_name: str, content: bytes) -> str:
    """Write the image as `<epoch-ms>-<name>` and return the stored filename."""
    filename = f"{int(time.time() * 1000)}-{Path(original_name).name}"
    paths.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    (paths.UPLOAD_DIR / filename).write_bytes(content)
    logger.debug("Saved upload %s (%d bytes)", filename, len(content))
    return filename


def discard_image(filename: Optional[str]) -> None:
    if filename:
        (paths.UPLOAD_DIR / filename).unlink(missing_ok=True)
