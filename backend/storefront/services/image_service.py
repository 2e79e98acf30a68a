"""
Image upload helpers: validation, collision-free storage keys, URL -> object name.
"""

import logging
import random
import string
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable
from urllib.parse import urlparse

from fastapi import UploadFile

from storefront.core.config import get_settings

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
MAX_PARALLEL_UPLOADS = 4


class ImageValidationError(Exception):
    """Raised when an uploaded file is not an acceptable image."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ImageFile:
    """An uploaded file read into memory."""

    def __init__(self, filename: str, content_type: str, data: bytes) -> None:
        self.filename = filename or ""
        self.content_type = content_type or ""
        self.data = data

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    async def from_upload(cls, upload: UploadFile, max_bytes: int | None = None) -> "ImageFile":
        """
        Read an upload, keeping at most one byte past the size limit.
        An oversized file is rejected without buffering the rest of it.
        """
        limit = _limit(max_bytes)
        filename = upload.filename or ""
        if upload.size is not None and upload.size > limit:
            raise _too_large(filename, limit)
        data = await upload.read(limit + 1)
        return cls(filename, upload.content_type or "", data)


def _limit(max_bytes: int | None) -> int:
    return max_bytes if max_bytes is not None else get_settings().max_image_bytes


def _too_large(filename: str, limit: int) -> ImageValidationError:
    return ImageValidationError(f"File {filename} is too large (max {limit // (1024 * 1024)}MB)")


def validate_image(image: ImageFile, max_bytes: int | None = None) -> None:
    limit = _limit(max_bytes)
    if not image.content_type.startswith("image/"):
        raise ImageValidationError(f"File {image.filename} is not an image")
    if image.size > limit:
        raise _too_large(image.filename, limit)


def validate_images(images: list[ImageFile], max_bytes: int | None = None) -> None:
    """Validate a whole batch before anything is uploaded."""
    if not images:
        raise ImageValidationError("No files provided")
    for image in images:
        validate_image(image, max_bytes)


def _random_base36(length: int = 11) -> str:
    return "".join(random.choice(_BASE36) for _ in range(length))


def _extension(filename: str) -> str:
    # A name without a dot is its own extension
    return filename.rsplit(".", 1)[-1] if filename else ""


def make_object_key(filename: str) -> str:
    """Account image key: ``<epoch-ms>-<random>.<ext>``."""
    return f"{int(time.time() * 1000)}-{_random_base36()}.{_extension(filename)}"


def make_ad_object_key(filename: str) -> str:
    """Ad image key: ``<random>_<epoch-ms>.<ext>``."""
    return f"{_random_base36()}_{int(time.time() * 1000)}.{_extension(filename)}"


def filename_from_url(url: str) -> str:
    """Return the storage object name a public URL points at ('' if none)."""
    if not url:
        return ""
    try:
        path = urlparse(url).path
    except ValueError:
        path = url
    name = path.split("/")[-1] if path else url.split("/")[-1]
    return name


def filenames_from_urls(urls: list[str] | None) -> list[str]:
    return [n for n in (filename_from_url(u) for u in (urls or [])) if n]


def upload_all(
    images: list[ImageFile],
    upload_one: Callable[[ImageFile], str],
) -> list[str]:
    """Upload images concurrently, returning their public URLs in input order."""
    if len(images) == 1:
        return [upload_one(images[0])]
    with ThreadPoolExecutor(max_workers=min(MAX_PARALLEL_UPLOADS, len(images))) as pool:
        urls = list(pool.map(upload_one, images))
    logger.info("Uploaded %d images", len(urls))
    return urls
