"""Image upload to Cloudinary.

Multipart image fields are checked here (type and size) before they are
sent to the provider; callers only ever see the public ``secure_url``.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import HTTPException, UploadFile, status

from waysbucks.config import Settings, settings as default_settings


logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


class ImageUploadError(RuntimeError):
    pass


class ImageUploader(Protocol):
    def upload(self, file: BinaryIO, *, filename: str | None = None) -> str: ...

    def discard(self, url: str) -> None: ...


class CloudinaryUploader:
    def __init__(self, settings: Settings = default_settings):
        self.settings = settings
        self.folder = settings.upload_folder
        # URL -> public_id of assets uploaded through this instance.
        self._public_ids: dict[str, str] = {}

    def _configure(self) -> None:
        if not self.settings.cloudinary_configured:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Image storage is not configured",
            )
        cloudinary.config(
            cloud_name=self.settings.cloud_name,
            api_key=self.settings.api_key,
            api_secret=self.settings.api_secret,
            secure=True,
        )

    def upload(self, file: BinaryIO, *, filename: str | None = None) -> str:
        self._configure()
        try:
            result = cloudinary.uploader.upload(file, folder=self.folder, resource_type="image")
        except CloudinaryError as exc:
            logger.warning("cloudinary upload failed filename=%s error=%s", filename, exc)
            raise ImageUploadError("Image upload failed") from exc

        url = result.get("secure_url")
        if not url:
            raise ImageUploadError("Image upload failed")
        public_id = result.get("public_id")
        if public_id:
            self._public_ids[url] = public_id
        logger.info("uploaded image filename=%s folder=%s", filename, self.folder)
        return url

    def discard(self, url: str) -> None:
        """Remove an asset uploaded by this instance whose database write failed."""
        public_id = self._public_ids.pop(url, None)
        if public_id is None:
            return
        self._configure()
        try:
            cloudinary.uploader.destroy(public_id, resource_type="image")
        except CloudinaryError as exc:
            logger.warning("cloudinary destroy failed public_id=%s error=%s", public_id, exc)
            return
        logger.info("discarded image public_id=%s", public_id)


def validate_image(file: UploadFile, *, max_bytes: int | None = None) -> None:
    content_type = (file.content_type or "").lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported image type: {content_type or 'unknown'}",
        )

    limit = default_settings.max_upload_size_bytes if max_bytes is None else max_bytes
    stream = file.file
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)
    if size == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image file is empty")
    if size > limit:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Image exceeds {limit // (1024 * 1024)}MB limit",
        )


def upload_image(uploader: ImageUploader, file: UploadFile | None) -> str:
    """Validate and upload ``file``, returning its URL, or "" when no file was sent."""
    if file is None or not file.filename:
        return ""
    validate_image(file)
    return uploader.upload(file.file, filename=file.filename)


def discard_image(uploader: ImageUploader, url: str) -> None:
    if url:
        uploader.discard(url)
