from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from typing import Iterable, List

import cloudinary.exceptions
import cloudinary.uploader
from django.conf import settings
from PIL import Image
from rest_framework import serializers, status
from rest_framework.exceptions import APIException

logger = logging.getLogger(__name__)

MAX_IMAGE_FILES = 6
MAX_FILE_BYTES = 5 * 1024 * 1024  # 5 MB
ALLOWED_CONTENT_TYPES = {"image/png", "image/jpeg", "image/webp"}
UPLOAD_FOLDER = "hotels"


class ImageHostNotConfigured(RuntimeError):
    pass


class ImageUploadFailed(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Error uploading images."
    default_code = "image_upload_failed"


@dataclass(frozen=True)
class CloudinaryConfig:
    cloud_name: str
    api_key: str
    api_secret: str

    @classmethod
    def from_settings(cls) -> "CloudinaryConfig":
        return cls(
            cloud_name=getattr(settings, "CLOUDINARY_CLOUD_NAME", ""),
            api_key=getattr(settings, "CLOUDINARY_API_KEY", ""),
            api_secret=getattr(settings, "CLOUDINARY_API_SECRET", ""),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


def validate_image_files(files: List) -> None:
    """Reject oversized, non-image or too many uploads before anything leaves the server."""
    if len(files) > MAX_IMAGE_FILES:
        raise serializers.ValidationError(
            {"imageFiles": f"Upload at most {MAX_IMAGE_FILES} images."}
        )

    for image_file in files:
        if image_file.size > MAX_FILE_BYTES:
            raise serializers.ValidationError(
                {"imageFiles": f"{image_file.name} must be 5 MB or smaller."}
            )

        content_type = image_file.content_type or mimetypes.guess_type(image_file.name)[0]
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise serializers.ValidationError(
                {"imageFiles": "Unsupported file type. Upload PNG, JPEG, or WebP."}
            )

        try:
            Image.open(image_file).verify()
        except (OSError, SyntaxError, ValueError):
            raise serializers.ValidationError(
                {"imageFiles": f"{image_file.name} is not a valid image."}
            )
        finally:
            image_file.seek(0)


class ImageUploader:
    """Push hotel photos to Cloudinary and hand back their public URLs."""

    def __init__(self, config: CloudinaryConfig):
        if not config.is_complete:
            raise ImageHostNotConfigured("Cloudinary credentials are not configured.")
        self.config = config

    def upload(self, image_file) -> str:
        try:
            result = cloudinary.uploader.upload(
                image_file,
                folder=UPLOAD_FOLDER,
                resource_type="image",
                cloud_name=self.config.cloud_name,
                api_key=self.config.api_key,
                api_secret=self.config.api_secret,
            )
        except cloudinary.exceptions.Error as exc:
            logger.exception("Cloudinary upload failed for %s: %s", image_file.name, exc)
            raise ImageUploadFailed() from exc

        url = result.get("secure_url") or result.get("url")
        if not url:
            logger.error("Cloudinary returned no URL for %s", image_file.name)
            raise ImageUploadFailed()
        logger.info("Uploaded %s to %s", image_file.name, url)
        return url

    def upload_all(self, files: Iterable) -> List[str]:
        return [self.upload(image_file) for image_file in files]


def get_image_uploader() -> ImageUploader:
    return ImageUploader(CloudinaryConfig.from_settings())
