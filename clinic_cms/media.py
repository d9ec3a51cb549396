"""
Media host abstraction for Cloudinary and in-memory testing.
"""

from __future__ import annotations

import base64
import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional, Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

logger = logging.getLogger(__name__)


class MediaUploadError(Exception):
    """Raised when the media host rejects or fails an upload or delete."""


@dataclass
class MediaAsset:
    public_id: str
    url: str
    resource_type: str = "image"
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    bytes: Optional[int] = None
    duration: Optional[float] = None

    def as_ref(self) -> dict:
        """The ``{public_id, url}`` pair stored on content documents."""
        return {"public_id": self.public_id, "url": self.url}

    def as_dict(self) -> dict:
        payload = {
            "public_id": self.public_id,
            "url": self.url,
            "width": self.width,
            "height": self.height,
            "format": self.format,
            "bytes": self.bytes,
        }
        if self.resource_type == "video":
            payload["duration"] = self.duration
        return payload


class MediaClient(Protocol):
    """Defines the operations the API needs from the media host."""

    def upload(
        self,
        data: bytes,
        *,
        folder: str,
        content_type: str,
        resource_type: str = "image",
    ) -> MediaAsset:
        ...

    def destroy(self, public_id: str, *, resource_type: str = "image") -> None:
        ...


@dataclass
class InMemoryMediaClient:
    """Test double for media host interactions."""

    base_url: str = "https://media.example.test"
    stored_objects: dict = field(default_factory=dict)
    destroyed: list = field(default_factory=list)
    fail_uploads: bool = False

    def upload(
        self,
        data: bytes,
        *,
        folder: str,
        content_type: str,
        resource_type: str = "image",
    ) -> MediaAsset:
        if self.fail_uploads:
            raise MediaUploadError("upload rejected")
        public_id = f"{folder}/{uuid.uuid4().hex[:20]}"
        self.stored_objects[public_id] = data
        subtype = content_type.split("/")[-1] if content_type else "bin"
        return MediaAsset(
            public_id=public_id,
            url=f"{self.base_url}/{resource_type}/upload/{public_id}.{subtype}",
            resource_type=resource_type,
            format=subtype,
            bytes=len(data),
            duration=0.0 if resource_type == "video" else None,
        )

    def destroy(self, public_id: str, *, resource_type: str = "image") -> None:
        self.destroyed.append(public_id)
        self.stored_objects.pop(public_id, None)


class CloudinaryMediaClient:
    """
    Cloudinary-backed client. Files are sent inline as ``data:`` URIs so
    nothing touches the (read-only) serverless filesystem.
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        root_folder: Optional[str] = None,
    ):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )
        self.root_folder = (root_folder or "").strip("/")

    def _folder(self, folder: str) -> str:
        if self.root_folder:
            return f"{self.root_folder}/{folder}"
        return folder

    def upload(
        self,
        data: bytes,
        *,
        folder: str,
        content_type: str,
        resource_type: str = "image",
    ) -> MediaAsset:
        mime = content_type or ("video/mp4" if resource_type == "video" else "image/jpeg")
        data_uri = f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
        target_folder = self._folder(folder)
        logger.info(
            "Uploading to Cloudinary folder=%s mimetype=%s size=%d",
            target_folder,
            mime,
            len(data),
        )
        try:
            result = cloudinary.uploader.upload(
                data_uri,
                folder=target_folder,
                resource_type="video" if resource_type == "video" else "auto",
                quality="auto",
                fetch_format="auto",
            )
        except CloudinaryError as exc:
            raise MediaUploadError(f"Failed to upload {resource_type}: {exc}") from exc
        logger.info("Cloudinary upload successful public_id=%s", result.get("public_id"))
        return MediaAsset(
            public_id=result["public_id"],
            url=result["secure_url"],
            resource_type=resource_type,
            width=result.get("width"),
            height=result.get("height"),
            format=result.get("format"),
            bytes=result.get("bytes"),
            duration=result.get("duration"),
        )

    def destroy(self, public_id: str, *, resource_type: str = "image") -> None:
        try:
            cloudinary.uploader.destroy(public_id, resource_type=resource_type)
        except CloudinaryError as exc:
            raise MediaUploadError(f"Failed to delete {public_id}: {exc}") from exc
