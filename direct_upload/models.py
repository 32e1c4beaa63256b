"""
Models for direct upload.

Immutable dataclasses following Single Responsibility Principle.
"""
import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union


DEFAULT_API_URL = "https://www.xceleraterecruiting.com"
DEFAULT_ENDPOINT = "/api/uploadthing"
DEFAULT_STORAGE_HOST = "utfs.io"
DEFAULT_MIME_TYPE = "application/octet-stream"

FileRef = Union[str, Path]


@dataclass(frozen=True)
class UploadRequest:
    """Immutable description of one file to upload."""
    route_slug: str
    file_ref: FileRef
    file_name: str
    mime_type: str
    size_bytes: int

    @classmethod
    def from_path(
        cls,
        route_slug: str,
        path: FileRef,
        mime_type: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> "UploadRequest":
        """Build a request from a local file, guessing the mime type if needed."""
        file_path = Path(path)
        if not mime_type:
            mime_type, _ = mimetypes.guess_type(str(file_path))
        return cls(
            route_slug=route_slug,
            file_ref=file_path,
            file_name=file_name or file_path.name,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            size_bytes=file_path.stat().st_size,
        )


@dataclass(frozen=True)
class UploadCredential:
    """Presigned destination handed out by the negotiation phase."""
    url: str
    key: str


@dataclass(frozen=True)
class UploadResult:
    """Immutable result of a completed upload."""
    url: str
    name: str
    key: str


@dataclass(frozen=True)
class UploadConfig:
    """Immutable configuration for the upload handshake."""
    api_url: str = DEFAULT_API_URL
    endpoint: str = DEFAULT_ENDPOINT
    storage_host: str = DEFAULT_STORAGE_HOST
    fe_package: str = "uploadthing/client"
    be_adapter: str = "nextjs-app"
    timeout: Optional[float] = None  # None = transport default

    @property
    def callback_url(self) -> str:
        return f"{self.api_url.rstrip('/')}{self.endpoint}"

    def hosted_url(self, key: str) -> str:
        """Public retrieval URL for an uploaded object."""
        return f"https://{self.storage_host}/f/{key}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "UploadConfig":
        env = os.environ if environ is None else environ
        api_url = env.get("DIRECT_UPLOAD_API_URL") or env.get("API_URL") or DEFAULT_API_URL
        storage_host = env.get("DIRECT_UPLOAD_STORAGE_HOST") or DEFAULT_STORAGE_HOST

        timeout = None
        raw_timeout = env.get("DIRECT_UPLOAD_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ValueError(f"Invalid DIRECT_UPLOAD_TIMEOUT: {raw_timeout!r}") from exc

        return cls(api_url=api_url, storage_host=storage_host, timeout=timeout)
