"""
Direct upload - presigned, direct-to-storage file uploads.

The file bytes never pass through the origin server: the origin only hands
out a short-lived presigned URL, the file is PUT straight to storage, and
the hosted URL is derived from the returned object key.

Usage:
    from direct_upload import UploadCoordinator, UploadRequest, set_auth_token

    # Bound once by the auth layer (sync or async getter)
    set_auth_token(session.get_token)

    async with UploadCoordinator() as coordinator:
        request = UploadRequest.from_path("evaluationUpload", "report.pdf")
        result = await coordinator.upload(request, on_progress=print)
        print(result.url)   # https://utfs.io/f/<key>

    # One-shot helper
    result = await upload_file(
        "evaluationUpload",
        "file:///tmp/report.pdf",
        "report.pdf",
        "application/pdf",
        48213,
    )
"""
from .auth import AuthTokenHolder, get_auth_holder, set_auth_token
from .coordinator import UploadCoordinator, upload_file
from .errors import (
    InvalidUploadRequestError,
    MalformedNegotiationResponseError,
    UnauthenticatedError,
    UploadError,
    UpstreamError,
    UpstreamNegotiationError,
    UpstreamTransferError,
)
from .models import UploadConfig, UploadCredential, UploadRequest, UploadResult

__version__ = "0.1.0"
__all__ = [
    # Main
    "UploadCoordinator",
    "upload_file",
    # Auth
    "AuthTokenHolder",
    "get_auth_holder",
    "set_auth_token",
    # Models
    "UploadConfig",
    "UploadCredential",
    "UploadRequest",
    "UploadResult",
    # Errors
    "UploadError",
    "InvalidUploadRequestError",
    "UnauthenticatedError",
    "UpstreamError",
    "UpstreamNegotiationError",
    "UpstreamTransferError",
    "MalformedNegotiationResponseError",
]
