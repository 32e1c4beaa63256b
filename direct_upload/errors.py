"""Error taxonomy for the upload handshake."""
from typing import Optional


class UploadError(RuntimeError):
    """Base class for every failure surfaced by the coordinator."""


class InvalidUploadRequestError(UploadError, ValueError):
    """Raised when a request fails its preconditions before any I/O."""


class UnauthenticatedError(UploadError):
    """Raised when no bearer token is available."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class UpstreamError(UploadError):
    """Non-success answer from a remote endpoint."""

    phase = "Request"

    def __init__(self, status_code: Optional[int], body: str = "", message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"{self.phase} failed ({status_code}): {body}")


class UpstreamNegotiationError(UpstreamError):
    """Origin server rejected the negotiation request."""

    phase = "Upload request"


class UpstreamTransferError(UpstreamError):
    """Storage endpoint rejected the binary PUT."""

    phase = "File upload"


class MalformedNegotiationResponseError(UpstreamError):
    """Negotiation answered but carried no usable destination."""

    phase = "Upload request"

    def __init__(
        self,
        message: str = "No presigned URL returned from server",
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(status_code, body, message=message)
