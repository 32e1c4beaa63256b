"""Services for direct upload."""
from .api_client import HTTPAPIClient
from .file_reader import LocalFileReader, resolve_file_ref
from .negotiation import (
    NegotiationService,
    credential_from_payload,
    normalize_negotiation_payload,
)
from .storage import StorageService

__all__ = [
    "HTTPAPIClient",
    "LocalFileReader",
    "resolve_file_ref",
    "NegotiationService",
    "credential_from_payload",
    "normalize_negotiation_payload",
    "StorageService",
]
