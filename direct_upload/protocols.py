"""
Protocols (Interfaces) for Dependency Inversion.

Following Interface Segregation Principle - small, focused interfaces.
"""
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .models import FileRef


@runtime_checkable
class IAuthProvider(Protocol):
    """Interface for bearer token resolution."""

    async def resolve(self) -> Optional[str]:
        """Return the current token or None when signed out."""
        ...


@runtime_checkable
class IFileReader(Protocol):
    """Interface for reading a local file reference into memory."""

    async def read(self, file_ref: FileRef) -> bytes:
        """Return the whole file content."""
        ...


@runtime_checkable
class IAPIClient(Protocol):
    """Interface for HTTP operations."""

    async def post(self, endpoint: str, json: Dict, headers: Optional[Dict[str, str]] = None) -> Any:
        """POST JSON to an endpoint beneath the base URL."""
        ...

    async def put(self, url: str, content: bytes, headers: Optional[Dict[str, str]] = None) -> Any:
        """PUT raw bytes to an absolute URL."""
        ...
