"""Local file reader: resolve a file reference and load its bytes."""
import asyncio
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

from ..models import FileRef


def resolve_file_ref(file_ref: FileRef) -> Path:
    """Turn a path or ``file://`` URI into a filesystem path."""
    if isinstance(file_ref, Path):
        return file_ref
    if file_ref.startswith("file:"):
        parts = urlsplit(file_ref)
        return Path(url2pathname(parts.path))
    return Path(file_ref)


class LocalFileReader:
    """Reads whole files off the event loop."""

    async def read(self, file_ref: FileRef) -> bytes:
        path = resolve_file_ref(file_ref)
        # Run in thread pool to avoid blocking the event loop
        return await asyncio.to_thread(path.read_bytes)
