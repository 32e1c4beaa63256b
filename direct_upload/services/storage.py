"""
Storage Service - Single Responsibility: move bytes to object storage.

Covers the transfer (binary PUT to the presigned URL) and the resolution
of the public hosted URL. The storage side processes uploads eventually;
no availability check is made after the PUT.
"""
import logging
from urllib.parse import urlsplit

from ..errors import UpstreamTransferError
from ..models import UploadConfig, UploadCredential, UploadResult
from ..protocols import IAPIClient

logger = logging.getLogger(__name__)


def _redact(url: str) -> str:
    """Drop the query string (signature) from a presigned URL."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


class StorageService:
    """Phases 2 and 3 of the handshake."""

    def __init__(self, api_client: IAPIClient, config: UploadConfig):
        self._api = api_client
        self._config = config

    async def transfer(self, credential: UploadCredential, content: bytes, mime_type: str) -> None:
        """
        PUT raw bytes to the presigned destination.

        The destination URL carries its own authorization, so no bearer
        token is sent.

        Raises:
            UpstreamTransferError: storage answered with a non-2xx status
        """
        logger.debug("PUT %d bytes to %s", len(content), _redact(credential.url))
        response = await self._api.put(
            credential.url,
            content=content,
            headers={"Content-Type": mime_type},
        )
        if not response.is_success:
            logger.error(
                "Transfer rejected for key=%s: HTTP %s",
                credential.key,
                response.status_code,
            )
            raise UpstreamTransferError(response.status_code, response.text)

    def resolve(self, credential: UploadCredential, file_name: str) -> UploadResult:
        return UploadResult(
            url=self._config.hosted_url(credential.key),
            name=file_name,
            key=credential.key,
        )
