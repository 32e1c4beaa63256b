"""
Upload Coordinator - Drives the direct-to-storage upload handshake.

Flow:
1. Negotiate a presigned URL with the origin server (NegotiationService)
2. PUT the file bytes straight to storage (StorageService)
3. Resolve the hosted URL from the object key

Every call negotiates a fresh credential; nothing is retried. The first
failure aborts the call and propagates to the caller.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from .auth import get_auth_holder
from .errors import InvalidUploadRequestError, UnauthenticatedError
from .models import FileRef, UploadConfig, UploadRequest, UploadResult
from .protocols import IAuthProvider, IFileReader
from .services.api_client import HTTPAPIClient
from .services.file_reader import LocalFileReader
from .services.negotiation import NegotiationService
from .services.storage import StorageService
from .utils import progress
from .utils.progress import ProgressCallback, ProgressReporter

logger = logging.getLogger(__name__)


def _validate(request: UploadRequest) -> None:
    if not request.file_name:
        raise InvalidUploadRequestError("file_name must not be empty")
    if request.size_bytes <= 0:
        raise InvalidUploadRequestError(
            f"size_bytes must be positive, got {request.size_bytes} for {request.file_name}"
        )


class UploadCoordinator:
    """
    Coordinates single-file direct uploads using injected services.

    Usage:
        set_auth_token(session.get_token)

        async with UploadCoordinator(UploadConfig.from_env()) as coordinator:
            request = UploadRequest.from_path("evaluationUpload", path)
            result = await coordinator.upload(request, on_progress=print)
            print(result.url)
    """

    def __init__(
        self,
        config: Optional[UploadConfig] = None,
        auth: Optional[IAuthProvider] = None,
        file_reader: Optional[IFileReader] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize coordinator with dependencies.

        Args:
            config: Endpoint configuration (defaults to production origin)
            auth: Token provider (defaults to the process-wide holder)
            file_reader: Local file reader
            transport: Optional httpx transport (tests, proxies)
        """
        self._config = config or UploadConfig()
        self._auth = auth or get_auth_holder()
        self._file_reader = file_reader or LocalFileReader()
        self._transport = transport

        # Services (initialized in __aenter__)
        self._api_client: Optional[HTTPAPIClient] = None
        self._negotiation: Optional[NegotiationService] = None
        self._storage: Optional[StorageService] = None

    @property
    def config(self) -> UploadConfig:
        return self._config

    async def __aenter__(self):
        self._api_client = HTTPAPIClient(
            self._config.api_url,
            timeout=self._config.timeout,
            transport=self._transport,
        )
        await self._api_client.__aenter__()

        self._negotiation = NegotiationService(self._api_client, self._config)
        self._storage = StorageService(self._api_client, self._config)
        return self

    async def __aexit__(self, *args):
        if self._api_client:
            await self._api_client.__aexit__(*args)
            self._api_client = None
        self._negotiation = None
        self._storage = None

    async def upload(
        self,
        request: UploadRequest,
        on_progress: Optional[ProgressCallback] = None,
    ) -> UploadResult:
        """
        Upload one file through negotiate -> transfer -> resolve.

        Args:
            request: File to upload
            on_progress: Optional callback receiving percent values 0..100

        Returns:
            UploadResult with the hosted URL

        Raises:
            InvalidUploadRequestError: empty name or non-positive size
            UnauthenticatedError: no token available (no network call made)
            UpstreamNegotiationError / MalformedNegotiationResponseError
            UpstreamTransferError
        """
        if self._negotiation is None or self._storage is None:
            raise RuntimeError("UploadCoordinator not initialized. Use 'async with' context.")

        _validate(request)

        token = await self._auth.resolve()
        if not token:
            raise UnauthenticatedError()

        reporter = ProgressReporter(on_progress)
        logger.debug(
            "Upload started: file=%s route=%s size=%d",
            request.file_name,
            request.route_slug,
            request.size_bytes,
        )

        # 1. Negotiate
        await reporter.report(progress.NEGOTIATING)
        credential = await self._negotiation.negotiate(request, token)
        await reporter.report(progress.NEGOTIATED)

        # 2. Transfer
        content = await self._file_reader.read(request.file_ref)
        await reporter.report(progress.TRANSFERRING)
        await self._storage.transfer(credential, content, request.mime_type)
        await reporter.report(progress.TRANSFERRED)

        # 3. Resolve
        result = self._storage.resolve(credential, request.file_name)
        await reporter.report(progress.COMPLETE)

        logger.info("Uploaded %s -> %s", request.file_name, result.url)
        return result


async def upload_file(
    route_slug: str,
    file_ref: FileRef,
    file_name: str,
    mime_type: str,
    size_bytes: int,
    on_progress: Optional[ProgressCallback] = None,
    config: Optional[UploadConfig] = None,
) -> UploadResult:
    """One-shot upload using the process-wide auth token getter."""
    request = UploadRequest(
        route_slug=route_slug,
        file_ref=file_ref,
        file_name=file_name,
        mime_type=mime_type,
        size_bytes=size_bytes,
    )
    async with UploadCoordinator(config or UploadConfig.from_env()) as coordinator:
        return await coordinator.upload(request, on_progress)
