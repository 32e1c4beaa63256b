"""
Negotiation Service - Single Responsibility: obtain a presigned destination.

Flow:
1. POST file descriptor + route slug to the origin's upload handler
2. Normalize the response (object or single-element list)
3. Extract destination URL and object key
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

import httpx

from ..errors import MalformedNegotiationResponseError, UpstreamNegotiationError
from ..models import UploadConfig, UploadCredential, UploadRequest
from ..protocols import IAPIClient

logger = logging.getLogger(__name__)

URL_FIELDS = ("url", "presignedUrl")
KEY_FIELDS = ("key", "fileKey")


def normalize_negotiation_payload(payload: Any) -> Dict[str, Any]:
    """Collapse the known response shapes into one record."""
    if isinstance(payload, list):
        payload = payload[0] if payload else None
    if isinstance(payload, dict):
        return payload
    return {}


def _first_present(record: Dict[str, Any], fields) -> Any:
    for name in fields:
        value = record.get(name)
        if value:
            return value
    return None


def _is_absolute_http_url(value: Any) -> bool:
    # A relative URL would be merged onto the origin base_url
    if not isinstance(value, str):
        return False
    try:
        parsed = httpx.URL(value)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def credential_from_payload(payload: Any) -> UploadCredential:
    """
    Build an UploadCredential from a decoded negotiation response.

    Raises:
        MalformedNegotiationResponseError: no destination URL or object key
    """
    record = normalize_negotiation_payload(payload)
    url = _first_present(record, URL_FIELDS)
    if not url:
        raise MalformedNegotiationResponseError()
    if not _is_absolute_http_url(url):
        raise MalformedNegotiationResponseError("Unusable presigned URL returned from server")
    key = _first_present(record, KEY_FIELDS)
    if not key:
        raise MalformedNegotiationResponseError("No file key returned from server")
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        raise MalformedNegotiationResponseError(f"Unusable file key returned from server: {key!r}")
    return UploadCredential(url=url, key=str(key))


class NegotiationService:
    """Phase 1 of the handshake: ask the origin for a presigned URL."""

    def __init__(self, api_client: IAPIClient, config: UploadConfig):
        self._api = api_client
        self._config = config

    def build_body(self, request: UploadRequest) -> Dict[str, Any]:
        return {
            "files": [
                {
                    "name": request.file_name,
                    "size": request.size_bytes,
                    "type": request.mime_type,
                }
            ],
            "routeConfig": request.route_slug,
            "actionType": "upload",
            "callbackUrl": self._config.callback_url,
            "callbackSlug": request.route_slug,
            "input": {},
        }

    def build_headers(self, token: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
            "x-uploadthing-fe-package": self._config.fe_package,
            "x-uploadthing-be-adapter": self._config.be_adapter,
        }

    async def negotiate(self, request: UploadRequest, token: str) -> UploadCredential:
        """
        Request a presigned destination for one file.

        Args:
            request: File being uploaded
            token: Bearer token resolved by the caller

        Returns:
            UploadCredential for a single transfer
        """
        response = await self._api.post(
            self._config.endpoint,
            json=self.build_body(request),
            headers=self.build_headers(token),
        )

        if not response.is_success:
            logger.error(
                "Negotiation rejected for %s (route=%s): HTTP %s",
                request.file_name,
                request.route_slug,
                response.status_code,
            )
            raise UpstreamNegotiationError(response.status_code, response.text)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedNegotiationResponseError(
                "Upload request returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        try:
            credential = credential_from_payload(payload)
        except MalformedNegotiationResponseError as exc:
            exc.status_code = response.status_code
            exc.body = response.text
            raise

        logger.debug("Negotiated key=%s for %s", credential.key, request.file_name)
        return credential
