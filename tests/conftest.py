"""Shared fixtures: fake origin + storage endpoints on an httpx MockTransport."""
from typing import Any, Callable, List, Optional

import httpx
import pytest

from direct_upload.auth import AuthTokenHolder
from direct_upload.models import UploadConfig, UploadRequest

API_URL = "https://api.example.test"
PRESIGNED_URL = "https://bucket.s3.example.test/upload/abc?X-Amz-Signature=secret"


class FakeServer:
    """Routes POSTs to the negotiation handler and PUTs to the storage handler."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.negotiation_status = 200
        self.negotiation_payload: Any = {"url": PRESIGNED_URL, "key": "abc"}
        self.negotiation_text: Optional[str] = None
        self.transfer_status = 200
        self.transfer_text = ""
        self.on_negotiate: Optional[Callable[[int], Any]] = None

    @property
    def negotiations(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    @property
    def transfers(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "PUT"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if request.method == "POST":
            payload = self.negotiation_payload
            if self.on_negotiate is not None:
                payload = self.on_negotiate(len(self.negotiations))
            if self.negotiation_text is not None:
                return httpx.Response(self.negotiation_status, text=self.negotiation_text)
            return httpx.Response(self.negotiation_status, json=payload)
        if request.method == "PUT":
            return httpx.Response(self.transfer_status, text=self.transfer_text)
        return httpx.Response(405)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def config():
    return UploadConfig(api_url=API_URL, storage_host="files.example.test")


@pytest.fixture
def auth():
    async def get_token():
        return "token-123"

    return AuthTokenHolder(get_token)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "evaluation.pdf"
    path.write_bytes(b"%PDF-1.4 fake evaluation")
    return path


@pytest.fixture
def upload_request(sample_file):
    return UploadRequest.from_path("evaluationUpload", sample_file)
