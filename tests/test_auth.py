"""Tests for the auth token holder."""
import pytest

from direct_upload import auth
from direct_upload.auth import AuthTokenHolder, get_auth_holder, set_auth_token


@pytest.fixture(autouse=True)
def reset_default_holder():
    yield
    set_auth_token(None)


@pytest.mark.asyncio
async def test_default_holder_has_no_token():
    assert await AuthTokenHolder().resolve() is None


@pytest.mark.asyncio
async def test_async_getter():
    async def getter():
        return "abc"

    assert await AuthTokenHolder(getter).resolve() == "abc"


@pytest.mark.asyncio
async def test_sync_getter():
    assert await AuthTokenHolder(lambda: "abc").resolve() == "abc"


@pytest.mark.asyncio
async def test_empty_token_counts_as_missing():
    assert await AuthTokenHolder(lambda: "").resolve() is None


@pytest.mark.asyncio
async def test_rebind_on_sign_out():
    holder = AuthTokenHolder(lambda: "abc")
    holder.bind(None)
    assert await holder.resolve() is None
    holder.bind(lambda: "xyz")
    assert await holder.resolve() == "xyz"


@pytest.mark.asyncio
async def test_set_auth_token_binds_process_holder():
    set_auth_token(lambda: "global-token")
    assert get_auth_holder() is auth._default_holder
    assert await get_auth_holder().resolve() == "global-token"


@pytest.mark.asyncio
async def test_rebind_does_not_affect_resolved_token():
    holder = AuthTokenHolder()

    async def getter():
        holder.bind(None)
        return "captured"

    holder.bind(getter)
    assert await holder.resolve() == "captured"
    assert await holder.resolve() is None
