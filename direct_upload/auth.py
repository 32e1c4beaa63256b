"""
Auth token holder.

The authentication subsystem binds a zero-argument token getter once at
startup (and again on login/logout). The coordinator resolves it once at the
start of every negotiation.
"""
from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

TokenGetter = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]


async def _no_token() -> Optional[str]:
    return None


class AuthTokenHolder:
    """Single rebindable slot for the token getter."""

    def __init__(self, getter: Optional[TokenGetter] = None):
        self._getter: TokenGetter = getter or _no_token

    def bind(self, getter: Optional[TokenGetter]) -> None:
        """Swap the getter; ``None`` restores the signed-out default."""
        self._getter = getter or _no_token
        logger.debug("Auth token getter rebound (signed_in=%s)", getter is not None)

    async def resolve(self) -> Optional[str]:
        getter = self._getter
        token = getter()
        if inspect.isawaitable(token):
            token = await token
        return token or None


_default_holder = AuthTokenHolder()


def get_auth_holder() -> AuthTokenHolder:
    return _default_holder


def set_auth_token(getter: Optional[TokenGetter]) -> None:
    """Bind the process-wide token getter used by every coordinator."""
    _default_holder.bind(getter)
