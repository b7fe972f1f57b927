"""
Shared repository plumbing.

Every authenticated call reads the token once from the session store, fails
locally when it is missing and otherwise runs the blocking gateway call off
the event loop.
"""

import asyncio
from typing import Any, Callable, TypeVar

from cineclient.api.errors import UnauthenticatedError
from cineclient.api.gateway import ApiGateway
from cineclient.state.session_store import SessionStore
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def bearer(token: str) -> str:
    return f"Bearer {token}"


class Repository:
    def __init__(self, gateway: ApiGateway, session_store: SessionStore) -> None:
        self._gateway = gateway
        self._session_store = session_store

    async def _authorization(self) -> str:
        """
        Build the Authorization header from the latest persisted token.

        Raises:
            UnauthenticatedError: If no token is stored.
        """
        token = await self._session_store.read_token()
        if not token:
            logger.warning(
                "Authenticated call attempted without a session",
                extra={"repository": type(self).__name__},
            )
            raise UnauthenticatedError()
        return bearer(token)

    async def _authenticated(self, call: Callable[..., T], *args: Any) -> T:
        authorization = await self._authorization()
        return await asyncio.to_thread(call, authorization, *args)

    async def _anonymous(self, call: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(call, *args)
