from __future__ import annotations

import asyncio
from typing import Generator

import httpx

AUTH_HEADER = "Authorization"


class TokenStore:
    """
    Holds the access token for one client instance.
    Empty until the first authentication; overwritten in place afterwards.
    `lock` serializes authentication so concurrent callers share one exchange.
    """

    def __init__(self, token: str = ""):
        self._token = token
        self.lock = asyncio.Lock()

    def has_token(self) -> bool:
        return bool(self._token)

    def get(self) -> str:
        return self._token

    def set(self, token: str) -> None:
        self._token = token or ""

    def clear(self) -> None:
        self._token = ""


class TokenAuth(httpx.Auth):
    """Attach the current token from a TokenStore to every outgoing request."""

    def __init__(self, store: TokenStore):
        self.store = store

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        token = self.store.get()
        if token:
            request.headers[AUTH_HEADER] = token
        yield request


__all__ = ["TokenStore", "TokenAuth", "AUTH_HEADER"]
